import pytest

from command_hooks.execution import (
    EventDeduplicator,
    generate_session_event_id,
    generate_tool_event_id,
)

# --- event ids ---


def test_tool_event_id_format():
    assert generate_tool_event_id("lint", "write", "ses_1", "after") == "lint:write:ses_1:after"
    assert generate_tool_event_id("lint", "write", "ses_1", "after", "call_9") == "lint:write:ses_1:after:call_9"


def test_session_event_id_format():
    assert generate_session_event_id("hello", "session.start", "ses_1") == "hello:session.start:ses_1"


def test_tool_event_id_changes_with_each_component():
    base = ("h", "bash", "s", "before", "c")
    reference = generate_tool_event_id(*base)
    for index in range(len(base)):
        changed = list(base)
        changed[index] = changed[index] + "x"
        assert generate_tool_event_id(*changed) != reference


def test_session_event_id_changes_with_each_component():
    base = ("h", "session.start", "s")
    reference = generate_session_event_id(*base)
    for index in range(len(base)):
        changed = list(base)
        changed[index] = changed[index] + "x"
        assert generate_session_event_id(*changed) != reference


def test_event_ids_are_deterministic():
    assert generate_tool_event_id("a", "b", "c", "after", "d") == generate_tool_event_id("a", "b", "c", "after", "d")


# --- EventDeduplicator ---


def test_mark_and_check():
    dedup = EventDeduplicator()
    assert not dedup.has_processed("e1", "s1")
    dedup.mark_processed("e1", "s1")
    assert dedup.has_processed("e1", "s1")
    assert dedup.tracked_count == 1


def test_sessions_are_separate():
    dedup = EventDeduplicator()
    dedup.mark_processed("e1", "s1")
    assert not dedup.has_processed("e1", "s2")


def test_global_bucket_when_no_session():
    dedup = EventDeduplicator()
    dedup.mark_processed("e1")
    assert dedup.has_processed("e1")
    assert not dedup.has_processed("e1", "s1")


def test_mark_is_idempotent():
    dedup = EventDeduplicator()
    dedup.mark_processed("e1", "s1")
    dedup.mark_processed("e1", "s1")
    assert dedup.tracked_count == 1


def test_clear():
    dedup = EventDeduplicator()
    dedup.mark_processed("e1", "s1")
    dedup.mark_processed("e2", "s2")
    dedup.clear()
    assert dedup.tracked_count == 0
    assert not dedup.has_processed("e1", "s1")


def test_evict_session():
    dedup = EventDeduplicator()
    dedup.mark_processed("e1", "s1")
    dedup.mark_processed("e2", "s1")
    dedup.mark_processed("e3", "s2")
    assert dedup.evict("s1") == 2
    assert not dedup.has_processed("e1", "s1")
    assert dedup.has_processed("e3", "s2")
    assert dedup.evict("unknown") == 0


def test_bucket_is_bounded_lru():
    dedup = EventDeduplicator(max_events_per_session=2)
    dedup.mark_processed("e1", "s")
    dedup.mark_processed("e2", "s")
    assert dedup.has_processed("e1", "s")  # refreshes e1
    dedup.mark_processed("e3", "s")
    assert dedup.has_processed("e1", "s")
    assert not dedup.has_processed("e2", "s")
    assert dedup.has_processed("e3", "s")
    assert dedup.tracked_count == 2


def test_max_events_must_be_positive():
    with pytest.raises(ValueError):
        EventDeduplicator(max_events_per_session=0)
