from __future__ import annotations

import logging
from collections import OrderedDict

logger = logging.getLogger(__name__)

DEFAULT_MAX_EVENTS_PER_SESSION = 1000

# Bucket for event ids that were not recorded against a session.
_GLOBAL_BUCKET = ""


def generate_tool_event_id(
    hook_id: str,
    tool: str,
    session_id: str,
    phase: str,
    call_id: str | None = None,
) -> str:
    """Key for one tool hook firing. The call id, when known, makes each invocation distinct."""
    parts = [hook_id, tool, session_id, phase]
    if call_id:
        parts.append(call_id)
    return ":".join(parts)


def generate_session_event_id(hook_id: str, event: str, session_id: str) -> str:
    return f"{hook_id}:{event}:{session_id}"


class EventDeduplicator:
    """Remembers which (hook, event) pairs already fired.

    Ids are grouped per session; each session keeps at most
    `max_events_per_session` ids, dropping the least recently seen. Call
    `evict` when a session ends.
    """

    def __init__(self, max_events_per_session: int = DEFAULT_MAX_EVENTS_PER_SESSION) -> None:
        if max_events_per_session < 1:
            raise ValueError("max_events_per_session must be at least 1")
        self.max_events_per_session = max_events_per_session
        self._sessions: dict[str, OrderedDict[str, None]] = {}

    def has_processed(self, event_id: str, session_id: str | None = None) -> bool:
        bucket = self._sessions.get(session_id or _GLOBAL_BUCKET)
        processed = bucket is not None and event_id in bucket
        if processed:
            bucket.move_to_end(event_id)
        logger.debug("Dedup check: event_id=%s processed=%s (tracked: %d)", event_id, processed, self.tracked_count)
        return processed

    def mark_processed(self, event_id: str, session_id: str | None = None) -> None:
        bucket = self._sessions.setdefault(session_id or _GLOBAL_BUCKET, OrderedDict())
        bucket[event_id] = None
        bucket.move_to_end(event_id)
        while len(bucket) > self.max_events_per_session:
            dropped, _ = bucket.popitem(last=False)
            logger.debug("Dedup bucket for session %s full, dropping %s", session_id, dropped)

    def evict(self, session_id: str) -> int:
        """Forget every id recorded for `session_id`. Returns how many were dropped."""
        bucket = self._sessions.pop(session_id, None)
        removed = len(bucket) if bucket else 0
        logger.debug("Dedup evicted %d events for session %s", removed, session_id)
        return removed

    def clear(self) -> None:
        previous = self.tracked_count
        self._sessions.clear()
        logger.debug("Dedup cleared: removed %d tracked events", previous)

    @property
    def tracked_count(self) -> int:
        return sum(len(bucket) for bucket in self._sessions.values())
