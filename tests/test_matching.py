from command_hooks.matching import (
    match_session_hooks,
    match_tool_hooks,
    matches_filter,
    normalize_filter,
)
from command_hooks.models import ExecutionContext, SessionHook, ToolHook


def tool_hook(hook_id, **when):
    when.setdefault("phase", "after")
    return ToolHook.model_validate({"id": hook_id, "when": when, "run": "true"})


def session_hook(hook_id, **when):
    return SessionHook.model_validate({"id": hook_id, "when": when, "run": "true"})


# --- normalize_filter ---


def test_normalize_filter_absent_is_wildcard():
    assert normalize_filter(None) == ["*"]


def test_normalize_filter_string():
    assert normalize_filter("bash") == ["bash"]
    assert normalize_filter("*") == ["*"]


def test_normalize_filter_list_unchanged():
    assert normalize_filter(["a", "b"]) == ["a", "b"]


def test_normalize_filter_empty_list_unchanged():
    assert normalize_filter([]) == []
    assert not matches_filter("bash", normalize_filter([]))


def test_matches_filter():
    assert matches_filter("x", ["*"])
    assert matches_filter(None, ["*"])
    assert matches_filter("x", ["x", "y"])
    assert not matches_filter("z", ["x", "y"])
    assert not matches_filter(None, ["x"])


# --- match_tool_hooks ---


def test_match_tool_hooks_by_phase():
    hooks = [tool_hook("before", phase="before"), tool_hook("after", phase="after")]
    ctx = ExecutionContext(session_id="s", tool="bash")
    assert [h.id for h in match_tool_hooks(hooks, ctx, phase="after")] == ["after"]


def test_match_tool_hooks_by_tool():
    hooks = [tool_hook("a", tool="bash"), tool_hook("b", tool=["write", "edit"]), tool_hook("c")]
    ctx = ExecutionContext(session_id="s", tool="edit")
    assert [h.id for h in match_tool_hooks(hooks, ctx, phase="after")] == ["b", "c"]


def test_match_tool_hooks_by_calling_agent():
    hooks = [tool_hook("reviewer-only", callingAgent="reviewer"), tool_hook("any")]
    reviewer = ExecutionContext(session_id="s", tool="task", agent="reviewer")
    unknown = ExecutionContext(session_id="s", tool="task")
    assert [h.id for h in match_tool_hooks(hooks, reviewer, phase="after")] == ["reviewer-only", "any"]
    assert [h.id for h in match_tool_hooks(hooks, unknown, phase="after")] == ["any"]


def test_match_tool_hooks_by_slash_command():
    hooks = [tool_hook("fix", slashCommand="/fix")]
    assert match_tool_hooks(hooks, ExecutionContext("s", tool="bash", slash_command="/fix"), phase="after")
    assert not match_tool_hooks(hooks, ExecutionContext("s", tool="bash"), phase="after")


def test_match_tool_hooks_by_tool_args():
    hooks = [
        tool_hook("reviewer-task", tool="task", toolArgs={"subagent_type": "reviewer"}),
        tool_hook("any-task", tool="task", toolArgs={"subagent_type": "*"}),
    ]
    ctx = ExecutionContext("s", tool="task", tool_args={"subagent_type": "reviewer"})
    other = ExecutionContext("s", tool="task", tool_args={"subagent_type": "planner"})
    no_args = ExecutionContext("s", tool="task")
    assert [h.id for h in match_tool_hooks(hooks, ctx, phase="after")] == ["reviewer-task", "any-task"]
    assert [h.id for h in match_tool_hooks(hooks, other, phase="after")] == ["any-task"]
    assert [h.id for h in match_tool_hooks(hooks, no_args, phase="after")] == ["any-task"]


def test_match_tool_hooks_tool_args_scalars_as_strings():
    hooks = [tool_hook("strict", toolArgs={"strict": "true", "depth": ["1", "2"]})]
    ctx = ExecutionContext("s", tool="bash", tool_args={"strict": True, "depth": 2})
    assert match_tool_hooks(hooks, ctx, phase="after")


def test_match_tool_hooks_empty_tool_list_matches_nothing():
    hooks = [tool_hook("none", tool=[]), tool_hook("any")]
    ctx = ExecutionContext("s", tool="bash")
    assert [h.id for h in match_tool_hooks(hooks, ctx, phase="after")] == ["any"]


def test_match_tool_hooks_preserves_input_order():
    hooks = [tool_hook(f"h{i}") for i in range(10)]
    ctx = ExecutionContext("s", tool="bash")
    assert match_tool_hooks(hooks, ctx, phase="after") == hooks


def test_match_tool_hooks_empty():
    assert match_tool_hooks([], ExecutionContext("s", tool="bash"), phase="before") == []


# --- match_session_hooks ---


def test_match_session_hooks_by_event():
    hooks = [session_hook("start", event="session.start"), session_hook("idle", event="session.idle")]
    ctx = ExecutionContext("s")
    assert [h.id for h in match_session_hooks(hooks, ctx, event="session.idle")] == ["idle"]


def test_match_session_hooks_created_alias():
    hooks = [session_hook("created", event="session.created")]
    assert match_session_hooks(hooks, ExecutionContext("s"), event="session.start") == hooks


def test_match_session_hooks_by_agent():
    hooks = [session_hook("build", event="session.idle", agent=["build"]), session_hook("all", event="session.idle")]
    build = ExecutionContext("s", agent="build")
    plan = ExecutionContext("s", agent="plan")
    assert [h.id for h in match_session_hooks(hooks, build, event="session.idle")] == ["build", "all"]
    assert [h.id for h in match_session_hooks(hooks, plan, event="session.idle")] == ["all"]
