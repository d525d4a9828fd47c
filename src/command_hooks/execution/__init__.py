from ._dedup import (
    DEFAULT_MAX_EVENTS_PER_SESSION,
    EventDeduplicator,
    generate_session_event_id,
    generate_tool_event_id,
)
from ._executor import HookExecutor, HookRun, HookState, format_hook_error
from ._shell import DEFAULT_TRUNCATION_LIMIT, run_command, run_commands, truncate_output
from ._template import interpolate_template

__all__ = [
    "DEFAULT_MAX_EVENTS_PER_SESSION",
    "DEFAULT_TRUNCATION_LIMIT",
    "EventDeduplicator",
    "HookExecutor",
    "HookRun",
    "HookState",
    "format_hook_error",
    "generate_session_event_id",
    "generate_tool_event_id",
    "interpolate_template",
    "run_command",
    "run_commands",
    "truncate_output",
]
