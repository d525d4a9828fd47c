from .agent import AgentHookEntry, build_agent_hook_id
from .execution import ExecutionContext, HookExecutionResult, TemplateContext
from .hook import (
    CommandHooksConfig,
    FilterValue,
    Hook,
    HookInjection,
    Phase,
    SessionEvent,
    SessionHook,
    SessionHookWhen,
    ToastSpec,
    ToolHook,
    ToolHookWhen,
)

__all__ = [
    "AgentHookEntry",
    "CommandHooksConfig",
    "ExecutionContext",
    "FilterValue",
    "Hook",
    "HookExecutionResult",
    "HookInjection",
    "Phase",
    "SessionEvent",
    "SessionHook",
    "SessionHookWhen",
    "TemplateContext",
    "ToastSpec",
    "ToolHook",
    "ToolHookWhen",
    "build_agent_hook_id",
]
