"""Run shell commands on agent tool and session events, and report their output back."""

from ._logging import configure_logging
from .errors import HostError, LoadError
from .execution import EventDeduplicator, HookExecutor, HookRun
from .host import HostClient, HttpHostClient, InMemoryHostClient
from .loaders import (
    load_agent_config,
    load_config_file,
    load_effective_config,
    load_markdown_config,
)
from .matching import match_session_hooks, match_tool_hooks, normalize_filter
from .merge import MergeResult, merge_all, merge_configs
from .models import (
    CommandHooksConfig,
    ExecutionContext,
    HookExecutionResult,
    SessionHook,
    ToolHook,
)
from .plugin import CommandHooksPlugin, make_plugin
from .validation import ValidationResult, validate_config

__all__ = [
    # Plugin
    "CommandHooksPlugin",
    "make_plugin",
    "configure_logging",
    # Models
    "CommandHooksConfig",
    "ExecutionContext",
    "HookExecutionResult",
    "SessionHook",
    "ToolHook",
    # Config
    "load_agent_config",
    "load_config_file",
    "load_effective_config",
    "load_markdown_config",
    "merge_all",
    "merge_configs",
    "MergeResult",
    # Matching and execution
    "normalize_filter",
    "match_session_hooks",
    "match_tool_hooks",
    "EventDeduplicator",
    "HookExecutor",
    "HookRun",
    # Host
    "HostClient",
    "HttpHostClient",
    "InMemoryHostClient",
    # Validation
    "validate_config",
    "ValidationResult",
    # Errors
    "LoadError",
    "HostError",
]
