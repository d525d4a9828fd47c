from .._jsonc import strip_jsonc_comments
from .agent import load_agent_config, resolve_agent_path
from .config import (
    ConfigLoadResult,
    LoadedConfig,
    find_project_config,
    load_config_file,
    load_effective_config,
    user_config_path,
)
from .markdown import clear_markdown_config_cache, extract_frontmatter, load_markdown_config

__all__ = [
    "ConfigLoadResult",
    "LoadedConfig",
    "clear_markdown_config_cache",
    "extract_frontmatter",
    "find_project_config",
    "load_agent_config",
    "load_config_file",
    "load_effective_config",
    "load_markdown_config",
    "resolve_agent_path",
    "strip_jsonc_comments",
    "user_config_path",
]
