from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from .._jsonc import loads_jsonc
from ..errors import LoadError
from ..merge import merge_configs
from ..models.hook import CommandHooksConfig
from ..validation import HookValidationError, validate_config

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "command-hooks.jsonc"
PROJECT_CONFIG_DIR = ".opencode"
MAX_SEARCH_DEPTH = 20


@dataclass
class ConfigLoadResult:
    """One configuration source. `error` is set when the file existed but was unusable."""

    config: CommandHooksConfig
    error: str | None = None


@dataclass
class LoadedConfig:
    """The effective configuration for one event.

    Attributes:
        config: Merged configuration (global base, project override).
        errors: Human-readable load failures, one per unusable file.
        validation_errors: Advisory findings from merging (duplicate ids).
        project_path: Project config file that was found, if any.
        global_path: Location of the user-global config file.
    """

    config: CommandHooksConfig
    errors: list[str] = field(default_factory=list)
    validation_errors: list[HookValidationError] = field(default_factory=list)
    project_path: Path | None = None
    global_path: Path | None = None


def user_config_path(home: Path | None = None) -> Path:
    """~/.config/opencode/command-hooks.jsonc"""
    return (home or Path.home()) / ".config" / "opencode" / CONFIG_FILENAME


def find_project_config(start: Path) -> Path | None:
    """Walk up from `start` looking for .opencode/command-hooks.jsonc."""
    current = start.resolve()
    for _ in range(MAX_SEARCH_DEPTH):
        candidate = current / PROJECT_CONFIG_DIR / CONFIG_FILENAME
        if candidate.is_file():
            logger.debug("Found project config file: %s", candidate)
            return candidate
        if current.parent == current:
            break
        current = current.parent
    logger.debug("No project config file found above %s", start)
    return None


def load_config_file(path: Path, source: str = "project") -> ConfigLoadResult:
    """Load one JSONC config file. Never raises.

    A missing file yields an empty config with no error. Unreadable,
    malformed, or schema-invalid files are logged and yield an empty config
    with `error` set.
    """
    if not path.exists():
        logger.debug("No %s config at %s", source, path)
        return ConfigLoadResult(config=CommandHooksConfig())
    try:
        config = _read_config(path, source)
    except LoadError as e:
        logger.warning("%s", e)
        return ConfigLoadResult(config=CommandHooksConfig(), error=str(e))

    logger.debug(
        "Loaded %s config %s: truncationLimit=%s, %d tool hooks, %d session hooks",
        source,
        path,
        config.truncation_limit,
        len(config.tool),
        len(config.session),
    )
    return ConfigLoadResult(config=config)


def load_effective_config(cwd: Path | None = None, home: Path | None = None) -> LoadedConfig:
    """Load the project and user-global configs and merge them.

    If the project config sets `ignoreGlobalConfig`, the user-global file is
    not read and the project config is returned verbatim.
    """
    cwd = cwd or Path.cwd()
    global_path = user_config_path(home)
    project_path = find_project_config(cwd)

    errors: list[str] = []
    if project_path is not None:
        project = load_config_file(project_path, "project")
        if project.error:
            errors.append(project.error)
    else:
        project = ConfigLoadResult(config=CommandHooksConfig())

    if project.config.ignore_global_config:
        logger.debug("Project config has ignoreGlobalConfig: true, skipping %s", global_path)
        return LoadedConfig(
            config=project.config,
            errors=errors,
            project_path=project_path,
            global_path=global_path,
        )

    user_global = load_config_file(global_path, "user global")
    if user_global.error:
        errors.append(user_global.error)

    merged = merge_configs(user_global.config, project.config, base_source="global", override_source="project")
    for issue in merged.errors:
        logger.warning("%s", issue.message)

    return LoadedConfig(
        config=merged.config,
        errors=errors,
        validation_errors=merged.errors,
        project_path=project_path,
        global_path=global_path,
    )


def parse_config_data(data: object, path: Path, source: str) -> CommandHooksConfig:
    """Validate parsed config data. Raises LoadError with a readable summary."""
    if not isinstance(data, dict):
        raise LoadError(
            f"{source} config {path} is not a valid command hooks config "
            "(expected { tool?: [], session?: [] })",
            path=path,
        )
    try:
        return CommandHooksConfig.model_validate(data)
    except ValidationError as e:
        issues = validate_config(data).errors
        detail = "; ".join(i.message for i in issues[:3]) if issues else str(e)
        raise LoadError(f"{source} config {path} is not a valid command hooks config: {detail}", path=path) from e


# --- internal helpers ---


def _read_config(path: Path, source: str) -> CommandHooksConfig:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Failed to read {source} config file {path}: {e}", path=path) from e
    try:
        data = loads_jsonc(text)
    except json.JSONDecodeError as e:
        raise LoadError(f"Failed to parse {source} config file {path}: {e}", path=path) from e
    return parse_config_data(data, path, source)
