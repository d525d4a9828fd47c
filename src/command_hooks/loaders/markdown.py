"""Hooks declared in the YAML frontmatter of agent and slash-command markdown files.

Two shapes are understood. The simplified block scopes hooks to the agent the
file defines:

    ---
    hooks:
      before:
        - run: "echo starting"
      after:
        - run: ["npm test", "npm run lint"]
          inject: "Results:\\n{stdout}"
    ---

The full block mirrors command-hooks.jsonc:

    ---
    command_hooks:
      tool: [...]
      session: [...]
    ---

When both are present the simplified block wins.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import frontmatter  # type: ignore[import-untyped]
import yaml
from pydantic import ValidationError

from ..errors import LoadError
from ..models.agent import AgentHookEntry
from ..models.hook import CommandHooksConfig, ToastSpec, ToolHook
from .config import parse_config_data

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"

_cache: dict[Path, CommandHooksConfig] = {}


def extract_frontmatter(text: str) -> str | None:
    """Return the text between the first two `---` lines, or None if there is none.

    The opening delimiter must be the first line of the document.
    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return None
    for index in range(1, len(lines)):
        if lines[index].strip() == FRONTMATTER_DELIMITER:
            return "\n".join(lines[1:index])
    return None


def load_markdown_config(path: Path, agent_name: str | None = None) -> CommandHooksConfig:
    """Load hooks from a markdown file's frontmatter. Never raises.

    `agent_name` scopes a simplified `hooks` block; it defaults to the file
    stem. Results are cached per path until `clear_markdown_config_cache`.
    """
    key = path.resolve()
    cached = _cache.get(key)
    if cached is not None:
        logger.debug(
            "Returning cached markdown config from %s: %d tool hooks, %d session hooks",
            path,
            len(cached.tool),
            len(cached.session),
        )
        return cached

    if not path.is_file():
        logger.debug("Markdown file not found: %s", path)
        return CommandHooksConfig()

    try:
        config = _parse_markdown(path, agent_name or path.stem)
    except LoadError as e:
        logger.warning("%s", e)
        config = CommandHooksConfig()

    _cache[key] = config
    return config


def clear_markdown_config_cache(path: Path | None = None) -> None:
    """Forget one cached file, or every cached file when `path` is None."""
    if path is None:
        _cache.clear()
    else:
        _cache.pop(path.resolve(), None)


# --- internal helpers ---


def _parse_markdown(path: Path, agent_name: str) -> CommandHooksConfig:
    metadata = _load_frontmatter(path)

    if "hooks" in metadata:
        config = _parse_simplified_hooks(metadata["hooks"], agent_name, path)
        logger.debug("Loaded %d simplified hooks for agent %s from %s", len(config.tool), agent_name, path)
        return config

    block = metadata.get("command_hooks")
    if block is None:
        logger.debug("No hooks in frontmatter of %s", path)
        return CommandHooksConfig()
    return parse_config_data(block, path, "markdown")


def _load_frontmatter(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Failed to read markdown file {path}: {e}", path=path) from e
    if extract_frontmatter(text) is None:
        return {}
    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as e:
        raise LoadError(f"Failed to parse YAML frontmatter in {path}: {e}", path=path) from e
    return dict(post.metadata)


def _parse_simplified_hooks(block: object, agent_name: str, path: Path) -> CommandHooksConfig:
    if not isinstance(block, dict):
        raise LoadError(f"Invalid hooks block in {path}: expected a mapping with before/after", path=path)

    tool_hooks: list[ToolHook] = []
    for phase in ("before", "after"):
        entries = block.get(phase)
        if entries is None:
            continue
        if not isinstance(entries, list):
            raise LoadError(f"Invalid hooks.{phase} in {path}: expected a list", path=path)
        for index, entry in enumerate(entries):
            parsed = _parse_agent_entry(entry, path, f"hooks.{phase}[{index}]")
            if parsed is not None:
                tool_hooks.append(parsed.to_tool_hook(agent_name, phase, index))
    return CommandHooksConfig(tool=tool_hooks)


def _parse_agent_entry(entry: object, path: Path, where: str) -> AgentHookEntry | None:
    if not isinstance(entry, dict) or "run" not in entry:
        logger.warning("Skipping %s in %s: missing run", where, path)
        return None

    data = dict(entry)
    if "inject" in data and not isinstance(data["inject"], str):
        logger.warning("Ignoring invalid inject on %s in %s: expected a string", where, path)
        del data["inject"]
    if "toast" in data:
        try:
            ToastSpec.model_validate(data["toast"])
        except ValidationError:
            logger.warning("Ignoring invalid toast on %s in %s", where, path)
            del data["toast"]

    try:
        return AgentHookEntry.model_validate(data)
    except ValidationError as e:
        logger.warning("Skipping %s in %s: %s", where, path, e)
        return None
