from __future__ import annotations

import logging
from pathlib import Path

from ..models.hook import CommandHooksConfig
from .markdown import load_markdown_config

logger = logging.getLogger(__name__)

AGENT_DIR = Path(".opencode") / "agent"


def resolve_agent_path(name: str, cwd: Path | None = None, home: Path | None = None) -> Path | None:
    """Locate `<name>.md`: project `.opencode/agent/` first, then `~/.config/opencode/agent/`.

    Names that could escape the agent directories are rejected.
    """
    if not name or "/" in name or "\\" in name or ".." in name:
        logger.warning("Rejecting agent name %r: must be a plain file name", name)
        return None

    candidates = [
        (cwd or Path.cwd()) / AGENT_DIR / f"{name}.md",
        (home or Path.home()) / ".config" / "opencode" / "agent" / f"{name}.md",
    ]
    for candidate in candidates:
        if candidate.is_file():
            logger.debug("Resolved agent %s to %s", name, candidate)
            return candidate
    logger.debug("No markdown file for agent %s", name)
    return None


def load_agent_config(name: str, cwd: Path | None = None, home: Path | None = None) -> CommandHooksConfig:
    """Hooks declared by an agent's markdown file; empty when there is none."""
    path = resolve_agent_path(name, cwd, home)
    if path is None:
        return CommandHooksConfig()
    return load_markdown_config(path, name)
