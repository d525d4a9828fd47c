"""Host integration: build a CommandHooksPlugin wired to the host's HTTP API."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from .._logging import DEFAULT_LOG_FILE, configure_logging
from ..host import DEFAULT_BASE_URL, HttpHostClient
from ._plugin import CONFIG_ERROR_TOAST_TITLE, CommandHooksPlugin

if TYPE_CHECKING:
    from ..host import HostClient


def make_plugin(
    client: HostClient | None = None,
    *,
    base_url: str | None = None,
    cwd: Path | None = None,
    home: Path | None = None,
    debug: bool = False,
    log_to_file: bool = False,
) -> CommandHooksPlugin:
    """Build a CommandHooksPlugin and configure package logging.

    client: defaults to an HttpHostClient for `base_url`
    base_url: defaults to $OPENCODE_SERVER_URL, then http://127.0.0.1:4096
    cwd: project directory; defaults to the current directory
    home: defaults to the user's home directory
    log_to_file: also write DEBUG logs to <cwd>/.opencode/logs/command-hooks.log
    """
    cwd = cwd or Path.cwd()
    configure_logging(debug=debug, log_file=cwd / DEFAULT_LOG_FILE if log_to_file else None)
    if client is None:
        client = HttpHostClient(base_url or os.environ.get("OPENCODE_SERVER_URL") or DEFAULT_BASE_URL)
    return CommandHooksPlugin(client, cwd=cwd, home=home)


__all__ = [
    "CONFIG_ERROR_TOAST_TITLE",
    "CommandHooksPlugin",
    "make_plugin",
]
