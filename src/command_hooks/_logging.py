"""Logging setup for command hooks.

Everything logs through `logging.getLogger(__name__)` under the
`command_hooks` namespace. `configure_logging` attaches handlers to that
namespace only, leaving the host process's root logger alone.

Priority for level resolution (highest to lowest):
    1. COMMAND_HOOKS_LOG_LEVEL env var (DEBUG, INFO, WARNING, ...)
    2. COMMAND_HOOKS_DEBUG=true env var
    3. `debug=True` parameter
    4. WARNING (default)
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

PACKAGE_LOGGER = "command_hooks"
DEFAULT_LOG_FILE = Path(".opencode") / "logs" / "command-hooks.log"

_DEBUG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"
_DEFAULT_FORMAT = "[command-hooks] %(levelname)s: %(message)s"

_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def resolve_level(debug: bool = False) -> int:
    if env_level := os.environ.get("COMMAND_HOOKS_LOG_LEVEL"):
        return _parse_level(env_level)
    if os.environ.get("COMMAND_HOOKS_DEBUG", "").lower() in ("true", "1", "yes"):
        return logging.DEBUG
    if debug:
        return logging.DEBUG
    return logging.WARNING


def configure_logging(
    debug: bool = False,
    log_file: Path | None = None,
    *,
    stream: object = None,
) -> logging.Logger:
    """Attach a stderr handler, and optionally a file handler, to the package logger.

    Calling it again replaces the handlers it installed before. The file
    handler captures DEBUG regardless of the console level.
    """
    level = resolve_level(debug)
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    console = logging.StreamHandler(stream or sys.stderr)  # type: ignore[arg-type]
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_DEBUG_FORMAT if level <= logging.DEBUG else _DEFAULT_FORMAT))
    logger.addHandler(console)
    logger.setLevel(level)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            logger.warning("Could not enable file logging at %s: %s", log_file, e)
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(_DEBUG_FORMAT))
            logger.addHandler(file_handler)
            logger.setLevel(logging.DEBUG)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging configured: level=%s, log_file=%s", logging.getLevelName(level), log_file)
    return logger


def _parse_level(level: str) -> int:
    numeric = getattr(logging, level.upper(), None)
    if isinstance(numeric, int):
        return numeric
    try:
        return int(level)
    except ValueError:
        return logging.WARNING
