from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

from .._jsonc import loads_jsonc
from ._config import validate_config as _validate_config
from ._result import HookValidationError, ValidationErrorType, ValidationResult


def validate_config(data: Any) -> ValidationResult:
    """Validate a raw hooks config dict (e.g. parsed command-hooks.jsonc).

    Checks required fields, phase/event values, injection settings, filter
    types, and duplicate ids within each array.
    """
    return _validate_config(data)


def validate_config_file(path: Path) -> ValidationResult:
    """Load a JSONC config file from disk and validate it."""
    data = loads_jsonc(path.read_text(encoding="utf-8"))
    return _validate_config(data)


__all__ = [
    "HookValidationError",
    "ValidationErrorType",
    "ValidationResult",
    "validate_config",
    "validate_config_file",
]
