from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ValidationErrorType = Literal[
    "missing_id",
    "missing_when",
    "missing_run",
    "invalid_phase",
    "invalid_event",
    "invalid_injection_target",
    "invalid_injection_as",
    "duplicate_id",
    "unknown",
]


@dataclass
class HookValidationError:
    """A single configuration finding. Advisory: never blocks execution."""

    type: ValidationErrorType
    message: str
    severity: Literal["error", "warning"] = "error"
    hook_id: str | None = None
    source: str | None = None  # "global", "project", "markdown", ...


@dataclass
class ValidationResult:
    """Result of validating a raw hooks configuration.

    Attributes:
        issues: All errors and warnings. Use .errors and .warnings for filtered views.
        valid: True if there are no errors (warnings are allowed).
    """

    issues: list[HookValidationError]

    @property
    def valid(self) -> bool:
        return not any(i.severity == "error" for i in self.issues)

    @property
    def warnings(self) -> list[HookValidationError]:
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def errors(self) -> list[HookValidationError]:
        return [i for i in self.issues if i.severity == "error"]
