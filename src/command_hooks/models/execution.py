"""Per-event runtime records: execution context, command results, template values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ExecutionContext:
    """The event a set of hooks is evaluated against.

    Attributes:
        session_id: Session the event belongs to; injections target it.
        agent: Calling agent name, if the host reported one.
        tool: Tool name (tool events only).
        call_id: Host-assigned id of the tool invocation.
        slash_command: Slash command the event ran under, if any.
        tool_args: Arguments the tool was invoked with, if known.
    """

    session_id: str
    agent: str | None = None
    tool: str | None = None
    call_id: str | None = None
    slash_command: str | None = None
    tool_args: dict[str, Any] | None = None


@dataclass(frozen=True)
class HookExecutionResult:
    """Outcome of one command of a hook. Output is already truncated."""

    hook_id: str
    success: bool
    exit_code: int | None = None
    stdout: str | None = None
    stderr: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class TemplateContext:
    """Values available to `{placeholder}` substitution."""

    id: str
    agent: str | None = None
    tool: str | None = None
    cmd: str | None = None
    stdout: str | None = None
    stderr: str | None = None
    exit_code: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_mapping(self) -> dict[str, Any]:
        """Placeholder name -> value, using the names templates are written with."""
        values: dict[str, Any] = dict(self.extra)
        values.update(
            id=self.id,
            agent=self.agent,
            tool=self.tool,
            cmd=self.cmd,
            stdout=self.stdout,
            stderr=self.stderr,
            exitCode=self.exit_code,
        )
        return values
