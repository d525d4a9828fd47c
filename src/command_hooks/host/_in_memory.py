"""In-memory host client for testing (no network I/O)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import HostError


@dataclass
class PromptCall:
    session_id: str
    text: str
    role: str = "system"
    agent: str | None = None
    model: dict[str, str] | None = None


@dataclass
class ToastCall:
    title: str
    message: str
    variant: str = "info"
    duration: int | None = None


@dataclass
class LogCall:
    level: str
    message: str
    extra: dict[str, Any] = field(default_factory=dict)


class InMemoryHostClient:
    """Records every call. Method names listed in `fail_on` raise HostError instead."""

    def __init__(
        self,
        session_messages: dict[str, list[dict[str, Any]]] | None = None,
        fail_on: set[str] | None = None,
    ) -> None:
        self.session_messages = dict(session_messages or {})
        self.fail_on = set(fail_on or ())
        self.prompts: list[PromptCall] = []
        self.toasts: list[ToastCall] = []
        self.logs: list[LogCall] = []

    async def prompt(
        self,
        session_id: str,
        text: str,
        *,
        role: str = "system",
        agent: str | None = None,
        model: dict[str, str] | None = None,
    ) -> None:
        self._maybe_fail("prompt", session_id)
        self.prompts.append(PromptCall(session_id, text, role, agent, model))

    async def show_toast(
        self,
        title: str,
        message: str,
        variant: str = "info",
        duration: int | None = None,
    ) -> None:
        self._maybe_fail("show_toast")
        self.toasts.append(ToastCall(title, message, variant, duration))

    async def log(self, level: str, message: str, extra: dict[str, Any] | None = None) -> None:
        self._maybe_fail("log")
        self.logs.append(LogCall(level, message, dict(extra or {})))

    async def messages(self, session_id: str, limit: int = 50) -> list[dict[str, Any]]:
        self._maybe_fail("messages", session_id)
        return list(self.session_messages.get(session_id, []))[-limit:]

    def _maybe_fail(self, method: str, session_id: str | None = None) -> None:
        if method in self.fail_on:
            raise HostError(f"{method} failed", session_id=session_id)
