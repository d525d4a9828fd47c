"""Protocol (port) for the agent host the hooks report back to."""

from __future__ import annotations

from typing import Any, Protocol


class HostClient(Protocol):
    """The calls hook execution makes into the host. Implementations raise HostError on failure."""

    async def prompt(
        self,
        session_id: str,
        text: str,
        *,
        role: str = "system",
        agent: str | None = None,
        model: dict[str, str] | None = None,
    ) -> None:
        """Add a message to a session without triggering a model reply."""
        ...

    async def show_toast(
        self,
        title: str,
        message: str,
        variant: str = "info",
        duration: int | None = None,
    ) -> None: ...

    async def log(self, level: str, message: str, extra: dict[str, Any] | None = None) -> None: ...

    async def messages(self, session_id: str, limit: int = 50) -> list[dict[str, Any]]:
        """Most recent messages of a session, oldest first."""
        ...
