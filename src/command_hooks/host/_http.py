from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import HostError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:4096"
LOG_SERVICE_NAME = "command-hooks"


class HttpHostClient:
    """HostClient over the host's HTTP API.

    Usage:
        async with HttpHostClient("http://127.0.0.1:4096") as client:
            await client.prompt(session_id, "Lint passed", role="system")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def __aenter__(self) -> HttpHostClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def prompt(
        self,
        session_id: str,
        text: str,
        *,
        role: str = "system",
        agent: str | None = None,
        model: dict[str, str] | None = None,
    ) -> None:
        """Add a text part to the session with `noReply` so no model turn starts."""
        part: dict[str, Any] = {"type": "text", "text": text}
        if role != "user":
            part["synthetic"] = True
        body: dict[str, Any] = {"noReply": True, "parts": [part]}
        if agent:
            body["agent"] = agent
        if model:
            body["model"] = model
        await self._request("POST", f"/session/{session_id}/message", session_id=session_id, json=body)

    async def show_toast(
        self,
        title: str,
        message: str,
        variant: str = "info",
        duration: int | None = None,
    ) -> None:
        body: dict[str, Any] = {"title": title, "message": message, "variant": variant}
        if duration is not None:
            body["duration"] = duration
        await self._request("POST", "/tui/show-toast", json=body)

    async def log(self, level: str, message: str, extra: dict[str, Any] | None = None) -> None:
        body: dict[str, Any] = {"service": LOG_SERVICE_NAME, "level": level, "message": message}
        if extra:
            body["extra"] = extra
        await self._request("POST", "/log", json=body)

    async def messages(self, session_id: str, limit: int = 50) -> list[dict[str, Any]]:
        response = await self._request(
            "GET", f"/session/{session_id}/message", session_id=session_id, params={"limit": limit}
        )
        try:
            data = response.json()
        except ValueError as e:
            raise HostError(f"Invalid JSON listing messages of session {session_id}: {e}", session_id) from e
        if not isinstance(data, list):
            raise HostError(f"Unexpected response listing messages of session {session_id}", session_id)
        return data

    # --- internal helpers ---

    async def _request(
        self, method: str, path: str, *, session_id: str | None = None, **kwargs: Any
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise HostError(f"HTTP {e.response.status_code} from {method} {path}", session_id=session_id) from e
        except httpx.HTTPError as e:
            raise HostError(f"Network error on {method} {path}: {e}", session_id=session_id) from e
        logger.debug("%s %s -> %d", method, path, response.status_code)
        return response
