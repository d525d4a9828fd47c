from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class LoadError(Exception):
    """Raised when reading or parsing a hooks configuration source fails.

    Public loaders catch it and fall back to an empty configuration.

    Attributes:
        path: The file that could not be loaded, if applicable.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class HostError(Exception):
    """Raised when a call to the host (prompt, toast, log, messages) fails.

    Attributes:
        session_id: The session the call targeted, if applicable.
    """

    def __init__(self, message: str, session_id: str | None = None) -> None:
        self.session_id = session_id
        super().__init__(message)
