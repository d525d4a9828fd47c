from ._http import DEFAULT_BASE_URL, HttpHostClient
from ._in_memory import InMemoryHostClient, LogCall, PromptCall, ToastCall
from ._protocols import HostClient

__all__ = [
    "DEFAULT_BASE_URL",
    "HostClient",
    "HttpHostClient",
    "InMemoryHostClient",
    "LogCall",
    "PromptCall",
    "ToastCall",
]
