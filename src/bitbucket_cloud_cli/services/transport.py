from collections.abc import Mapping
from typing import Any, Protocol


class Transport(Protocol):
    """What RepositoriesApi needs from an HTTP client.

    Paths are relative to the API root and already percent-encoded; the
    transport must not encode them again. Whatever the methods return
    (a response, an awaitable...) is handed back to the caller untouched.
    """

    def get(self, path: str, params: Mapping[str, str] | None = None) -> Any: ...

    def post(self, path: str, body: Mapping[str, Any]) -> Any: ...

    def send_prebuilt(self, url: str) -> Any: ...
