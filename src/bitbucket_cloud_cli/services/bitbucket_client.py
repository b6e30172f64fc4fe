from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from bitbucket_cloud_cli.logging_config import get_logger

log = get_logger(__name__)

DEFAULT_API_URL = "https://api.bitbucket.org/2.0"


def auth_mode(token: str | None, username: str | None, app_password: str | None) -> str:
    """Which credentials a client built from these settings will send."""
    if token:
        return "token"
    if username and app_password:
        return "basic"
    return "anonymous"


@dataclass
class BitbucketClient:
    """Default transport: one ``httpx.Client`` bound to the API root.

    Auth is a bearer ``token`` when given, otherwise HTTP basic with
    ``username``/``app_password``, otherwise anonymous. Non-2xx responses
    raise ``httpx.HTTPStatusError``; nothing is retried.
    """

    base_url: str = DEFAULT_API_URL
    token: str | None = None
    username: str | None = None
    app_password: str | None = None
    timeout: float = 30.0
    transport: httpx.BaseTransport | None = None
    _client: httpx.Client = field(init=False, repr=False)

    def __post_init__(self) -> None:
        headers = {"Accept": "application/json"}
        auth: httpx.Auth | None = None
        if self.token:
            headers["Authorization"] = f"Bearer {self.token.strip()}"
        elif self.username and self.app_password:
            auth = httpx.BasicAuth(self.username, self.app_password)

        self._client = httpx.Client(
            base_url=self.base_url.rstrip("/") + "/",
            headers=headers,
            auth=auth,
            timeout=self.timeout,
            transport=self.transport,
        )

    @property
    def auth_mode(self) -> str:
        return auth_mode(self.token, self.username, self.app_password)

    def get(self, path: str, params: Mapping[str, str] | None = None) -> httpx.Response:
        return self._send("GET", path, params=params)

    def post(self, path: str, body: Mapping[str, Any]) -> httpx.Response:
        return self._send("POST", path, json=dict(body))

    def send_prebuilt(self, url: str) -> httpx.Response:
        """GET an absolute URL taken from a response's ``links``."""
        return self._send("GET", url)

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = self._client.request(method, url, **kwargs)
        log.debug("bitbucket_response", method=method, url=str(response.url), status=response.status_code)
        response.raise_for_status()
        return response

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "BitbucketClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
