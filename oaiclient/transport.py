"""HTTP transport shared by the API resource clients."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from .ratelimit import RateLimitHeaders

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_ASSISTANT_VERSION = "v2"


class APIError(Exception):
    """An error object returned by the API with a failure status code."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 0,
        status: str = "",
        type: str = "",
        code: Any = None,
        param: Any = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.status = status
        self.type = type
        self.code = code
        self.param = param
        super().__init__(
            f"error, status code: {status_code}, status: {status}, message: {message}"
        )


def _error_from_response(response: httpx.Response) -> APIError:
    status = f"{response.status_code} {response.reason_phrase}".strip()
    try:
        document = response.json()
    except ValueError:
        document = None
    error = document.get("error") if isinstance(document, dict) else None
    if not isinstance(error, dict):
        return APIError(response.text, status_code=response.status_code, status=status)
    message = error.get("message") or ""
    if isinstance(message, list):
        message = ", ".join(str(part) for part in message)
    return APIError(
        str(message),
        status_code=response.status_code,
        status=status,
        type=error.get("type") or "",
        code=error.get("code"),
        param=error.get("param"),
    )


@dataclass
class RawResponse:
    """An undecoded response body together with its headers."""

    content: bytes
    headers: Mapping[str, str] = field(default_factory=dict)
    closed: bool = False

    def read(self) -> bytes:
        if self.closed:
            raise ValueError("read from a closed response")
        return self.content

    def close(self) -> None:
        self.closed = True

    @property
    def rate_limits(self) -> RateLimitHeaders:
        return RateLimitHeaders.from_headers(self.headers)

    def __enter__(self) -> RawResponse:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class Transport:
    """Sends authenticated JSON requests to the API."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        assistant_version: str = DEFAULT_ASSISTANT_VERSION,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.token = token
        self.base_url = base_url
        self.assistant_version = assistant_version
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client(timeout=None)

    def full_url(self, suffix: str) -> str:
        return f"{self.base_url}{suffix}"

    def _send(self, method: str, suffix: str, body: Any, beta: bool) -> httpx.Response:
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.token}",
        }
        content = None
        if body is not None:
            content = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"
        if beta:
            headers["OpenAI-Beta"] = f"assistants={self.assistant_version}"
        response = self._client.request(
            method, self.full_url(suffix), headers=headers, content=content
        )
        if response.status_code < 200 or response.status_code >= 400:
            raise _error_from_response(response)
        return response

    def request(self, method: str, suffix: str, body: Any = None, beta: bool = False) -> Any:
        """Send a request and return the decoded JSON body, or None if it is empty.

        Raises APIError on a failure status and ValueError on a body that is not JSON.
        """
        response = self._send(method, suffix, body, beta)
        if not response.content.strip():
            return None
        return response.json()

    def request_raw(self, method: str, suffix: str, body: Any = None) -> RawResponse:
        """Send a request and return its body undecoded."""
        response = self._send(method, suffix, body, False)
        return RawResponse(content=response.content, headers=dict(response.headers))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()