from __future__ import annotations

import json
import threading
from typing import Any, Callable

import requests

BASE_URL = "https://api.example.com"
TOKEN_URL = "https://auth.example.com/oauth/token"
QUOTES_URL = f"{BASE_URL}/quotes"


class StubResponse:
    def __init__(
        self,
        status_code: int = 200,
        *,
        json_body: Any | None = None,
        content: bytes | None = None,
        reason: str = "OK",
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        if content is None:
            content = json.dumps(json_body).encode("utf-8") if json_body is not None else b""
        self.content = content
        self.closed = False

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.content)

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} {self.reason}", response=self)  # type: ignore[arg-type]

    def close(self) -> None:
        self.closed = True


def token_response(token: str = "tok-1", expires_in: int = 3600) -> StubResponse:
    return StubResponse(json_body={"access_token": token, "expires_in": expires_in, "token_type": "Bearer"})


Reply = StubResponse | Exception


class StubSession:
    """Serves queued replies per URL; the last reply for a URL is repeated once the queue drains."""

    def __init__(self, routes: dict[str, list[Reply]] | None = None) -> None:
        self.routes: dict[str, list[Reply]] = {url: list(replies) for url, replies in (routes or {}).items()}
        self.calls: list[dict[str, Any]] = []
        self.on_post: Callable[[str], None] | None = None
        self._lock = threading.Lock()

    def post(
        self,
        url: str,
        *,
        data: dict[str, Any] | None = None,
        json: Any | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> StubResponse:
        with self._lock:
            self.calls.append({"url": url, "data": data, "json": json, "headers": headers, "timeout": timeout})
            queue = self.routes.get(url)
            if not queue:
                raise AssertionError(f"unexpected POST to {url}")
            reply = queue.pop(0) if len(queue) > 1 else queue[0]
        if self.on_post is not None:
            self.on_post(url)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def calls_to(self, url: str) -> list[dict[str, Any]]:
        with self._lock:
            return [call for call in self.calls if call["url"] == url]
