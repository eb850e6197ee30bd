from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any

import requests

from .deadline import Clock, DeadlineExceededError, effective_timeout, is_expired, time_left
from .errors import MAX_ERROR_BODY_BYTES, ShippingAuthError, ShippingCancelledError

logger = logging.getLogger(__name__)

DEFAULT_SKEW_SECONDS = 30.0


@dataclass(frozen=True)
class AccessToken:
    value: str
    expires_at: float


class TokenManager:
    """Obtains and caches an OAuth2 access token using the client-credentials grant.

    A cached token is served without I/O until it is within ``skew_seconds`` of
    expiry. Refreshes run outside the token lock; concurrent callers that find the
    token stale queue on a separate refresh lock and re-check before fetching, so
    only one refresh request is in flight at a time.
    """

    def __init__(
        self,
        *,
        token_url: str,
        client_id: str,
        client_secret: str,
        session: requests.Session | None = None,
        timeout: float = 15.0,
        skew_seconds: float = DEFAULT_SKEW_SECONDS,
        clock: Clock = time.monotonic,
    ) -> None:
        self.token_url = token_url
        self.client_id = client_id
        self._client_secret = client_secret
        self.timeout = timeout
        self.skew_seconds = skew_seconds
        self._session = session or requests.Session()
        self._clock = clock
        self._lock = threading.Lock()
        self._refresh_lock = threading.Lock()
        self._token: AccessToken | None = None

    def get_token(self, deadline: float | None = None) -> str:
        cached = self._valid_token()
        if cached is not None:
            return cached.value

        if not self._acquire_refresh_lock(deadline):
            raise ShippingCancelledError("deadline exceeded while waiting for token refresh")
        try:
            cached = self._valid_token()
            if cached is not None:
                return cached.value
            fresh = self._request_token(deadline)
            with self._lock:
                self._token = fresh
            return fresh.value
        finally:
            self._refresh_lock.release()

    def invalidate(self) -> None:
        with self._lock:
            self._token = None

    def _valid_token(self) -> AccessToken | None:
        with self._lock:
            token = self._token
        if token is None:
            return None
        if self._clock() < token.expires_at - self.skew_seconds:
            return token
        return None

    def _acquire_refresh_lock(self, deadline: float | None) -> bool:
        remaining = time_left(deadline, self._clock)
        if remaining is None:
            return self._refresh_lock.acquire()
        return self._refresh_lock.acquire(timeout=max(remaining, 0.0))

    def _request_token(self, deadline: float | None) -> AccessToken:
        form = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self._client_secret,
        }
        try:
            response = self._session.post(
                self.token_url,
                data=form,
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Accept": "application/json",
                },
                timeout=effective_timeout(self.timeout, deadline, self._clock),
            )
            response.raise_for_status()
        except DeadlineExceededError as exc:
            raise ShippingCancelledError("deadline exceeded before token request") from exc
        except requests.HTTPError as exc:
            resp = exc.response
            status_code = getattr(resp, "status_code", None)
            body = resp.text[:MAX_ERROR_BODY_BYTES] if resp is not None else None
            raise ShippingAuthError("token request rejected", status_code=status_code, payload=body) from exc
        except requests.Timeout as exc:
            if is_expired(deadline, self._clock):
                raise ShippingCancelledError("deadline exceeded during token request") from exc
            raise ShippingAuthError("token endpoint timed out") from exc
        except requests.RequestException as exc:
            raise ShippingAuthError("token endpoint unreachable") from exc

        if not 200 <= response.status_code < 300:
            raise ShippingAuthError(
                "token request rejected",
                status_code=response.status_code,
                payload=response.text[:MAX_ERROR_BODY_BYTES],
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise ShippingAuthError("token endpoint returned invalid JSON", payload=response.text) from exc

        if not isinstance(payload, dict) or not payload.get("access_token"):
            raise ShippingAuthError("token response missing access_token", status_code=response.status_code)

        expires_in = self._parse_expires_in(payload.get("expires_in"))
        logger.info("Obtained shipping API access token expires_in=%ss", expires_in)
        return AccessToken(value=str(payload["access_token"]), expires_at=self._clock() + expires_in)

    @staticmethod
    def _parse_expires_in(value: Any) -> float:
        try:
            seconds = float(value)
        except (TypeError, ValueError):
            return 0.0
        return max(seconds, 0.0)


__all__ = ["AccessToken", "TokenManager"]
