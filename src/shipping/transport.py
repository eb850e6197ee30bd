from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable

import requests
from pydantic import TypeAdapter, ValidationError
from requests import Response
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from .deadline import Clock, DeadlineExceededError, effective_timeout, is_expired
from .errors import (
    MAX_ERROR_BODY_BYTES,
    ShippingAPIError,
    ShippingCancelledError,
    ShippingRequestError,
    ShippingTransientError,
)
from .models import ProviderQuote, QuoteRequest
from .token_manager import TokenManager

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({408, 429})

_QUOTES_ADAPTER = TypeAdapter(list[ProviderQuote])


class AttemptOutcome(StrEnum):
    SUCCESS = "success"
    RETRYABLE = "retryable"
    PERMANENT = "permanent"


@dataclass(frozen=True)
class AttemptResult:
    outcome: AttemptOutcome
    items: list[ProviderQuote] = field(default_factory=list)
    error: ShippingAPIError | None = None


def classify_exception(exc: Exception, *, deadline_expired: bool) -> AttemptResult:
    """Timeouts and an exhausted caller deadline (including one hit while fetching a token) are retryable.

    Other network errors are not.
    """
    error: ShippingAPIError
    if isinstance(exc, ShippingCancelledError):
        error = exc
        outcome = AttemptOutcome.RETRYABLE
    elif isinstance(exc, DeadlineExceededError) or (isinstance(exc, requests.Timeout) and deadline_expired):
        error = ShippingCancelledError("shipping quotes call deadline exceeded")
        outcome = AttemptOutcome.RETRYABLE
    elif isinstance(exc, requests.Timeout):
        error = ShippingTransientError("shipping quotes request timed out")
        outcome = AttemptOutcome.RETRYABLE
    else:
        error = ShippingRequestError(f"shipping quotes request failed: {exc}")
        outcome = AttemptOutcome.PERMANENT
    if error is not exc:
        error.__cause__ = exc
    return AttemptResult(outcome=outcome, error=error)


def classify_response(response: Response) -> AttemptResult:
    status_code = response.status_code
    if not 200 <= status_code < 300:
        body = _truncated_body(response)
        status_line = f"{status_code} {response.reason or ''}".strip()
        message = f"shipping quotes failed: {status_line}: {body}" if body else f"shipping quotes failed: {status_line}"
        if status_code >= 500 or status_code in RETRYABLE_STATUS_CODES:
            return AttemptResult(
                outcome=AttemptOutcome.RETRYABLE,
                error=ShippingTransientError(message, status_code=status_code, payload=body),
            )
        return AttemptResult(
            outcome=AttemptOutcome.PERMANENT,
            error=ShippingRequestError(message, status_code=status_code, payload=body),
        )

    try:
        payload: Any = response.json()
        items = _QUOTES_ADAPTER.validate_python(payload)
    except (ValueError, ValidationError) as exc:
        error = ShippingTransientError("shipping quotes response could not be decoded", status_code=status_code)
        error.__cause__ = exc
        return AttemptResult(outcome=AttemptOutcome.RETRYABLE, error=error)

    return AttemptResult(outcome=AttemptOutcome.SUCCESS, items=items)


def _truncated_body(response: Response) -> str:
    raw = response.content or b""
    return raw[:MAX_ERROR_BODY_BYTES].decode("utf-8", errors="replace").strip()


def build_session(pool_maxsize: int = 10) -> requests.Session:
    # Retries are owned by QuoteTransport; urllib3 must not retry underneath it.
    session = requests.Session()
    adapter = HTTPAdapter(pool_maxsize=pool_maxsize, max_retries=Retry(0, read=False))
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class QuoteTransport:
    """Authenticated POST to the quotes endpoint with a small fixed-backoff retry policy."""

    def __init__(
        self,
        *,
        base_url: str,
        token_manager: TokenManager,
        session: requests.Session | None = None,
        quotes_path: str = "/quotes",
        user_agent: str = "",
        timeout: float = 15.0,
        retry_attempts: int = 2,
        retry_backoff_seconds: float = 0.3,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.quotes_path = quotes_path
        self.user_agent = user_agent
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_backoff_seconds = retry_backoff_seconds
        self.token_manager = token_manager
        self._session = session or build_session()
        self._clock = clock
        self._sleep = sleep

    def fetch_quotes(self, request: QuoteRequest, deadline: float | None = None) -> list[ProviderQuote]:
        attempts = max(self.retry_attempts, 1)
        last_error: ShippingAPIError | None = None
        for attempt in range(1, attempts + 1):
            result = self._attempt(request, deadline)
            if result.outcome is AttemptOutcome.SUCCESS:
                return result.items
            last_error = result.error
            if result.outcome is AttemptOutcome.PERMANENT or attempt == attempts:
                break
            logger.warning(
                "Shipping quotes attempt %d/%d failed, retrying in %.2fs: %s",
                attempt,
                attempts,
                self.retry_backoff_seconds,
                last_error,
            )
            self._sleep(self.retry_backoff_seconds)

        if last_error is None:
            raise ShippingRequestError("shipping quotes failed without a recorded error")
        raise last_error

    def _attempt(self, request: QuoteRequest, deadline: float | None) -> AttemptResult:
        try:
            token = self.token_manager.get_token(deadline)
        except ShippingCancelledError as exc:
            return classify_exception(exc, deadline_expired=True)
        headers = {
            "Authorization": f"Bearer {token}",
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }
        try:
            response = self._session.post(
                f"{self.base_url}{self.quotes_path}",
                json=request.to_payload(),
                headers=headers,
                timeout=effective_timeout(self.timeout, deadline, self._clock),
            )
        except (DeadlineExceededError, requests.RequestException) as exc:
            return classify_exception(exc, deadline_expired=is_expired(deadline, self._clock))

        try:
            return classify_response(response)
        finally:
            response.close()


__all__ = [
    "AttemptOutcome",
    "AttemptResult",
    "QuoteTransport",
    "build_session",
    "classify_exception",
    "classify_response",
]
