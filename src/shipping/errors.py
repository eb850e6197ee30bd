from __future__ import annotations

from typing import Any

MAX_ERROR_BODY_BYTES = 4096


class ShippingConfigError(ValueError):
    """Raised at construction time when required provider settings are missing or invalid."""


class ShippingAPIError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, payload: Any | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ShippingAuthError(ShippingAPIError):
    """The token endpoint could not issue an access token."""


class ShippingTransientError(ShippingAPIError):
    """A failure worth retrying: timeouts, 5xx/408/429 responses and undecodable bodies."""


class ShippingRequestError(ShippingAPIError):
    """A permanent failure that is surfaced without retrying."""


class ShippingCancelledError(ShippingAPIError):
    """The caller's time budget ran out."""


__all__ = [
    "ShippingAPIError",
    "ShippingAuthError",
    "ShippingCancelledError",
    "ShippingConfigError",
    "ShippingRequestError",
    "ShippingTransientError",
]
