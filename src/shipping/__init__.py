"""Client for the third-party shipping-quote API.

The package authenticates with an OAuth2 client-credentials grant, posts quote
requests with a bounded retry policy and caches normalized results for a short TTL.
``ShippingQuoteProvider.get_quotes`` is the entry point used by the rest of the
application.
"""

from .errors import (
    ShippingAPIError,
    ShippingAuthError,
    ShippingCancelledError,
    ShippingConfigError,
    ShippingRequestError,
    ShippingTransientError,
)
from .provider import ShippingQuoteProvider, build_provider_from_settings
from .settings import ShippingConfig

__all__ = [
    "ShippingAPIError",
    "ShippingAuthError",
    "ShippingCancelledError",
    "ShippingConfig",
    "ShippingConfigError",
    "ShippingQuoteProvider",
    "ShippingRequestError",
    "ShippingTransientError",
    "build_provider_from_settings",
]
