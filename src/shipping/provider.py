from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Callable, Sequence

import requests

from config import AppSettings, config
from domain.shipping import Parcel, ShippingOption

from .deadline import Clock, deadline_from_timeout
from .mapper import map_provider_quotes
from .quote_cache import InMemoryQuoteCache, QuoteCache
from .request_builder import build_quote_request, quote_fingerprint
from .settings import ShippingConfig, normalize_quotes_path
from .token_manager import TokenManager
from .transport import QuoteTransport, build_session

logger = logging.getLogger(__name__)


class ShippingQuoteProvider:
    """Requests delivery quotes from the shipping API and returns normalized options.

    Results are cached per request fingerprint for the configured TTL; failures are
    never cached.
    """

    def __init__(
        self,
        shipping_config: ShippingConfig,
        *,
        session: requests.Session | None = None,
        cache: QuoteCache | None = None,
        clock: Clock = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        cfg = shipping_config.normalized()
        cfg.validate()

        self.config = cfg
        self.services = cfg.services
        self._clock = clock
        http = session or build_session()
        self.token_manager = TokenManager(
            token_url=cfg.token_url,
            client_id=cfg.client_id,
            client_secret=cfg.client_secret,
            session=http,
            timeout=cfg.timeout_seconds,
            clock=clock,
        )
        self.transport = QuoteTransport(
            base_url=cfg.base_url,
            token_manager=self.token_manager,
            session=http,
            quotes_path=cfg.quotes_path,
            user_agent=cfg.user_agent,
            timeout=cfg.timeout_seconds,
            retry_attempts=cfg.retry_attempts,
            retry_backoff_seconds=cfg.retry_backoff_seconds,
            clock=clock,
            sleep=sleep,
        )
        if cache is None:
            cache = InMemoryQuoteCache(cfg.cache_ttl_seconds, clock=clock)
        self.cache: QuoteCache = cache

    def with_quotes_path(self, path: str) -> ShippingQuoteProvider:
        normalized = normalize_quotes_path(path)
        if normalized:
            self.transport.quotes_path = normalized
        return self

    def with_services(self, services: str) -> ShippingQuoteProvider:
        if services:
            self.services = services
        return self

    def with_cache_ttl(self, ttl_seconds: float) -> ShippingQuoteProvider:
        if ttl_seconds > 0 and isinstance(self.cache, InMemoryQuoteCache):
            self.cache.set_ttl(ttl_seconds)
        return self

    def with_retry(self, attempts: int, backoff_seconds: float) -> ShippingQuoteProvider:
        if attempts >= 1:
            self.transport.retry_attempts = attempts
        if backoff_seconds > 0:
            self.transport.retry_backoff_seconds = backoff_seconds
        return self

    def get_quotes(
        self,
        origin_postal_code: str,
        dest_postal_code: str,
        parcels: Sequence[Parcel],
        insured_value: float | Decimal,
        *,
        timeout: float | None = None,
    ) -> list[ShippingOption]:
        request = build_quote_request(
            origin_postal_code,
            dest_postal_code,
            parcels,
            insured_value,
            services=self.services,
        )
        key = quote_fingerprint(request)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Shipping quote cache hit key=%s", key)
            return cached

        logger.debug("Shipping quote cache miss key=%s", key)
        items = self.transport.fetch_quotes(request, deadline_from_timeout(timeout, self._clock))
        options = map_provider_quotes(items)
        self.cache.set(key, options)
        logger.info(
            "Fetched %d shipping options (%d upstream quotes) from=%s to=%s",
            len(options),
            len(items),
            request.from_.postal_code,
            request.to.postal_code,
        )
        return options


def build_provider_from_settings(settings: AppSettings | None = None) -> ShippingQuoteProvider:
    return ShippingQuoteProvider(ShippingConfig.from_settings(settings or config()))


__all__ = ["ShippingQuoteProvider", "build_provider_from_settings"]
