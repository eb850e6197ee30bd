from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Protocol

from domain.shipping import ShippingOption

DEFAULT_TTL_SECONDS = 60.0


class QuoteCache(Protocol):
    def get(self, key: str) -> list[ShippingOption] | None: ...

    def set(self, key: str, value: list[ShippingOption]) -> None: ...


@dataclass(frozen=True)
class _CacheEntry:
    expires_at: float
    value: tuple[ShippingOption, ...]


class InMemoryQuoteCache(QuoteCache):
    """TTL cache of quote results keyed by request fingerprint.

    Expired entries are evicted lazily when looked up. Empty results are cached
    like any other value so routes without offers are not re-queried.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = threading.Lock()
        self._ttl = ttl_seconds if ttl_seconds > 0 else DEFAULT_TTL_SECONDS
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        with self._lock:
            return self._ttl

    def set_ttl(self, ttl_seconds: float) -> None:
        if ttl_seconds <= 0:
            return
        with self._lock:
            self._ttl = ttl_seconds

    def get(self, key: str) -> list[ShippingOption] | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() < entry.expires_at:
                return list(entry.value)
            del self._entries[key]
            return None

    def set(self, key: str, value: list[ShippingOption]) -> None:
        with self._lock:
            self._entries[key] = _CacheEntry(expires_at=self._clock() + self._ttl, value=tuple(value))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["DEFAULT_TTL_SECONDS", "InMemoryQuoteCache", "QuoteCache"]
