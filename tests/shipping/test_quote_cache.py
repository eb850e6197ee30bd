from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from domain.shipping import ShippingOption
from shipping.quote_cache import InMemoryQuoteCache
from tests.helpers.fake_clock import FakeClock

SEDEX = ShippingOption(carrier="Correios", service_code="SEDEX", price=Decimal("24.90"), estimated_days=2)


def test_get_returns_none_for_unknown_key(clock: FakeClock) -> None:
    cache = InMemoryQuoteCache(clock=clock)

    assert cache.get("missing") is None


def test_entry_is_served_until_ttl_then_evicted(clock: FakeClock) -> None:
    cache = InMemoryQuoteCache(ttl_seconds=60, clock=clock)
    cache.set("route", [SEDEX])

    clock.advance(59)
    assert cache.get("route") == [SEDEX]

    clock.advance(1)
    assert cache.get("route") is None
    assert len(cache) == 0


def test_empty_result_is_cached(clock: FakeClock) -> None:
    cache = InMemoryQuoteCache(clock=clock)
    cache.set("no-offers", [])

    assert cache.get("no-offers") == []


def test_returned_list_is_a_copy(clock: FakeClock) -> None:
    cache = InMemoryQuoteCache(clock=clock)
    cache.set("route", [SEDEX])

    cache.get("route").clear()  # type: ignore[union-attr]

    assert cache.get("route") == [SEDEX]


def test_set_overwrites_and_restarts_ttl(clock: FakeClock) -> None:
    cache = InMemoryQuoteCache(ttl_seconds=10, clock=clock)
    cache.set("route", [])
    clock.advance(8)
    cache.set("route", [SEDEX])
    clock.advance(8)

    assert cache.get("route") == [SEDEX]


def test_set_ttl_ignores_non_positive_values(clock: FakeClock) -> None:
    cache = InMemoryQuoteCache(ttl_seconds=30, clock=clock)

    cache.set_ttl(0)
    cache.set_ttl(-5)
    assert cache.ttl_seconds == 30

    cache.set_ttl(5)
    assert cache.ttl_seconds == 5


def test_non_positive_ttl_falls_back_to_default(clock: FakeClock) -> None:
    assert InMemoryQuoteCache(ttl_seconds=0, clock=clock).ttl_seconds == 60


def test_concurrent_access_keeps_every_entry(clock: FakeClock) -> None:
    cache = InMemoryQuoteCache(clock=clock)

    def _write_then_read(index: int) -> list[ShippingOption] | None:
        key = f"route-{index}"
        cache.set(key, [SEDEX])
        return cache.get(key)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(_write_then_read, range(200)))

    assert all(result == [SEDEX] for result in results)
    assert len(cache) == 200
