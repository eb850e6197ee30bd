from typing import cast

import pytest
import requests

from shipping.provider import ShippingQuoteProvider
from shipping.settings import ShippingConfig
from shipping.token_manager import TokenManager
from tests.helpers.fake_clock import FakeClock
from tests.helpers.stub_http import BASE_URL, TOKEN_URL, StubSession, token_response


@pytest.fixture(scope="function")
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="function")
def session() -> StubSession:
    return StubSession({TOKEN_URL: [token_response()]})


@pytest.fixture(scope="function")
def shipping_config() -> ShippingConfig:
    return ShippingConfig(
        base_url=BASE_URL,
        token_url=TOKEN_URL,
        client_id="client-123",
        client_secret="secret-456",
        user_agent="shop-backend/1.0 (ops@example.com)",
        services="1,2,17",
    )


@pytest.fixture(scope="function")
def token_manager(session: StubSession, clock: FakeClock) -> TokenManager:
    return TokenManager(
        token_url=TOKEN_URL,
        client_id="client-123",
        client_secret="secret-456",
        session=cast(requests.Session, session),
        clock=clock,
    )


@pytest.fixture(scope="function")
def provider(shipping_config: ShippingConfig, session: StubSession, clock: FakeClock) -> ShippingQuoteProvider:
    return ShippingQuoteProvider(
        shipping_config,
        session=cast(requests.Session, session),
        clock=clock,
        sleep=clock.sleep,
    )
