"""
Pytest configuration and fixtures for carrier rate tests.
"""
import pytest

from carrier_rates.core.config import UPSCredentials
from carrier_rates.modules.shipping.carriers.ups import UPSCarrier, UPSTokenManager
from carrier_rates.schemas.shipping import RateRequest
from tests.helpers import (
    AUTH_URL,
    RATING_URL,
    FakeClock,
    StubHttpClient,
    build_rate_request,
)


@pytest.fixture
def stub_http() -> StubHttpClient:
    return StubHttpClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ups_credentials() -> UPSCredentials:
    return UPSCredentials(
        client_id="test-client",
        client_secret="test-secret",
        auth_url=AUTH_URL,
        rating_url=RATING_URL,
    )


@pytest.fixture
def token_manager(stub_http, ups_credentials, clock) -> UPSTokenManager:
    return UPSTokenManager(stub_http, ups_credentials, clock=clock)


@pytest.fixture
def ups_carrier(stub_http, token_manager) -> UPSCarrier:
    return UPSCarrier(stub_http, token_manager, rating_url=RATING_URL)


@pytest.fixture
def rate_request() -> RateRequest:
    return build_rate_request()
