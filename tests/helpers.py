"""
Test doubles and payload builders shared by the test modules.
"""
from typing import Any, Callable, Dict, List, Optional, Union

from carrier_rates.core.http_client import HttpResponse
from carrier_rates.schemas.shipping import RateRequest

AUTH_URL = "https://auth.test/security/v1/oauth/token"
RATING_URL = "https://rating.test/api/rating/v2409/Shop"

StubbedResponse = Union[HttpResponse, BaseException, Callable[[], HttpResponse]]


class StubHttpClient:
    """
    Records POST calls and replays queued responses per endpoint.

    Queue an HttpResponse to return it, an exception instance to raise it,
    or a callable to compute the response at call time.
    """

    def __init__(self, auth_url: str = AUTH_URL, rating_url: str = RATING_URL):
        self.auth_url = auth_url
        self.rating_url = rating_url
        self.auth_calls: List[Dict[str, Any]] = []
        self.rating_calls: List[Dict[str, Any]] = []
        self._auth_responses: List[StubbedResponse] = []
        self._rating_responses: List[StubbedResponse] = []

    def stub_auth_response(self, *responses: StubbedResponse) -> "StubHttpClient":
        self._auth_responses.extend(responses)
        return self

    def stub_rating_response(self, *responses: StubbedResponse) -> "StubHttpClient":
        self._rating_responses.extend(responses)
        return self

    async def post(
        self,
        url: str,
        body: Any,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        record = {"url": url, "body": body, "headers": headers or {}}
        if url == self.auth_url:
            self.auth_calls.append(record)
            queue = self._auth_responses
        elif url == self.rating_url:
            self.rating_calls.append(record)
            queue = self._rating_responses
        else:
            raise AssertionError(f"StubHttpClient: unexpected URL {url}")

        if not queue:
            raise AssertionError(f"StubHttpClient: no stubbed response for {url}")
        stubbed = queue.pop(0)
        if isinstance(stubbed, BaseException):
            raise stubbed
        if callable(stubbed):
            return stubbed()
        return stubbed


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now_ms: int = 1_700_000_000_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)


def ups_auth_response(expires_in: Any = 3600, token: str = "test-token-abc123") -> HttpResponse:
    """Realistic UPS OAuth token response."""
    return HttpResponse(
        status=200,
        data={
            "access_token": token,
            "token_type": "Bearer",
            "expires_in": expires_in,
        },
    )


def ups_rating_response(rated_shipment: Any = None) -> HttpResponse:
    """UPS Rating API success response; defaults to two services."""
    if rated_shipment is None:
        rated_shipment = [
            {
                "Service": {"Code": "03", "Description": "Ground"},
                "TotalCharges": {"CurrencyCode": "USD", "MonetaryValue": "24.50"},
                "TimeInTransit": {"BusinessDaysInTransit": "3"},
            },
            {
                "Service": {"Code": "12", "Description": "3 Day Select"},
                "TotalCharges": {"CurrencyCode": "USD", "MonetaryValue": "38.00"},
                "TimeInTransit": {"BusinessDaysInTransit": "3"},
            },
        ]
    return HttpResponse(status=200, data={"RateResponse": {"RatedShipment": rated_shipment}})


def build_rate_request(packages: Optional[List[Dict[str, Any]]] = None) -> RateRequest:
    return RateRequest.model_validate({
        "origin": {
            "line1": "123 Origin St",
            "city": "Timonium",
            "stateOrProvince": "MD",
            "postalCode": "21093",
            "country": "US",
        },
        "destination": {
            "line1": "456 Dest Ave",
            "city": "Alpharetta",
            "stateOrProvince": "GA",
            "postalCode": "30005",
            "country": "US",
        },
        "packages": packages or [
            {"weight": 2.5, "length": 10, "width": 8, "height": 6, "weightUnit": "lb", "dimensionUnit": "in"},
        ],
    })
