"""
UPS Carrier Implementation

Sequence per get_rates() call:
    acquire token -> build payload -> POST rating -> classify status -> parse

Status classification on the rating call:
- 401 -> AuthenticationError
- 429 -> RateLimitError
- any other >= 400 -> NetworkError (client and server errors alike)

Either the whole call succeeds with a (possibly empty) quote list or it
raises exactly one CarrierIntegrationError.
"""
import logging
from typing import List, Optional

from carrier_rates.core.config import DEFAULT_UPS_RATING_URL, Settings
from carrier_rates.core.exceptions import (
    AuthenticationError,
    InvalidResponseError,
    NetworkError,
    RateLimitError,
)
from carrier_rates.core.http_client import HttpClient, parse_retry_after
from carrier_rates.modules.shipping.carriers import register_carrier
from carrier_rates.modules.shipping.carriers.base import BaseCarrier
from carrier_rates.modules.shipping.carriers.ups.rate_mapper import map_rate_request
from carrier_rates.modules.shipping.carriers.ups.rate_parser import parse_rate_response
from carrier_rates.modules.shipping.carriers.ups.token_manager import (
    CARRIER_ID,
    UPSTokenManager,
)
from carrier_rates.schemas.shipping import RateQuote, RateRequest

logger = logging.getLogger(__name__)


@register_carrier(CARRIER_ID)
class UPSCarrier(BaseCarrier):
    """
    UPS shipping carrier.

    Authentication is handled by the token manager; callers only pass the
    rate request.
    """

    def __init__(
        self,
        http_client: HttpClient,
        token_manager: UPSTokenManager,
        rating_url: Optional[str] = None,
    ):
        self.http_client = http_client
        self.token_manager = token_manager
        self.rating_url = rating_url or DEFAULT_UPS_RATING_URL

    @classmethod
    def from_settings(cls, http_client: HttpClient, settings: Settings) -> "UPSCarrier":
        credentials = settings.ups_credentials()
        return cls(
            http_client=http_client,
            token_manager=UPSTokenManager(http_client, credentials),
            rating_url=credentials.rating_url,
        )

    @property
    def carrier_id(self) -> str:
        return CARRIER_ID

    @property
    def carrier_name(self) -> str:
        return "UPS"

    async def get_rates(self, request: RateRequest) -> List[RateQuote]:
        """Get all available UPS service rates for the request."""
        token = await self.token_manager.get_token()
        payload = map_rate_request(request)

        try:
            response = await self.http_client.post(
                self.rating_url,
                payload,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {token}",
                },
            )
        except Exception as e:
            logger.error(f"UPS rating request failed: {e!r}")
            raise NetworkError("UPS rating request failed", CARRIER_ID, e) from e

        logger.debug(f"UPS rating POST {self.rating_url} -> {response.status}")

        if response.status == 401:
            logger.warning("UPS rating rejected authorization (401)")
            raise AuthenticationError("UPS rejected authorization", CARRIER_ID, response.data)

        if response.status == 429:
            retry_after = parse_retry_after(response.headers)
            logger.warning(f"UPS rating rate limited (retry_after={retry_after})")
            raise RateLimitError(
                "UPS rating rate limit exceeded",
                CARRIER_ID,
                retry_after_seconds=retry_after,
                cause=response.data,
            )

        if response.status >= 400:
            logger.error(f"UPS rating failed with status {response.status}")
            raise NetworkError(
                f"UPS rating request failed with status {response.status}",
                CARRIER_ID,
                response.data,
                details={"status": response.status},
            )

        try:
            quotes = parse_rate_response(response.data)
        except InvalidResponseError:
            logger.error("UPS rating response failed structural validation")
            raise
        except Exception as e:
            logger.error(f"Failed to parse UPS rate response: {e!r}")
            raise InvalidResponseError("Failed to parse UPS rate response", CARRIER_ID, e) from e

        logger.info(f"UPS returned {len(quotes)} rate quote(s)")
        return quotes
