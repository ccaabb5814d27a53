"""
UPS OAuth 2.0 Token Manager

Client-credentials flow against the UPS security endpoint:
- POST grant_type=client_credentials, form-urlencoded
- Authorization: Basic base64(client_id:client_secret)
- Response: {"access_token", "expires_in", "token_type"}

The token lives in a single in-memory slot owned by the manager instance.
A token is reused until 60 seconds before it expires. There is no locking:
two coroutines that find the slot expired may both refresh, and the last
write wins.
"""
import base64
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional
from urllib.parse import urlencode

from carrier_rates.core.config import UPSCredentials
from carrier_rates.core.exceptions import (
    AuthenticationError,
    InvalidResponseError,
    NetworkError,
    RateLimitError,
)
from carrier_rates.core.http_client import HttpClient, parse_retry_after

logger = logging.getLogger(__name__)

CARRIER_ID = "ups"

# Refresh this long before the carrier-reported expiry
TOKEN_EXPIRY_BUFFER_SECONDS = 60
DEFAULT_EXPIRES_IN_SECONDS = 3600


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class TokenCache:
    """Cached bearer token and its absolute expiry in epoch milliseconds."""
    access_token: str
    expires_at: int


def _parse_expires_in(value: Any) -> int:
    """Read expires_in as seconds; missing or malformed falls back to one hour."""
    if value is None or isinstance(value, bool):
        return DEFAULT_EXPIRES_IN_SECONDS
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"UPS token response has unusable expires_in={value!r}, assuming {DEFAULT_EXPIRES_IN_SECONDS}s")
        return DEFAULT_EXPIRES_IN_SECONDS


class UPSTokenManager:
    """
    Produces valid UPS bearer tokens, refreshing on demand.

    Failed refreshes propagate immediately; call get_token() again to retry.
    """

    def __init__(
        self,
        http_client: HttpClient,
        credentials: Optional[UPSCredentials] = None,
        *,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.http_client = http_client
        self.credentials = credentials or UPSCredentials()
        self._clock = clock or _now_ms
        self._cache: Optional[TokenCache] = None

    @property
    def auth_url(self) -> str:
        return self.credentials.auth_url

    def is_token_valid(self) -> bool:
        """True while the cached token has more than the buffer left."""
        if self._cache is None:
            return False
        return self._clock() < self._cache.expires_at - TOKEN_EXPIRY_BUFFER_SECONDS * 1000

    def invalidate(self) -> None:
        """Drop the cached token so the next get_token() refreshes."""
        self._cache = None

    async def get_token(self) -> str:
        """Return the cached token if still valid, otherwise fetch a new one."""
        if self.is_token_valid():
            return self._cache.access_token
        return await self._refresh_token()

    def _basic_auth_header(self) -> str:
        if not self.credentials.client_id:
            raise AuthenticationError(
                "Missing required UPS client id (UPS_CLIENT_ID)",
                CARRIER_ID,
                code="CARRIER_CREDENTIALS_MISSING",
            )
        if not self.credentials.client_secret:
            raise AuthenticationError(
                "Missing required UPS client secret (UPS_CLIENT_SECRET)",
                CARRIER_ID,
                code="CARRIER_CREDENTIALS_MISSING",
            )

        auth_string = f"{self.credentials.client_id}:{self.credentials.client_secret}"
        return base64.b64encode(auth_string.encode("utf-8")).decode("ascii")

    async def _refresh_token(self) -> str:
        auth_header = self._basic_auth_header()
        body = urlencode({"grant_type": "client_credentials"})

        try:
            response = await self.http_client.post(
                self.auth_url,
                body,
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Authorization": f"Basic {auth_header}",
                },
            )
        except Exception as e:
            logger.error(f"UPS OAuth request failed: {e!r}")
            raise NetworkError("Failed to request UPS token", CARRIER_ID, e) from e

        if response.status == 401:
            logger.error("UPS OAuth rejected client credentials (401)")
            raise AuthenticationError("UPS rejected client credentials", CARRIER_ID, response.data)

        if response.status == 429:
            retry_after = parse_retry_after(response.headers)
            logger.warning(f"UPS OAuth rate limited (retry_after={retry_after})")
            raise RateLimitError(
                "UPS token endpoint rate limited",
                CARRIER_ID,
                retry_after_seconds=retry_after,
                cause=response.data,
            )

        if response.status >= 400:
            logger.error(f"UPS OAuth failed with status {response.status}")
            raise AuthenticationError(
                f"UPS token request failed with status {response.status}",
                CARRIER_ID,
                response.data,
                details={"status": response.status},
            )

        data = response.data
        access_token = data.get("access_token") if isinstance(data, dict) else None
        if not isinstance(access_token, str):
            logger.error("UPS OAuth response missing access_token")
            raise InvalidResponseError("UPS token response missing access_token", CARRIER_ID, data)

        expires_in = _parse_expires_in(data.get("expires_in"))
        self._cache = TokenCache(
            access_token=access_token,
            expires_at=self._clock() + expires_in * 1000,
        )

        logger.info(f"UPS OAuth token obtained, expires in {expires_in}s")
        return self._cache.access_token
