"""
HTTP Boundary for Carrier APIs

Carrier adapters only need one capability: POST a body and get back a status
code plus decoded payload. Anything that satisfies HttpClient can be plugged
in, so tests never touch the network.

- HttpxClient: production implementation on httpx.AsyncClient
- MockHttpClient: offline client that echoes bodies or simulates failures

Transport failures are raised as-is. Adapters translate them into
NetworkError; this module does not classify status codes.
"""
import asyncio
import json
import logging
import math
import time
from dataclasses import dataclass, field
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass
class HttpResponse:
    """Status code and decoded body of an HTTP response."""
    status: int
    data: Any = None
    headers: Dict[str, str] = field(default_factory=dict)


@runtime_checkable
class HttpClient(Protocol):
    """
    Minimal HTTP client contract used by carrier adapters.

    `post` may raise to signal a transport failure (timeout, DNS, connection
    reset). Non-2xx statuses are returned, not raised.
    """

    async def post(
        self,
        url: str,
        body: Any,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        ...


def parse_retry_after(headers: Optional[Mapping[str, str]]) -> Optional[float]:
    """
    Parse a Retry-After header into seconds from now.

    Accepts delta-seconds or an HTTP date. Returns None when the header is
    absent or unparseable.
    """
    if not headers:
        return None

    retry_after = None
    for key, value in headers.items():
        if key.lower() == "retry-after":
            retry_after = value
            break
    if not retry_after:
        return None

    try:
        seconds = float(retry_after)
        if math.isfinite(seconds):
            return max(seconds, 0.0)
    except ValueError:
        pass

    try:
        dt = parsedate_to_datetime(retry_after)
        return max(dt.timestamp() - time.time(), 0.0)
    except (ValueError, TypeError):
        pass

    return None


def _decode_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to raw text."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.debug(f"[HTTP] Non-JSON response body ({len(response.content)} bytes)")
        return response.text


class HttpxClient:
    """
    HttpClient backed by httpx.AsyncClient.

    Usage:
        async with HttpxClient(timeout=20.0) as client:
            response = await client.post(url, {"key": "value"})
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        default_headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.timeout = timeout
        self.default_headers = default_headers or {}
        self._client = client

    async def __aenter__(self):
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def init(self):
        """Initialize client without context manager. Must call close() when done."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.default_headers,
            )
        return self

    async def close(self):
        """Close the underlying httpx client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def post(
        self,
        url: str,
        body: Any,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        """
        POST a body and return the decoded response.

        String and bytes bodies are sent verbatim (e.g. form-urlencoded);
        anything else is serialized as JSON.

        Raises:
            httpx.HTTPError: On transport failure
        """
        if self._client is None:
            await self.init()

        if isinstance(body, (str, bytes)):
            response = await self._client.post(url, content=body, headers=headers)
        else:
            response = await self._client.post(url, json=body, headers=headers)

        logger.debug(f"[HTTP] POST {url} -> {response.status_code}")
        return HttpResponse(
            status=response.status_code,
            data=_decode_body(response),
            headers=dict(response.headers),
        )


class MockHttpClient:
    """
    HttpClient that never performs real requests.

    Echoes the request body back with status 200 unless configured to
    simulate a timeout, a malformed JSON body, or a specific error status.
    """

    def __init__(
        self,
        simulate_timeout: bool = False,
        simulate_malformed_json: bool = False,
        simulate_status: Optional[int] = None,
        delay_seconds: float = 0.05,
    ):
        self.simulate_timeout = simulate_timeout
        self.simulate_malformed_json = simulate_malformed_json
        self.simulate_status = simulate_status
        self.delay_seconds = delay_seconds

    async def post(
        self,
        url: str,
        body: Any,
        headers: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        await asyncio.sleep(self.delay_seconds)

        if self.simulate_timeout:
            raise httpx.ReadTimeout(f"Request timeout: {url}")

        if self.simulate_malformed_json:
            raise json.JSONDecodeError("Unexpected token in JSON", "<html>", 0)

        if self.simulate_status is not None:
            return HttpResponse(
                status=self.simulate_status,
                data={"error": f"Simulated {self.simulate_status}"},
            )

        return HttpResponse(status=200, data=body)
