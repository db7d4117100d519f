"""HTTP Trade Service data source implementation."""

import logging
import asyncio
from typing import Any, Optional
from urllib.parse import quote

import httpx

from trade_lookup.errors import TransportError
from .base import TradeSource

logger = logging.getLogger(__name__)

# API constants
DEFAULT_API_URL = "http://localhost:8080/api"
REQUEST_TIMEOUT = 30.0
MAX_RETRIES = 3
RETRY_DELAY = 1.0
RATE_LIMIT_DELAY = 0.5

TRADES_ENDPOINT = "/trades"
TRADE_BY_ID_ENDPOINT = "/trades/{trade_id}"


class HttpTradeSource(TradeSource):
    """
    Data source implementation using the Trade Service REST API.

    Timeouts and HTTP 429 responses are retried; every other failure is
    raised as TransportError so callers only handle one error type.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = REQUEST_TIMEOUT,
        max_retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Trade Service data source.

        Args:
            api_url: Base URL of the Trade Service API
            timeout: Per-request timeout in seconds
            max_retries: Retries for timeouts and rate limiting
            retry_delay: Delay between timeout retries in seconds
            transport: Optional httpx transport (used to plug in fakes)
        """
        self.api_url = api_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _make_request(
        self,
        endpoint: str,
        params: Optional[dict[str, str]] = None,
        user_id: Optional[str] = None,
        retry_count: int = 0,
    ) -> Any:
        """
        Make HTTP GET request with timeout handling and retries.

        Args:
            endpoint: API endpoint path
            params: Query parameters
            user_id: Acting user for the X-User-Id header
            retry_count: Current retry attempt

        Returns:
            Response JSON data
        """
        client = await self._get_client()
        headers = {"X-User-Id": user_id} if user_id else None

        try:
            response = await client.get(
                endpoint,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            if retry_count < self.max_retries:
                logger.warning(
                    f"Request to {endpoint} timed out (attempt {retry_count + 1}/{self.max_retries}). "
                    f"Retrying in {self.retry_delay}s..."
                )
                await asyncio.sleep(self.retry_delay)
                return await self._make_request(endpoint, params, user_id, retry_count + 1)
            logger.error(f"Request to {endpoint} failed after {self.max_retries} retries: {e}")
            raise TransportError("The trade service did not respond in time") from e

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            # Handle rate limiting (429 Too Many Requests)
            if status == 429 and retry_count < self.max_retries:
                logger.warning(
                    f"Rate limited (429) on {endpoint} (attempt {retry_count + 1}/{self.max_retries}). "
                    f"Retrying in {RATE_LIMIT_DELAY}s..."
                )
                await asyncio.sleep(RATE_LIMIT_DELAY)
                return await self._make_request(endpoint, params, user_id, retry_count + 1)

            logger.error(f"HTTP error {status} for {endpoint}: {e}")
            raise TransportError(
                f"The trade service returned an error (HTTP {status})",
                status_code=status,
            ) from e

        except httpx.HTTPError as e:
            logger.error(f"Transport error for {endpoint}: {e}")
            raise TransportError("Unable to reach the trade service") from e

        except ValueError as e:
            # Body was not valid JSON
            logger.error(f"Undecodable response from {endpoint}: {e}")
            raise TransportError("The trade service returned an unreadable response") from e

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.api_url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def fetch(
        self,
        endpoint: str,
        params: dict[str, str],
        user_id: Optional[str] = None,
    ) -> Any:
        """Issue a read request against a search endpoint."""
        logger.debug(f"GET {endpoint} params={params}")
        return await self._make_request(endpoint, params, user_id)

    async def get_trade(
        self,
        trade_id: str,
        user_id: Optional[str] = None,
    ) -> dict:
        """Retrieve a single trade by its identifier."""
        endpoint = TRADE_BY_ID_ENDPOINT.format(trade_id=quote(str(trade_id), safe=""))
        data = await self._make_request(endpoint, user_id=user_id)
        return data if data else {}

    async def get_all_trades(self, user_id: Optional[str] = None) -> list[dict]:
        """Retrieve every trade visible to the user."""
        data = await self._make_request(TRADES_ENDPOINT, user_id=user_id)
        return data if data else []

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
