"""Abstract base class for trade data sources."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class TradeSource(ABC):
    """
    Abstract interface for the Trade Service collaborator.

    This abstraction lets the search controller run against the HTTP
    backend in production and an in-memory fake in tests.
    """

    @abstractmethod
    async def fetch(
        self,
        endpoint: str,
        params: dict[str, str],
        user_id: Optional[str] = None,
    ) -> Any:
        """
        Issue a read request against a search endpoint.

        Args:
            endpoint: Endpoint path (e.g. '/trades/filter')
            params: Query parameters, already stringified
            user_id: Acting user, sent as X-User-Id when given

        Returns:
            Decoded JSON payload (a page object or a bare list, by endpoint)

        Raises:
            TransportError: on non-2xx status or transport failure
        """
        pass

    @abstractmethod
    async def get_trade(
        self,
        trade_id: str,
        user_id: Optional[str] = None,
    ) -> dict:
        """
        Retrieve a single trade by its identifier.

        Args:
            trade_id: Trade identifier
            user_id: Acting user, sent as X-User-Id when given

        Returns:
            Raw trade record
        """
        pass

    @abstractmethod
    async def get_all_trades(self, user_id: Optional[str] = None) -> list[dict]:
        """
        Retrieve every trade visible to the user (the trade blotter).

        Args:
            user_id: Acting user, sent as X-User-Id when given

        Returns:
            List of raw trade records
        """
        pass

    async def close(self) -> None:
        """
        Clean up resources (e.g., close HTTP sessions).

        Override this if the data source holds resources that need cleanup.
        """
        pass
