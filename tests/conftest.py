"""
Pytest configuration and shared fixtures.
"""
import asyncio
from typing import Any, Optional

import httpx
import pytest

from trade_lookup.datasources import TradeSource
from trade_lookup.models import UserSession


def make_trade(trade_id: int, instructions: Optional[str] = None, **attrs) -> dict:
    """Build a raw trade record as the Trade Service returns it."""
    additional_fields = []
    if instructions is not None:
        additional_fields.append(
            {"fieldName": "SETTLEMENT_INSTRUCTIONS", "fieldValue": instructions}
        )
    return {
        "tradeId": trade_id,
        "bookName": "EQ01",
        "tradeStatus": "LIVE",
        "additionalFields": additional_fields,
        **attrs,
    }


class FakeTradeSource(TradeSource):
    """
    In-memory Trade Service.

    responses maps endpoint -> payload (or an Exception to raise).
    Set gate[endpoint] to an asyncio.Event to hold a request until set.
    """

    def __init__(self, responses: Optional[dict[str, Any]] = None):
        self.responses = responses or {}
        self.calls: list[tuple[str, dict[str, str], Optional[str]]] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.trades: dict[str, dict] = {}
        self.all_trades: list[dict] = []

    async def fetch(self, endpoint, params, user_id=None):
        self.calls.append((endpoint, dict(params), user_id))
        gate = self.gates.get(endpoint)
        if gate is not None:
            await gate.wait()
        response = self.responses.get(endpoint)
        if isinstance(response, Exception):
            raise response
        return response

    async def get_trade(self, trade_id, user_id=None):
        self.calls.append((f"/trades/{trade_id}", {}, user_id))
        return self.trades[trade_id]

    async def get_all_trades(self, user_id=None):
        self.calls.append(("/trades", {}, user_id))
        return self.all_trades


@pytest.fixture
def fake_source() -> FakeTradeSource:
    return FakeTradeSource()


@pytest.fixture
def trader() -> UserSession:
    return UserSession(userId="alice", authorization="TRADER_SALES")


class RecordingBackend:
    """httpx.MockTransport handler that records requests and replays routes."""

    def __init__(self):
        self.routes: dict[str, list[httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, *responses: httpx.Response) -> None:
        self.routes.setdefault(path, []).extend(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get(request.url.path)
        if not queue:
            return httpx.Response(404, json={"error": "not found"})
        # Last response repeats once the queue is drained
        return queue.pop(0) if len(queue) > 1 else queue[0]


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def mock_transport(backend: RecordingBackend) -> httpx.MockTransport:
    return httpx.MockTransport(backend)
