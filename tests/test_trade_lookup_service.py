"""
Tests for single-trade lookup normalization and the blotter.
"""
import pytest

from trade_lookup.errors import MalformedDataError, ValidationError
from trade_lookup.models import UserSession
from trade_lookup.services import TradeLookupService, access_mode
from trade_lookup.services.trade_lookup_service import normalize_trade, to_input_date

from .conftest import make_trade


def test_to_input_date():
    assert to_input_date("2024-03-15T10:30:00") == "2024-03-15"
    assert to_input_date("2024-03-15T23:30:00-02:00") == "2024-03-16"
    assert to_input_date("2024-03-15T10:30:00Z") == "2024-03-15"
    assert to_input_date("2024-03-15") == "2024-03-15"
    assert to_input_date("2024-01-15T10:30:00.12") == "2024-01-15"
    assert to_input_date("2024-01-15T10:30:00.1234") == "2024-01-15"
    assert to_input_date("not a date") == "not a date"
    assert to_input_date(None) is None


def test_normalize_trade_dates_legs_and_settlement():
    record = make_trade(
        10,
        "Pay to DE89 3704",
        tradeDate="2024-03-15T00:00:00",
        maturityDate="2029-03-15",
        lastTouchTimestamp="2024-03-15T16:45:12.123",
        notional=0,
        tradeLegs=[
            {"legId": 101, "legType": "Fixed", "rate": 0.0, "notional": 0},
            {"legType": None},
            {"legId": 103, "legType": "Float", "rate": None, "index": "SOFR"},
        ],
    )
    trade = normalize_trade(record)

    assert trade["tradeDate"] == "2024-03-15"
    assert trade["maturityDate"] == "2029-03-15"
    assert trade["lastTouchTimestamp"] == "2024-03-15"
    assert trade["settlementInstructions"] == "Pay to DE89 3704"
    assert trade["notional"] == 0
    assert trade["tradeLegs"][0] == {
        "legId": 101,
        "legType": "Fixed",
        "rate": 0.0,
        "index": "",
        "notional": 0,
    }
    assert trade["tradeLegs"][1] == {"legId": "", "legType": "", "rate": "", "index": ""}
    assert trade["tradeLegs"][2] == {"legId": 103, "legType": "Float", "rate": None, "index": "SOFR"}
    # Source record untouched
    assert record["tradeDate"] == "2024-03-15T00:00:00"


def test_normalize_trade_without_legs():
    assert normalize_trade({"tradeId": 1})["tradeLegs"] == []


def test_access_mode():
    assert access_mode(UserSession(userId="a", authorization="TRADER_SALES")) == "edit"
    assert access_mode(UserSession(userId="b", authorization="MO")) == "edit"
    assert access_mode(UserSession(userId="c", authorization="SUPPORT")) == "view"
    assert access_mode(None) == "view"


@pytest.mark.asyncio
async def test_lookup_trade(fake_source, trader):
    fake_source.trades["42"] = make_trade(42, tradeDate="2024-01-02T09:00:00")
    service = TradeLookupService(fake_source, session=trader)

    trade = await service.lookup_trade(" 42 ")

    assert trade["tradeId"] == 42
    assert trade["tradeDate"] == "2024-01-02"
    assert fake_source.calls == [("/trades/42", {}, "alice")]


@pytest.mark.asyncio
async def test_lookup_blank_id_is_rejected(fake_source):
    service = TradeLookupService(fake_source)
    with pytest.raises(ValidationError):
        await service.lookup_trade("  ")
    assert fake_source.calls == []


@pytest.mark.asyncio
async def test_blotter_derives_settlement_instructions(fake_source, trader):
    fake_source.all_trades = [make_trade(1, "SSI"), make_trade(2)]
    service = TradeLookupService(fake_source, session=trader)

    trades = await service.get_blotter()

    assert [t["settlementInstructions"] for t in trades] == ["SSI", ""]


@pytest.mark.asyncio
async def test_lookup_trade_rejects_non_object_record(fake_source, trader):
    fake_source.trades["7"] = [1, 2]
    service = TradeLookupService(fake_source, session=trader)

    with pytest.raises(MalformedDataError):
        await service.lookup_trade("7")


@pytest.mark.asyncio
async def test_blotter_rejects_non_list_payload(fake_source, trader):
    fake_source.all_trades = {"content": []}
    service = TradeLookupService(fake_source, session=trader)

    with pytest.raises(MalformedDataError):
        await service.get_blotter()
