"""
Tests for mapping Trade Service payloads to PageResult.
"""
import pytest

from trade_lookup.errors import MalformedDataError
from trade_lookup.models import SearchMode
from trade_lookup.services.response_normalizer import normalize_records, normalize_response

from .conftest import make_trade


def test_settlement_list_gets_synthesized_paging():
    payload = [make_trade(1, "A"), make_trade(2, "B"), make_trade(3)]
    result = normalize_response(payload, SearchMode.SETTLEMENT)

    assert len(result.items) == 3
    assert result.totalPages == 1
    assert result.totalElements == 3
    assert result.currentPage == 0
    assert [t["settlementInstructions"] for t in result.items] == ["A", "B", ""]


def test_paged_payload_passes_metadata_through():
    payload = {
        "content": [make_trade(5, "X"), make_trade(4)],
        "totalPages": 7,
        "totalElements": 130,
        "number": 2,
    }
    result = normalize_response(payload, SearchMode.STRUCTURED, page=2)

    assert [t["tradeId"] for t in result.items] == [5, 4]
    assert result.items[0]["settlementInstructions"] == "X"
    assert result.totalPages == 7
    assert result.totalElements == 130
    assert result.currentPage == 2
    assert result.hasPrevious
    assert result.hasNext


def test_missing_content_is_empty_page():
    result = normalize_response({"totalPages": 4}, SearchMode.RSQL, page=1)
    assert result.items == []
    assert result.totalPages == 0
    assert result.totalElements == 0


def test_malformed_records_degrade_without_failing_batch():
    records = [
        make_trade(1, "OK"),
        "not a record",
        {"tradeId": 3, "additionalFields": {"fieldName": "SETTLEMENT_INSTRUCTIONS"}},
    ]
    items = normalize_records(records)

    assert len(items) == 3
    assert items[0]["settlementInstructions"] == "OK"
    assert items[1] == {"settlementInstructions": ""}
    assert items[2]["tradeId"] == 3
    assert items[2]["settlementInstructions"] == ""


def test_wrong_payload_shape_raises():
    with pytest.raises(MalformedDataError):
        normalize_response({"content": []}, SearchMode.SETTLEMENT)
    with pytest.raises(MalformedDataError):
        normalize_response([make_trade(1)], SearchMode.STRUCTURED)


def test_null_settlement_payload_is_empty():
    result = normalize_response(None, SearchMode.SETTLEMENT)
    assert result.items == []
    assert result.totalElements == 0
    assert result.totalPages == 1
