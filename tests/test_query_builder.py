"""
Tests for building Trade Service queries per search mode.
"""
import pytest

from trade_lookup.errors import ValidationError
from trade_lookup.models import SearchCriteria, SearchMode
from trade_lookup.services.query_builder import build_query, ENDPOINTS


def test_structured_query_contains_exactly_non_empty_fields():
    criteria = SearchCriteria(book="EQ01", tradeStatus="LIVE", endDate="2024-01-01")
    query = build_query(SearchMode.STRUCTURED, criteria=criteria, page=1)

    assert query.endpoint == "/trades/filter"
    assert query.params == {
        "book": "EQ01",
        "tradeStatus": "LIVE",
        "endDate": "2024-01-01",
        "page": "1",
        "size": "20",
        "sortBy": "tradeDate",
        "sortDir": "desc",
    }


def test_structured_query_omits_whitespace_fields():
    criteria = SearchCriteria(
        book="   ",
        counterparty="\t",
        trader="",
        tradeStatus=" NEW ",
        startDate=" ",
        endDate="2024-02-01",
    )
    query = build_query(SearchMode.STRUCTURED, criteria=criteria)

    assert "book" not in query.params
    assert "counterparty" not in query.params
    assert "trader" not in query.params
    assert "startDate" not in query.params
    assert query.params["tradeStatus"] == "NEW"
    assert query.params["page"] == "0"


def test_structured_query_without_criteria_only_pages():
    query = build_query(SearchMode.STRUCTURED)
    assert set(query.params) == {"page", "size", "sortBy", "sortDir"}
    assert query.paginated


def test_rsql_query():
    query = build_query(SearchMode.RSQL, text="book.bookName==EQ01", page=2, page_size=50)

    assert query.endpoint == "/trades/rsql"
    assert query.params == {
        "query": "book.bookName==EQ01",
        "page": "2",
        "size": "50",
        "sortBy": "tradeDate",
        "sortDir": "desc",
    }


@pytest.mark.parametrize("text", ["", "   ", None])
def test_rsql_requires_query(text):
    with pytest.raises(ValidationError) as exc_info:
        build_query(SearchMode.RSQL, text=text)
    assert exc_info.value.message == "RSQL query cannot be empty"


def test_settlement_query_is_unpaginated():
    query = build_query(SearchMode.SETTLEMENT, text="CHAPS", page=3)

    assert query.endpoint == "/trades/search/settlement-instructions"
    assert query.params == {"instructions": "CHAPS"}
    assert not query.paginated


@pytest.mark.parametrize("text", ["", " \n "])
def test_settlement_requires_instructions(text):
    with pytest.raises(ValidationError) as exc_info:
        build_query(SearchMode.SETTLEMENT, text=text)
    assert exc_info.value.message == "Settlement query cannot be empty"


def test_each_mode_has_distinct_endpoint():
    assert len(set(ENDPOINTS.values())) == len(SearchMode)
