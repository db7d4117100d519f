"""Translate a search mode and its criteria into a Trade Service query."""

from dataclasses import dataclass, field
from typing import Optional

from trade_lookup.errors import ValidationError
from trade_lookup.models import SearchCriteria, SearchMode, CRITERIA_FIELDS

DEFAULT_PAGE_SIZE = 20
SORT_BY = "tradeDate"
SORT_DIR = "desc"

# Endpoint per mode, relative to the Trade Service base URL
ENDPOINTS: dict[SearchMode, str] = {
    SearchMode.STRUCTURED: "/trades/filter",
    SearchMode.RSQL: "/trades/rsql",
    SearchMode.SETTLEMENT: "/trades/search/settlement-instructions",
}

EMPTY_TEXT_MESSAGES: dict[SearchMode, str] = {
    SearchMode.RSQL: "RSQL query cannot be empty",
    SearchMode.SETTLEMENT: "Settlement query cannot be empty",
}


@dataclass(frozen=True)
class TradeQuery:
    """A ready-to-send request: endpoint path plus query parameters."""
    mode: SearchMode
    endpoint: str
    params: dict[str, str] = field(default_factory=dict)

    @property
    def paginated(self) -> bool:
        return "page" in self.params


def _paging_params(page: int, page_size: int) -> dict[str, str]:
    return {
        "page": str(page),
        "size": str(page_size),
        "sortBy": SORT_BY,
        "sortDir": SORT_DIR,
    }


def _required_text(mode: SearchMode, text: Optional[str]) -> str:
    stripped = (text or "").strip()
    if not stripped:
        raise ValidationError(EMPTY_TEXT_MESSAGES[mode])
    return stripped


def build_query(
    mode: SearchMode,
    criteria: Optional[SearchCriteria] = None,
    text: Optional[str] = None,
    page: int = 0,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> TradeQuery:
    """
    Build the outgoing query for the active search mode.

    Args:
        mode: Active search mode
        criteria: Simple-field criteria (STRUCTURED only)
        text: RSQL query or settlement instruction text (RSQL/SETTLEMENT)
        page: Zero-based page index (ignored for SETTLEMENT)
        page_size: Page size (ignored for SETTLEMENT)

    Returns:
        TradeQuery for the mode's fixed endpoint

    Raises:
        ValidationError: if the mode requires text and it is blank
    """
    if mode == SearchMode.STRUCTURED:
        criteria = criteria or SearchCriteria()
        params = {}
        for name in CRITERIA_FIELDS:
            value = (getattr(criteria, name) or "").strip()
            if value:
                params[name] = value
        params.update(_paging_params(page, page_size))

    elif mode == SearchMode.RSQL:
        params = {"query": _required_text(mode, text)}
        params.update(_paging_params(page, page_size))

    elif mode == SearchMode.SETTLEMENT:
        # Unpaginated by contract: no page/size/sort parameters
        params = {"instructions": _required_text(mode, text)}

    else:
        raise ValueError(f"Unsupported search mode: {mode}")

    return TradeQuery(mode=mode, endpoint=ENDPOINTS[mode], params=params)
