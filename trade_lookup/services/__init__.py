from .field_extractor import (
    extract_additional_field,
    extract_settlement_instructions,
    with_settlement_instructions,
)
from .query_builder import TradeQuery, build_query, ENDPOINTS, DEFAULT_PAGE_SIZE
from .response_normalizer import normalize_records, normalize_response
from .search_controller import SearchController
from .trade_lookup_service import TradeLookupService, access_mode, normalize_trade
from .session_registry import SessionRegistry, SearchSession

__all__ = [
    "extract_additional_field",
    "extract_settlement_instructions",
    "with_settlement_instructions",
    "TradeQuery",
    "build_query",
    "ENDPOINTS",
    "DEFAULT_PAGE_SIZE",
    "normalize_records",
    "normalize_response",
    "SearchController",
    "TradeLookupService",
    "access_mode",
    "normalize_trade",
    "SessionRegistry",
    "SearchSession",
]
