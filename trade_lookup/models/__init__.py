from .search import (
    SearchMode,
    SearchStatus,
    SearchCriteria,
    CRITERIA_FIELDS,
    PageResult,
    ControllerState,
)
from .trade import (
    TradeRecord,
    AdditionalField,
    SETTLEMENT_INSTRUCTIONS_FIELD,
    TRADE_DATE_FIELDS,
)
from .session import UserSession
from .api import (
    SessionCreateRequest,
    SessionResponse,
    ModeUpdate,
    TextUpdate,
    TradeView,
)

__all__ = [
    "SearchMode",
    "SearchStatus",
    "SearchCriteria",
    "CRITERIA_FIELDS",
    "PageResult",
    "ControllerState",
    "TradeRecord",
    "AdditionalField",
    "SETTLEMENT_INSTRUCTIONS_FIELD",
    "TRADE_DATE_FIELDS",
    "UserSession",
    "SessionCreateRequest",
    "SessionResponse",
    "ModeUpdate",
    "TextUpdate",
    "TradeView",
]
