from .base import TradeSource
from .trade_service import HttpTradeSource

__all__ = [
    "TradeSource",
    "HttpTradeSource",
]
