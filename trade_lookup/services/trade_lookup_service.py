"""Single-trade lookup and trade blotter."""

import logging
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any, Optional

from trade_lookup.datasources import TradeSource
from trade_lookup.errors import MalformedDataError, ValidationError
from trade_lookup.models import TradeRecord, TRADE_DATE_FIELDS, UserSession
from .field_extractor import with_settlement_instructions
from .response_normalizer import normalize_records

logger = logging.getLogger(__name__)


def to_input_date(value: Any) -> Any:
    """
    Convert an ISO date or timestamp to YYYY-MM-DD.

    Values that are not parseable dates are returned unchanged.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str) or not value:
        return value
    try:
        # Python < 3.11 does not accept a trailing "Z"
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        # Python 3.10 only accepts 3 or 6 fractional digits; keep the date part
        try:
            return date.fromisoformat(value[:10]).isoformat()
        except ValueError:
            logger.debug(f"Leaving unparseable date value unchanged: {value!r}")
            return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()


def normalize_trade_legs(legs: Any) -> list[dict[str, Any]]:
    """Give every leg the identifiers the trade view binds to."""
    if not isinstance(legs, list):
        logger.warning("No trade legs found in the response")
        return []
    logger.debug(f"Found {len(legs)} trade legs in the response")
    normalized = []
    for leg in legs:
        if not isinstance(leg, dict):
            continue
        # Only a missing rate is blanked; 0 and null are kept
        normalized.append({
            **leg,
            "legId": leg.get("legId") or "",
            "legType": leg.get("legType") or "",
            "rate": leg["rate"] if "rate" in leg else "",
            "index": leg.get("index") or "",
        })
    return normalized


def normalize_trade(record: TradeRecord) -> TradeRecord:
    """
    Prepare a single trade for display or editing.

    Date fields are trimmed to YYYY-MM-DD, legs get default identifiers
    and settlementInstructions is derived from additionalFields.
    """
    trade = with_settlement_instructions(record)
    for field in TRADE_DATE_FIELDS:
        if trade.get(field):
            trade[field] = to_input_date(trade[field])
    trade["tradeLegs"] = normalize_trade_legs(trade.get("tradeLegs"))
    return trade


def access_mode(session: Optional[UserSession]) -> str:
    """Return 'edit' for users allowed to amend trades, otherwise 'view'."""
    return "edit" if session is not None and session.can_edit else "view"


class TradeLookupService:
    """Service for opening individual trades and loading the blotter."""

    def __init__(self, datasource: TradeSource, session: Optional[UserSession] = None):
        self.datasource = datasource
        self.session = session

    @property
    def _user_id(self) -> Optional[str]:
        return self.session.userId if self.session else None

    async def lookup_trade(self, trade_id: str) -> TradeRecord:
        """
        Fetch a trade by ID and normalize it for the trade view.

        Args:
            trade_id: Trade identifier as typed by the user

        Returns:
            Normalized trade record

        Raises:
            ValidationError: if trade_id is blank
            TransportError: if the Trade Service call fails
            MalformedDataError: if the Trade Service returns something other than a trade object
        """
        trade_id = (trade_id or "").strip()
        if not trade_id:
            raise ValidationError("Trade ID cannot be empty")

        logger.info(f"Fetching trade {trade_id}")
        record = await self.datasource.get_trade(trade_id, user_id=self._user_id)
        if not isinstance(record, Mapping):
            logger.error(f"Trade {trade_id} response is not an object: {type(record).__name__}")
            raise MalformedDataError(f"The trade service returned an invalid record for trade {trade_id}")
        return normalize_trade(record)

    async def get_blotter(self) -> list[TradeRecord]:
        """Fetch all trades with settlementInstructions derived."""
        records = await self.datasource.get_all_trades(user_id=self._user_id)
        if not isinstance(records, list):
            logger.error(f"Blotter response is not a list: {type(records).__name__}")
            raise MalformedDataError("The trade service returned an invalid trade list")
        logger.info(f"Loaded {len(records)} trades for the blotter")
        return normalize_records(records)
