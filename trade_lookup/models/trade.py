"""Trade record models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Raw and normalized trade records are opaque to the search core: they are
# passed through as dicts and only additionalFields / dates / legs are read.
TradeRecord = dict[str, Any]

SETTLEMENT_INSTRUCTIONS_FIELD = "SETTLEMENT_INSTRUCTIONS"

# Date attributes trimmed to YYYY-MM-DD when a single trade is opened
TRADE_DATE_FIELDS = (
    "tradeDate",
    "startDate",
    "maturityDate",
    "executionDate",
    "lastTouchTimestamp",
    "validityStartDate",
)


class AdditionalField(BaseModel):
    """
    A single schema-less attribute attached to a trade.

    fieldValue may be absent; such an entry still names the field but
    carries no value.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    fieldName: str
    fieldValue: Any = Field(default=None, description="Attribute value, usually a string")

