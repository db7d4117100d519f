"""Derive display fields from a trade's additionalFields bag."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from trade_lookup.models import AdditionalField, SETTLEMENT_INSTRUCTIONS_FIELD, TradeRecord

logger = logging.getLogger(__name__)

SETTLEMENT_INSTRUCTIONS_KEY = "settlementInstructions"


def extract_additional_field(record: Mapping[str, Any], field_name: str) -> str:
    """
    Return the value of the first additional field named field_name.

    Args:
        record: Raw or already-normalized trade record
        field_name: Exact, case-sensitive field name to look for

    Returns:
        The field value as a string, or "" when the field is absent,
        malformed or empty
    """
    additional_fields = record.get("additionalFields")
    if not isinstance(additional_fields, list):
        return ""

    for entry in additional_fields:
        if not isinstance(entry, Mapping) or entry.get("fieldName") != field_name:
            continue
        try:
            field = AdditionalField.model_validate(entry)
        except PydanticValidationError:
            return ""
        return str(field.fieldValue) if field.fieldValue else ""

    return ""


def extract_settlement_instructions(record: Mapping[str, Any]) -> str:
    """Return the SETTLEMENT_INSTRUCTIONS additional field, or ""."""
    return extract_additional_field(record, SETTLEMENT_INSTRUCTIONS_FIELD)


def with_settlement_instructions(record: Mapping[str, Any]) -> TradeRecord:
    """
    Return a copy of record with settlementInstructions appended.

    The source record is never mutated. Applying this to an already
    normalized record yields the same settlementInstructions value.
    """
    return {
        **record,
        SETTLEMENT_INSTRUCTIONS_KEY: extract_settlement_instructions(record),
    }
