"""Map mode-specific Trade Service payloads to a uniform PageResult."""

import logging
from collections.abc import Mapping
from typing import Any, Iterable

from trade_lookup.errors import MalformedDataError
from trade_lookup.models import PageResult, SearchMode, TradeRecord
from .field_extractor import with_settlement_instructions, SETTLEMENT_INSTRUCTIONS_KEY

logger = logging.getLogger(__name__)


def _normalize_record(record: Any) -> TradeRecord:
    """Normalize one record, degrading to an empty derived field on failure."""
    try:
        if not isinstance(record, Mapping):
            raise MalformedDataError(f"Trade record is not an object: {type(record).__name__}")
        return with_settlement_instructions(record)
    except Exception as e:
        logger.warning(f"Skipping settlement extraction for malformed record: {e}")
        base = dict(record) if isinstance(record, Mapping) else {}
        base[SETTLEMENT_INSTRUCTIONS_KEY] = ""
        return base


def normalize_records(records: Iterable[Any]) -> list[TradeRecord]:
    """
    Apply the field extractor to every record, preserving backend order.

    Individual malformed records never abort the batch.
    """
    return [_normalize_record(record) for record in records]


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def normalize_response(payload: Any, mode: SearchMode, page: int = 0) -> PageResult:
    """
    Normalize a raw Trade Service payload for the given mode.

    Args:
        payload: Decoded JSON body
        mode: Mode that produced the request
        page: Page that was requested (STRUCTURED/RSQL)

    Returns:
        PageResult with normalized items

    Raises:
        MalformedDataError: if the payload's top-level shape does not match the mode
    """
    if mode == SearchMode.SETTLEMENT:
        if payload is None:
            payload = []
        if not isinstance(payload, list):
            raise MalformedDataError("Expected a list of trades from settlement search")
        items = normalize_records(payload)
        return PageResult(
            items=items,
            totalPages=1,
            totalElements=len(items),
            currentPage=0,
        )

    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise MalformedDataError(f"Expected a page of trades from {mode.value} search")

    content = payload.get("content")
    if not isinstance(content, list):
        return PageResult(items=[], totalPages=0, totalElements=0, currentPage=page)

    return PageResult(
        items=normalize_records(content),
        totalPages=_as_int(payload.get("totalPages")),
        totalElements=_as_int(payload.get("totalElements")),
        currentPage=page,
    )
