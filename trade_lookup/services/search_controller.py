"""Multi-mode trade search controller."""

import logging
from typing import Callable, Optional

from trade_lookup.datasources import TradeSource
from trade_lookup.errors import TradeLookupError, ValidationError
from trade_lookup.models import (
    CRITERIA_FIELDS,
    ControllerState,
    PageResult,
    SearchMode,
    UserSession,
)
from .query_builder import build_query, DEFAULT_PAGE_SIZE
from .response_normalizer import normalize_response

logger = logging.getLogger(__name__)

GENERIC_SEARCH_ERROR = "An error occurred while searching"

StateListener = Callable[[ControllerState], None]


class SearchController:
    """
    Owns the search state of one UI session.

    State moves IDLE -> SEARCHING -> RESULTS | NO_RESULTS | ERROR and back
    to SEARCHING on the next search, or to IDLE on clear(). Every change
    replaces the immutable ControllerState snapshot and notifies
    subscribers with the new one.

    Each request carries a sequence number. A response is only applied if
    no newer search, mode switch or clear happened while it was in flight,
    so results always belong to the most recently issued request.
    """

    def __init__(
        self,
        datasource: TradeSource,
        session: Optional[UserSession] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.datasource = datasource
        self.session = session
        self.page_size = page_size
        self._state = ControllerState()
        self._listeners: list[StateListener] = []
        self._sequence = 0

    @property
    def state(self) -> ControllerState:
        """Current immutable state snapshot."""
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener called with every new state snapshot.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, state: ControllerState) -> None:
        self._state = state
        for listener in list(self._listeners):
            # A failing subscriber must not leave the controller mid-transition
            try:
                listener(state)
            except Exception:
                logger.exception(f"State listener {listener!r} failed on {state.status.value}")

    def _update(self, **changes) -> None:
        self._replace(self._state.model_copy(update=changes))

    @property
    def _user_id(self) -> Optional[str]:
        return self.session.userId if self.session else None

    def set_mode(self, mode: SearchMode) -> None:
        """
        Switch the active search mode.

        Entered criteria and texts are kept, but results from the previous
        mode are discarded along with any request still in flight.
        """
        mode = SearchMode(mode)
        self._sequence += 1
        self._update(
            mode=mode,
            page=0,
            result=PageResult(),
            loading=False,
            error=None,
            hasSearched=False,
        )

    def update_criteria_field(self, field: str, value: str) -> None:
        """Set one STRUCTURED criteria field (book, trader, endDate, ...)."""
        if field not in CRITERIA_FIELDS:
            raise ValueError(f"Unknown search criteria field: {field}")
        criteria = self._state.criteria.model_copy(update={field: value or ""})
        self._update(criteria=criteria)

    def update_rsql_query(self, text: str) -> None:
        self._update(rsqlQuery=text or "")

    def update_settlement_text(self, text: str) -> None:
        self._update(settlementText=text or "")

    def _mode_text(self, state: ControllerState) -> Optional[str]:
        if state.mode == SearchMode.RSQL:
            return state.rsqlQuery
        if state.mode == SearchMode.SETTLEMENT:
            return state.settlementText
        return None

    async def search(self, page: int = 0) -> ControllerState:
        """
        Run a search in the active mode.

        A blank RSQL query or settlement text fails validation before any
        request is made. Transport and payload errors are captured into
        state.error; nothing is raised to the caller.

        Args:
            page: Zero-based page (always 0 for SETTLEMENT)

        Returns:
            The state snapshot after the search settled
        """
        state = self._state
        mode = state.mode
        if mode == SearchMode.SETTLEMENT:
            page = 0

        self._sequence += 1
        sequence = self._sequence

        try:
            query = build_query(
                mode,
                criteria=state.criteria,
                text=self._mode_text(state),
                page=page,
                page_size=self.page_size,
            )
        except ValidationError as e:
            logger.info(f"{mode.value} search rejected: {e.message}")
            self._update(
                page=page,
                hasSearched=True,
                loading=False,
                error=e.message,
                result=PageResult(),
            )
            return self._state

        self._update(page=page, hasSearched=True, loading=True, error=None)
        logger.info(f"Searching trades ({mode.value}) page {page}: {query.params}")

        try:
            payload = await self.datasource.fetch(
                query.endpoint,
                query.params,
                user_id=self._user_id,
            )
            result = normalize_response(payload, mode, page)
        except TradeLookupError as e:
            if self._is_stale(sequence):
                return self._state
            logger.error(f"{mode.value} search failed: {e.message}")
            self._update(loading=False, error=e.message, result=PageResult())
            return self._state
        except Exception:
            if self._is_stale(sequence):
                return self._state
            logger.exception(f"Unexpected error during {mode.value} search")
            self._update(loading=False, error=GENERIC_SEARCH_ERROR, result=PageResult())
            return self._state

        if self._is_stale(sequence):
            return self._state

        logger.info(
            f"{mode.value} search returned {len(result.items)} of "
            f"{result.totalElements} trades (page {result.currentPage + 1}/{result.totalPages})"
        )
        self._update(result=result, loading=False, error=None)
        return self._state

    def _is_stale(self, sequence: int) -> bool:
        if sequence != self._sequence:
            logger.debug(
                f"Discarding response for request #{sequence}; latest is #{self._sequence}"
            )
            return True
        return False

    async def change_page(self, new_page: int) -> ControllerState:
        """
        Re-run the current search for another page.

        Out-of-range pages are not rejected here; the backend decides.
        """
        return await self.search(new_page)

    def clear(self) -> None:
        """Reset criteria, texts, mode, results and paging to the initial state."""
        self._sequence += 1
        self._replace(ControllerState())
