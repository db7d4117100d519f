"""Search mode, criteria, paging and controller state models."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class SearchMode(str, Enum):
    """Active search mode. Exactly one is active at a time."""
    STRUCTURED = "STRUCTURED"
    RSQL = "RSQL"
    SETTLEMENT = "SETTLEMENT"


class SearchStatus(str, Enum):
    """Lifecycle of a search as seen by the presentation layer."""
    IDLE = "IDLE"
    SEARCHING = "SEARCHING"
    RESULTS = "RESULTS"
    NO_RESULTS = "NO_RESULTS"
    ERROR = "ERROR"


class SearchCriteria(BaseModel):
    """
    Simple-field criteria sent in STRUCTURED mode.

    tradeStatus and endDate are required by the backend; blank values are
    still omitted from the outgoing query.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    book: str = ""
    counterparty: str = ""
    trader: str = ""
    tradeStatus: str = ""
    startDate: str = Field(default="", description="ISO date YYYY-MM-DD")
    endDate: str = Field(default="", description="ISO date YYYY-MM-DD")


CRITERIA_FIELDS = tuple(SearchCriteria.model_fields)


class PageResult(BaseModel):
    """One page of normalized trade records."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    items: list[dict[str, Any]] = Field(default_factory=list)
    totalPages: int = 0
    totalElements: int = 0
    currentPage: int = 0

    @computed_field
    @property
    def hasPrevious(self) -> bool:
        return self.currentPage > 0

    @computed_field
    @property
    def hasNext(self) -> bool:
        return self.currentPage < self.totalPages - 1


class ControllerState(BaseModel):
    """
    Immutable snapshot of a search controller.

    A new snapshot replaces the previous one on every change.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    mode: SearchMode = SearchMode.STRUCTURED
    criteria: SearchCriteria = Field(default_factory=SearchCriteria)
    rsqlQuery: str = ""
    settlementText: str = ""
    page: int = 0
    result: PageResult = Field(default_factory=PageResult)
    loading: bool = False
    error: Optional[str] = None
    hasSearched: bool = False

    @computed_field
    @property
    def status(self) -> SearchStatus:
        if self.loading:
            return SearchStatus.SEARCHING
        if self.error:
            return SearchStatus.ERROR
        if not self.hasSearched:
            return SearchStatus.IDLE
        if self.result.items:
            return SearchStatus.RESULTS
        return SearchStatus.NO_RESULTS
