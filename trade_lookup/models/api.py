"""Request and response bodies for the presentation API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .search import ControllerState, SearchMode


class SessionCreateRequest(BaseModel):
    """Body for opening a search session."""
    model_config = ConfigDict(populate_by_name=True)

    userId: str
    authorization: str = ""


class SessionResponse(BaseModel):
    """A search session and its current controller state."""
    model_config = ConfigDict(populate_by_name=True)

    sessionId: str
    state: ControllerState


class ModeUpdate(BaseModel):
    mode: SearchMode


class TextUpdate(BaseModel):
    value: str = ""


class TradeView(BaseModel):
    """
    A single trade opened from the lookup or a result row.

    mode is 'edit' for users allowed to amend trades, otherwise 'view'.
    """
    model_config = ConfigDict(populate_by_name=True)

    mode: str = Field(description="'edit' or 'view'")
    canBook: bool = Field(default=False, description="Whether 'Book New' is offered")
    trade: dict[str, Any]
