"""User session model."""

from pydantic import BaseModel, ConfigDict, Field

EDIT_AUTHORIZATIONS = frozenset({"TRADER_SALES", "MO"})
BOOK_AUTHORIZATIONS = frozenset({"TRADER_SALES"})


class UserSession(BaseModel):
    """
    The signed-in user, passed explicitly to every service that needs it.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    userId: str = Field(description="Sent to the Trade Service as X-User-Id")
    authorization: str = Field(default="", description="e.g. TRADER_SALES, MO, SUPPORT")

    @property
    def can_edit(self) -> bool:
        """Whether opened trades are shown editable."""
        return self.authorization in EDIT_AUTHORIZATIONS

    @property
    def can_book(self) -> bool:
        """Whether the user may book new trades."""
        return self.authorization in BOOK_AUTHORIZATIONS
