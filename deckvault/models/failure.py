"""
Failure envelope for API responses.

Every failure that reaches an API client is classified by kind and carries
a user-facing message. Store-level code never raises for not-found data;
these types live at the HTTP boundary and around external collaborators.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"

    # Service failures
    STORAGE_UNAVAILABLE = "storage_unavailable"
    EXTERNAL_API_ERROR = "external_api_error"

    UNKNOWN = "unknown"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail body."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class DeckNotFoundError(KnownError):
    """Raised by the API when a deck ID does not resolve."""

    def __init__(self, deck_id: str):
        self.deck_id = deck_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="That deck does not exist.",
            detail=f"No deck with id '{deck_id}'",
            suggestion="It may have been deleted. Refresh the deck list.",
            status_code=404,
        )


class CollectionEntryNotFoundError(KnownError):
    """Raised by the API when a card is not in the collection."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="That card is not in your collection.",
            detail=f"No collection entry for card '{card_id}'",
            status_code=404,
        )


class DeckCardNotFoundError(KnownError):
    """Raised by the API when a deck has no entry for a card in a zone."""

    def __init__(self, deck_id: str, card_id: str, zone: str):
        self.deck_id = deck_id
        self.card_id = card_id
        self.zone = zone
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="That card is not in this deck.",
            detail=f"Deck '{deck_id}' has no '{card_id}' in {zone}",
            status_code=404,
        )
