"""
Outcome envelope and error types shared by the engine and the API.

Every user-visible result is classified into one of four outcomes:

- Success: the operation was applied
- PartialSuccess: the operation was applied, but some inputs were skipped
- Refusal: a deck rule stopped the operation (expected, non-fatal)
- KnownFailure: the system knows why it could not proceed

Rule violations (forbidden card, full section, copy limit) are refusals.
They never leave the deck in a changed state.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Deck rule violations
    FORBIDDEN = "forbidden"
    SECTION_FULL = "section_full"
    COPY_LIMIT = "copy_limit"

    # Input failures
    INVALID_INPUT = "invalid_input"
    MALFORMED_IMPORT = "malformed_import"

    # Resource failures
    DECK_NOT_FOUND = "deck_not_found"
    NOTHING_IMPORTED = "nothing_imported"

    # Data source failures
    CATALOG_UNAVAILABLE = "catalog_unavailable"

    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"
    REFUSAL = "refusal"
    KNOWN_FAILURE = "known_failure"


T = TypeVar("T")


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


class ApiResponse(BaseModel, Generic[T]):
    """
    Response envelope for engine operations exposed over HTTP.

    `warnings` carries advisory messages (unreachable catalog, unresolved
    import tokens) that never change the outcome on their own.
    """

    outcome: OutcomeType
    data: T | None = None
    failure: FailureDetail | None = None
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def success(cls, data: T, warnings: list[str] | None = None) -> "ApiResponse[T]":
        """Create a success response."""
        return cls(outcome=OutcomeType.SUCCESS, data=data, warnings=warnings or [])

    @classmethod
    def partial_success(cls, data: T, warnings: list[str]) -> "ApiResponse[T]":
        """Create a response for an operation that skipped some inputs."""
        return cls(outcome=OutcomeType.PARTIAL_SUCCESS, data=data, warnings=warnings)

    @classmethod
    def refusal(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        data: Any = None,
    ) -> "ApiResponse[Any]":
        """
        Create a refusal response.

        Use when a deck rule stopped the operation. `data` may carry the
        unchanged deck so the caller can keep rendering it.
        """
        return cls(
            outcome=OutcomeType.REFUSAL,
            data=data,
            failure=FailureDetail(kind=kind, message=message, detail=detail),
        )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        warnings: list[str] | None = None,
    ) -> "ApiResponse[Any]":
        """Create a known failure response."""
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(kind=kind, message=message, detail=detail),
            warnings=warnings or [],
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
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
        )


class CatalogError(KnownError):
    """The remote card catalog could not answer a query."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.CATALOG_UNAVAILABLE,
            message=message,
            detail=detail,
            status_code=503,
        )


class MalformedImportError(KnownError):
    """An identifier-mode import payload is neither a list nor comma-separated text."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.MALFORMED_IMPORT,
            message="Invalid identifier list. Paste a JSON list or comma-separated ids.",
            detail=detail,
        )


class DeckNotFoundError(KnownError):
    """No saved deck exists with the requested id."""

    def __init__(self, deck_id: str):
        self.deck_id = deck_id
        super().__init__(
            kind=FailureKind.DECK_NOT_FOUND,
            message=f"Deck '{deck_id}' not found",
            status_code=404,
        )
