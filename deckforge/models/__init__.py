from deckforge.models.card import Card, CardImage, CardSchemaError
from deckforge.models.deck import (
    AddResult,
    DeckComposition,
    DeckSection,
    DeckStats,
    RejectCode,
    RejectReason,
    SavedDeckDocument,
)
from deckforge.models.failure import (
    ApiResponse,
    CatalogError,
    DeckNotFoundError,
    FailureDetail,
    FailureKind,
    KnownError,
    MalformedImportError,
    OutcomeType,
)
from deckforge.models.importing import (
    ImportJobState,
    ImportMode,
    ImportOutcome,
    ImportRequest,
    ImportResult,
)
from deckforge.models.restriction import (
    UNRESTRICTED,
    RestrictionEntry,
    RestrictionStatus,
    RestrictionTable,
    build_restriction_table,
    cap_for,
)

__all__ = [
    "AddResult",
    "ApiResponse",
    "Card",
    "CardImage",
    "CardSchemaError",
    "CatalogError",
    "DeckComposition",
    "DeckNotFoundError",
    "DeckSection",
    "DeckStats",
    "FailureDetail",
    "FailureKind",
    "ImportJobState",
    "ImportMode",
    "ImportOutcome",
    "ImportRequest",
    "ImportResult",
    "KnownError",
    "MalformedImportError",
    "OutcomeType",
    "RejectCode",
    "RejectReason",
    "RestrictionEntry",
    "RestrictionStatus",
    "RestrictionTable",
    "SavedDeckDocument",
    "UNRESTRICTED",
    "build_restriction_table",
    "cap_for",
]
