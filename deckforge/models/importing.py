from dataclasses import dataclass, field
from enum import Enum

from deckforge.models.card import Card


class ImportMode(str, Enum):
    """How bulk import input is interpreted."""

    TEXT = "text"
    ID = "id"


class ImportJobState(str, Enum):
    """Lifecycle of one import job. DONE and FAILED are terminal."""

    PARSING = "parsing"
    RESOLVING = "resolving"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ImportRequest:
    """
    One card to look up.

    Text mode fills `name`; identifier mode fills `identifier`. A text line
    with quantity 3 becomes three requests with quantity 1 each.
    """

    name: str | None = None
    identifier: str | None = None
    quantity: int = 1

    @property
    def token(self) -> str:
        """The raw input this request came from."""
        return self.identifier if self.identifier is not None else (self.name or "")


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Resolution of a single request. `card` is None when unresolved."""

    request: ImportRequest
    card: Card | None = None

    @property
    def resolved(self) -> bool:
        return self.card is not None


@dataclass
class ImportOutcome:
    """
    Final report of an import job.

    Attributes:
        state: DONE or FAILED
        resolved_cards: Cards in request order (duplicates kept)
        unresolved_tokens: Tokens that matched nothing, in request order
        warnings: Advisory messages (catalog errors, skipped payloads)
        error: Reason for a FAILED job
    """

    state: ImportJobState
    resolved_cards: list[Card] = field(default_factory=list)
    unresolved_tokens: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """True if the job finished and at least one card resolved."""
        return self.state is ImportJobState.DONE and bool(self.resolved_cards)

    @property
    def is_partial(self) -> bool:
        return self.succeeded and bool(self.unresolved_tokens)
