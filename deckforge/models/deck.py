from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from deckforge.models.card import Card


class DeckSection(str, Enum):
    """Where a card lives in a deck."""

    MAIN = "main"
    EXTRA = "extra"


@dataclass(frozen=True)
class DeckComposition:
    """
    A deck being edited.

    Compositions are immutable; every edit returns a new one. Cards may
    repeat as distinct entries and keep the order they were added in.

    Attributes:
        main: Main Deck entries in insertion order
        extra: Extra Deck entries in insertion order
        name: Deck name
        description: Free-text description
        thumbnail: Image URL shown for the deck; None means "first card added"
        deck_id: Id of the saved document this was hydrated from, if any
    """

    main: tuple[Card, ...] = ()
    extra: tuple[Card, ...] = ()
    name: str = ""
    description: str = ""
    thumbnail: str | None = None
    deck_id: str | None = None

    def section(self, section: DeckSection) -> tuple[Card, ...]:
        """Entries of one section."""
        return self.main if section is DeckSection.MAIN else self.extra

    def with_section(self, section: DeckSection, cards: tuple[Card, ...]) -> "DeckComposition":
        """Copy with one section replaced."""
        if section is DeckSection.MAIN:
            return replace(self, main=cards)
        return replace(self, extra=cards)

    def all_cards(self) -> tuple[Card, ...]:
        """Main entries followed by Extra entries."""
        return self.main + self.extra

    def copies_of(self, card_name: str) -> int:
        """Occurrences of a card name across both sections."""
        return sum(1 for card in self.all_cards() if card.name == card_name)

    @property
    def is_empty(self) -> bool:
        return not self.main and not self.extra


@dataclass(frozen=True)
class DeckStats:
    """Summary counts shown next to a deck."""

    total: int = 0
    extra_count: int = 0
    monster_count: int = 0
    spell_count: int = 0
    trap_count: int = 0


class RejectCode(str, Enum):
    """Why an add was refused, in evaluation order."""

    FORBIDDEN = "forbidden"
    SECTION_FULL = "section_full"
    COPY_LIMIT = "copy_limit"


@dataclass(frozen=True)
class RejectReason:
    """
    A refused add.

    Attributes:
        code: Which check failed
        card_name: The card that was refused
        section: Target section (SECTION_FULL only)
        limit: Section size limit or copy cap
        copies: Copies already in the deck (COPY_LIMIT only)
    """

    code: RejectCode
    card_name: str
    section: DeckSection | None = None
    limit: int | None = None
    copies: int | None = None

    @property
    def message(self) -> str:
        if self.code is RejectCode.FORBIDDEN:
            return f'"{self.card_name}" is forbidden and cannot be added to the deck.'
        if self.code is RejectCode.SECTION_FULL:
            label = "Main Deck" if self.section is DeckSection.MAIN else "Extra Deck"
            return f"The {label} cannot hold more than {self.limit} cards."
        return (
            f'You already have {self.copies} copies of "{self.card_name}" in the deck. '
            f"The limit for this card is {self.limit}."
        )


@dataclass(frozen=True)
class AddResult:
    """
    Outcome of `try_add`.

    On acceptance `composition` is the updated deck and `reason` is None.
    On refusal `composition` is the unchanged input.
    """

    composition: DeckComposition
    reason: RejectReason | None = None
    section: DeckSection | None = None

    @property
    def accepted(self) -> bool:
        return self.reason is None


@dataclass
class SavedDeckDocument:
    """
    Persisted form of a deck.

    Cards are stored as one flat list (Main entries then Extra entries);
    sections are recomputed on load.
    """

    id: str
    name: str
    description: str = ""
    thumbnail: str | None = None
    cards: list[Card] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
