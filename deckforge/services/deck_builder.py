"""
Deck validation engine.

Decides whether a card may be added to a deck and applies accepted edits.
Checks run in a fixed order and the first failure is reported:

1. Forbidden (copy cap 0)
2. Section size (Main <= 60, Extra <= 15)
3. Copy limit (copies across both sections < cap)

A refused add returns the input composition unchanged.
"""

from collections.abc import Iterable
from dataclasses import replace
from datetime import UTC, datetime
from uuid import uuid4

from deckforge.config import MAX_EXTRA_DECK, MAX_MAIN_DECK, MIN_MAIN_DECK
from deckforge.models.card import Card
from deckforge.models.deck import (
    AddResult,
    DeckComposition,
    DeckSection,
    RejectCode,
    RejectReason,
    SavedDeckDocument,
)
from deckforge.models.restriction import RestrictionTable
from deckforge.services.classifier import classify, split_sections

SECTION_LIMITS: dict[DeckSection, int] = {
    DeckSection.MAIN: MAX_MAIN_DECK,
    DeckSection.EXTRA: MAX_EXTRA_DECK,
}


def try_add(
    composition: DeckComposition,
    card: Card,
    restrictions: RestrictionTable,
) -> AddResult:
    """
    Add one copy of a card if every deck rule allows it.

    Args:
        composition: Current deck
        card: Card to add
        restrictions: Copy caps for this session

    Returns:
        AddResult with the updated deck, or the unchanged deck and a reason
    """
    cap = restrictions.cap_for(card.id)
    if cap == 0:
        return AddResult(
            composition=composition,
            reason=RejectReason(code=RejectCode.FORBIDDEN, card_name=card.name, limit=0),
        )

    section = classify(card)
    limit = SECTION_LIMITS[section]
    if len(composition.section(section)) >= limit:
        return AddResult(
            composition=composition,
            reason=RejectReason(
                code=RejectCode.SECTION_FULL,
                card_name=card.name,
                section=section,
                limit=limit,
            ),
            section=section,
        )

    copies = composition.copies_of(card.name)
    if copies >= cap:
        return AddResult(
            composition=composition,
            reason=RejectReason(
                code=RejectCode.COPY_LIMIT,
                card_name=card.name,
                limit=cap,
                copies=copies,
            ),
            section=section,
        )

    updated = composition.with_section(section, composition.section(section) + (card,))
    return AddResult(composition=updated, section=section)


def remove(composition: DeckComposition, card: Card, section: DeckSection) -> DeckComposition:
    """
    Remove the first entry with the card's id from a section.

    Removing a card that is not there is a no-op.
    """
    entries = composition.section(section)
    for index, entry in enumerate(entries):
        if entry.id == card.id:
            return composition.with_section(section, entries[:index] + entries[index + 1 :])
    return composition


def add_many(
    composition: DeckComposition,
    cards: Iterable[Card],
    restrictions: RestrictionTable,
) -> tuple[DeckComposition, list[RejectReason]]:
    """Add cards one by one, collecting refusals instead of stopping."""
    rejected: list[RejectReason] = []
    for card in cards:
        result = try_add(composition, card, restrictions)
        if result.reason is not None:
            rejected.append(result.reason)
        composition = result.composition
    return composition, rejected


def clear(composition: DeckComposition) -> DeckComposition:
    """Empty both sections, keep name, description and id."""
    return replace(composition, main=(), extra=())


def thumbnail_for(composition: DeckComposition) -> str | None:
    """Chosen thumbnail, else the artwork of the first card in the deck."""
    if composition.thumbnail:
        return composition.thumbnail
    for card in composition.all_cards():
        if card.thumbnail_url:
            return card.thumbnail_url
    return None


def thumbnail_candidates(composition: DeckComposition) -> list[Card]:
    """Distinct cards (by id) in first-occurrence order."""
    seen: set[int] = set()
    candidates: list[Card] = []
    for card in composition.all_cards():
        if card.id not in seen:
            seen.add(card.id)
            candidates.append(card)
    return candidates


def construction_warnings(composition: DeckComposition) -> list[str]:
    """
    Advisory messages about deck size.

    Oversized sections only happen for documents saved elsewhere and
    hydrated as-is; edits through `try_add` never produce them.
    """
    warnings: list[str] = []
    main_count = len(composition.main)
    if main_count < MIN_MAIN_DECK:
        warnings.append(f"A deck must have at least {MIN_MAIN_DECK} cards in the Main Deck.")
    if main_count > MAX_MAIN_DECK:
        warnings.append(f"A deck cannot have more than {MAX_MAIN_DECK} cards in the Main Deck.")
    if len(composition.extra) > MAX_EXTRA_DECK:
        warnings.append(f"The Extra Deck cannot have more than {MAX_EXTRA_DECK} cards.")
    return warnings


def hydrate(document: SavedDeckDocument) -> DeckComposition:
    """Build an editable composition from a saved document."""
    main, extra = split_sections(document.cards)
    return DeckComposition(
        main=main,
        extra=extra,
        name=document.name,
        description=document.description,
        thumbnail=document.thumbnail or None,
        deck_id=document.id,
    )


def to_document(
    composition: DeckComposition,
    created_at: datetime | None = None,
) -> SavedDeckDocument:
    """
    Encode a composition for the deck store.

    A composition without `deck_id` gets a fresh id.
    """
    now = datetime.now(UTC)
    return SavedDeckDocument(
        id=composition.deck_id or uuid4().hex,
        name=composition.name,
        description=composition.description,
        thumbnail=composition.thumbnail,
        cards=list(composition.all_cards()),
        created_at=created_at or now,
        updated_at=now,
    )
