"""
Card classifier.

Routes a card to the Main or Extra Deck from its type tag. Any type tag
containing one of the configured Extra Deck markers goes to EXTRA,
everything else to MAIN.
"""

from collections.abc import Iterable

from deckforge.config import settings
from deckforge.models.card import Card
from deckforge.models.deck import DeckSection


def is_extra_deck_card(card: Card, markers: Iterable[str] | None = None) -> bool:
    """True if the card's type tag contains an Extra Deck marker."""
    if markers is None:
        markers = settings.extra_deck_markers
    return bool(card.type) and any(marker in card.type for marker in markers)


def classify(card: Card, markers: Iterable[str] | None = None) -> DeckSection:
    """Deck section for a card. Total and deterministic."""
    return DeckSection.EXTRA if is_extra_deck_card(card, markers) else DeckSection.MAIN


def split_sections(
    cards: Iterable[Card], markers: Iterable[str] | None = None
) -> tuple[tuple[Card, ...], tuple[Card, ...]]:
    """
    Split a flat card list into (main, extra), keeping relative order.

    Used when hydrating a saved document or an import result.
    """
    if markers is not None:
        markers = tuple(markers)
    main: list[Card] = []
    extra: list[Card] = []
    for card in cards:
        if classify(card, markers) is DeckSection.EXTRA:
            extra.append(card)
        else:
            main.append(card)
    return tuple(main), tuple(extra)
