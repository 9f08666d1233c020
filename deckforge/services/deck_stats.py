from collections import Counter
from collections.abc import Iterable

from deckforge.models.card import Card
from deckforge.models.deck import DeckComposition, DeckSection, DeckStats
from deckforge.services.classifier import classify

SPELL_TYPE = "Spell Card"
TRAP_TYPE = "Trap Card"


def summarize(composition: DeckComposition) -> DeckStats:
    """
    Summary counts for a deck.

    Recomputed from scratch on every call; decks hold at most 75 cards.
    `total` counts Main Deck entries only.
    """
    main = composition.main
    return DeckStats(
        total=len(main),
        extra_count=len(composition.extra),
        monster_count=sum(
            1 for card in main if "Monster" in card.type and classify(card) is DeckSection.MAIN
        ),
        spell_count=sum(1 for card in main if card.type == SPELL_TYPE),
        trap_count=sum(1 for card in main if card.type == TRAP_TYPE),
    )


def count_by_type(cards: Iterable[Card]) -> dict[str, int]:
    """Entries per raw type tag, in first-seen order."""
    return dict(Counter(card.type for card in cards))


def group_by_type(cards: Iterable[Card]) -> dict[str, list[Card]]:
    """Entries grouped by raw type tag, in first-seen order."""
    groups: dict[str, list[Card]] = {}
    for card in cards:
        groups.setdefault(card.type, []).append(card)
    return groups
