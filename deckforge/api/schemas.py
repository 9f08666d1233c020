"""
Request and response models shared by the API routers.

Cards travel in catalog JSON shape and are validated with
`Card.from_catalog` on the way in.
"""

from datetime import datetime
from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel, Field

from deckforge.models.card import Card, CardSchemaError
from deckforge.models.deck import DeckComposition, DeckStats, SavedDeckDocument
from deckforge.services.deck_builder import hydrate, thumbnail_for
from deckforge.services.deck_stats import summarize


def parse_card(payload: dict[str, Any]) -> Card:
    """Validate one card payload, mapping schema errors to HTTP 422."""
    try:
        return Card.from_catalog(payload)
    except CardSchemaError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid card: {e}",
        ) from e


class CompositionPayload(BaseModel):
    """A deck being edited, as sent by the UI."""

    main: list[dict[str, Any]] = Field(default_factory=list)
    extra: list[dict[str, Any]] = Field(default_factory=list)
    name: str = ""
    description: str = ""
    thumbnail: str | None = None
    deck_id: str | None = None

    def to_composition(self) -> DeckComposition:
        return DeckComposition(
            main=tuple(parse_card(card) for card in self.main),
            extra=tuple(parse_card(card) for card in self.extra),
            name=self.name,
            description=self.description,
            thumbnail=self.thumbnail,
            deck_id=self.deck_id,
        )

    @classmethod
    def from_composition(cls, composition: DeckComposition) -> "CompositionPayload":
        return cls(
            main=[card.to_catalog() for card in composition.main],
            extra=[card.to_catalog() for card in composition.extra],
            name=composition.name,
            description=composition.description,
            thumbnail=composition.thumbnail,
            deck_id=composition.deck_id,
        )


class StatsResponse(BaseModel):
    """Deck summary counts."""

    total: int
    extra_count: int
    monster_count: int
    spell_count: int
    trap_count: int

    @classmethod
    def from_stats(cls, stats: DeckStats) -> "StatsResponse":
        return cls(
            total=stats.total,
            extra_count=stats.extra_count,
            monster_count=stats.monster_count,
            spell_count=stats.spell_count,
            trap_count=stats.trap_count,
        )


class DeckResponse(BaseModel):
    """A saved deck."""

    id: str
    name: str
    description: str = ""
    thumbnail: str | None = None
    cards: list[dict[str, Any]] = Field(default_factory=list)
    stats: StatsResponse
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_document(cls, document: SavedDeckDocument) -> "DeckResponse":
        composition = hydrate(document)
        return cls(
            id=document.id,
            name=document.name,
            description=document.description,
            thumbnail=thumbnail_for(composition),
            cards=[card.to_catalog() for card in document.cards],
            stats=StatsResponse.from_stats(summarize(composition)),
            created_at=document.created_at,
            updated_at=document.updated_at,
        )


class DeckListResponse(BaseModel):
    """All saved decks."""

    decks: list[DeckResponse]
    count: int
