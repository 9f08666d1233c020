"""
Caller-owned editing session.

Holds the deck being edited and the restriction table it is validated
against. Nothing here is global; create one session per editor.
"""

import logging
from dataclasses import replace
from datetime import datetime

from deckforge.catalog.client import CatalogQuery
from deckforge.models.card import Card
from deckforge.models.deck import (
    AddResult,
    DeckComposition,
    DeckSection,
    DeckStats,
    SavedDeckDocument,
)
from deckforge.models.restriction import UNRESTRICTED, RestrictionTable
from deckforge.services import deck_builder
from deckforge.services.deck_stats import summarize
from deckforge.services.restrictions import load_restriction_table

logger = logging.getLogger(__name__)


class DeckSession:
    """
    One deck editor.

    The restriction table is replaced only once a refresh has completed,
    so edits always see the last finished build, never one in flight.
    """

    def __init__(
        self,
        composition: DeckComposition | None = None,
        restrictions: RestrictionTable = UNRESTRICTED,
    ) -> None:
        self.composition = composition or DeckComposition()
        self.restrictions = restrictions
        self.warnings: list[str] = []
        self._created_at: datetime | None = None

    @classmethod
    def from_document(
        cls, document: SavedDeckDocument, restrictions: RestrictionTable = UNRESTRICTED
    ) -> "DeckSession":
        """Open a saved deck for editing."""
        session = cls(deck_builder.hydrate(document), restrictions)
        session._created_at = document.created_at
        return session

    async def refresh_restrictions(self, catalog: CatalogQuery) -> RestrictionTable:
        load = await load_restriction_table(catalog)
        self.restrictions = load.table
        if load.warning:
            self.warnings.append(load.warning)
        return load.table

    def add(self, card: Card) -> AddResult:
        result = deck_builder.try_add(self.composition, card, self.restrictions)
        self.composition = result.composition
        if result.reason is not None:
            logger.debug("Add refused: %s", result.reason.message)
        return result

    def remove(self, card: Card, section: DeckSection) -> DeckComposition:
        self.composition = deck_builder.remove(self.composition, card, section)
        return self.composition

    def clear(self) -> DeckComposition:
        self.composition = deck_builder.clear(self.composition)
        return self.composition

    def rename(self, name: str) -> None:
        self.composition = replace(self.composition, name=name)

    def describe(self, description: str) -> None:
        self.composition = replace(self.composition, description=description)

    def choose_thumbnail(self, thumbnail: str | None) -> None:
        self.composition = replace(self.composition, thumbnail=thumbnail)

    def summary(self) -> DeckStats:
        return summarize(self.composition)

    def to_document(self) -> SavedDeckDocument:
        """Encode for saving. Keeps the original creation time when editing."""
        document = deck_builder.to_document(self.composition, created_at=self._created_at)
        self.composition = replace(self.composition, deck_id=document.id)
        self._created_at = document.created_at
        return document
