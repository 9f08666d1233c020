"""
Deck store operations.

Saved decks are documents keyed by an opaque id. Card payloads are
re-validated on every read; a corrupt store is reported as empty rather
than crashing the caller.
"""

import logging
from dataclasses import replace
from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from deckforge.models.card import Card, CardSchemaError
from deckforge.models.db import SavedDeckDB
from deckforge.models.deck import SavedDeckDocument
from deckforge.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"


def row_to_document(row: SavedDeckDB) -> SavedDeckDocument:
    """
    Decode a stored row.

    Raises:
        CardSchemaError: If the stored card list is corrupt
    """
    if not isinstance(row.cards, list):
        raise CardSchemaError(f"Deck {row.id} has no card list")
    return SavedDeckDocument(
        id=row.id,
        name=row.name,
        description=row.description or "",
        thumbnail=row.thumbnail or None,
        cards=[Card.from_catalog(payload) for payload in row.cards],
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


async def list_decks(session: AsyncSession) -> list[SavedDeckDocument]:
    """All saved decks, oldest first. Corrupt data yields no decks."""
    try:
        result = await session.execute(select(SavedDeckDB).order_by(SavedDeckDB.created_at))
        return [row_to_document(row) for row in result.scalars().all()]
    except ValueError as e:
        # CardSchemaError, or a card column that is not valid JSON
        logger.warning("Saved decks are corrupt, treating store as empty: %s", e)
        return []


async def get_deck(session: AsyncSession, deck_id: str) -> SavedDeckDocument | None:
    """A saved deck by id, or None if missing or corrupt."""
    try:
        row = await session.get(SavedDeckDB, deck_id)
        if row is None:
            return None
        return row_to_document(row)
    except ValueError as e:
        logger.warning("Saved deck %s is corrupt: %s", deck_id, e)
        return None


async def save_deck(session: AsyncSession, document: SavedDeckDocument) -> SavedDeckDocument:
    """
    Insert or update a deck.

    An existing deck keeps its original `created_at`.

    Raises:
        KnownError: If the deck has no name
    """
    if not document.name.strip():
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="Please give your deck a name.",
        )

    now = datetime.now(UTC)
    cards = [card.to_catalog() for card in document.cards]
    row = await session.get(SavedDeckDB, document.id)

    if row is None:
        row = SavedDeckDB(
            id=document.id,
            name=document.name,
            description=document.description,
            thumbnail=document.thumbnail,
            cards=cards,
            created_at=document.created_at or now,
            updated_at=now,
        )
        session.add(row)
        logger.info("Created deck %s (%s)", document.id, document.name)
    else:
        row.name = document.name
        row.description = document.description
        row.thumbnail = document.thumbnail
        row.cards = cards
        row.updated_at = now
        logger.info("Updated deck %s (%s)", document.id, document.name)

    await session.flush()
    return replace(document, created_at=row.created_at, updated_at=row.updated_at)


async def delete_deck(session: AsyncSession, deck_id: str) -> bool:
    """
    Delete a deck.

    Returns True if deleted, False if not found.
    """
    row = await session.get(SavedDeckDB, deck_id)
    if row is None:
        return False
    await session.delete(row)
    await session.flush()
    return True


async def duplicate_deck(session: AsyncSession, deck_id: str) -> SavedDeckDocument | None:
    """Save a copy of a deck under a new id. Returns None if the source is missing."""
    source = await get_deck(session, deck_id)
    if source is None:
        return None
    now = datetime.now(UTC)
    copy = replace(
        source,
        id=uuid4().hex,
        name=f"{source.name}{COPY_SUFFIX}",
        created_at=now,
        updated_at=now,
    )
    return await save_deck(session, copy)
