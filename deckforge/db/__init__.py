from deckforge.db.database import get_session, init_db
from deckforge.db.operations import (
    delete_deck,
    duplicate_deck,
    get_deck,
    list_decks,
    row_to_document,
    save_deck,
)

__all__ = [
    "delete_deck",
    "duplicate_deck",
    "get_deck",
    "get_session",
    "init_db",
    "list_decks",
    "row_to_document",
    "save_deck",
]
