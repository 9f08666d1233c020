from deckforge.api.builder import router as builder_router
from deckforge.api.cards import router as cards_router
from deckforge.api.decks import router as decks_router
from deckforge.api.health import router as health_router

__all__ = [
    "builder_router",
    "cards_router",
    "decks_router",
    "health_router",
]
