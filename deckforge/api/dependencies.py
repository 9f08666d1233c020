"""
Shared FastAPI dependencies.

The catalog client, restriction table and search sequencer live on
`app.state`; they are set up in the application lifespan.
"""

from fastapi import Request

from deckforge.catalog.client import CatalogClient, CatalogQuery
from deckforge.models.restriction import UNRESTRICTED, RestrictionTable
from deckforge.services.card_search import SearchSequencer


def get_catalog(request: Request) -> CatalogQuery:
    """The shared catalog client, created on first use if startup did not."""
    state = request.app.state
    if getattr(state, "catalog", None) is None:
        state.catalog = CatalogClient()
    return state.catalog


def get_restrictions(request: Request) -> RestrictionTable:
    """The most recently completed restriction table."""
    return getattr(request.app.state, "restrictions", UNRESTRICTED)


def get_restriction_warnings(request: Request) -> list[str]:
    warning = getattr(request.app.state, "restriction_warning", None)
    return [warning] if warning else []


def get_sequencer(request: Request) -> SearchSequencer:
    state = request.app.state
    if getattr(state, "search_sequencer", None) is None:
        state.search_sequencer = SearchSequencer()
    return state.search_sequencer
