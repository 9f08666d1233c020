"""
Card browsing endpoint.

Proxies catalog search. Clients may send an increasing `seq` with each
keystroke-triggered search; responses overtaken by a newer search come
back flagged as stale with no cards so the client can drop them.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from deckforge.api.dependencies import get_catalog, get_sequencer
from deckforge.catalog.client import CatalogQuery, SearchFilters
from deckforge.services.card_search import SearchSequencer, run_search

router = APIRouter(prefix="/cards", tags=["cards"])


class CardSearchResponse(BaseModel):
    seq: int
    stale: bool = False
    cards: list[dict[str, Any]] = Field(default_factory=list)
    total_count: int = 0
    page: int = 1
    warning: str | None = None


@router.get("/search", response_model=CardSearchResponse)
async def search_cards(
    catalog: Annotated[CatalogQuery, Depends(get_catalog)],
    sequencer: Annotated[SearchSequencer, Depends(get_sequencer)],
    name: str = "",
    type: str | None = None,
    attribute: str | None = None,
    level: str | None = None,
    race: str | None = None,
    linkval: str | None = None,
    scale: str | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    seq: Annotated[int | None, Query(ge=1)] = None,
) -> CardSearchResponse:
    """Search the catalog by name and filters."""
    filters = SearchFilters(
        name=name,
        type=type,
        attribute=attribute,
        level=level,
        race=race,
        linkval=linkval,
        scale=scale,
        page=page,
    )
    if seq is None:
        seq = sequencer.issue()
    response = await run_search(catalog, filters, sequencer, seq=seq)
    if response is None:
        return CardSearchResponse(seq=seq, stale=True, page=page)

    return CardSearchResponse(
        seq=response.seq,
        cards=[card.to_catalog() for card in response.page.cards],
        total_count=response.page.total_count,
        page=page,
        warning=response.warning,
    )
