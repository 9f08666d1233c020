"""
Card search with last-issued-wins ordering.

Searches triggered by typing can overlap and finish out of order. Each
search takes a sequence number; a response is only applied if no newer
search has been issued since.
"""

import itertools
import logging
from dataclasses import dataclass, field

from deckforge.catalog.client import CatalogQuery, SearchFilters, SearchPage
from deckforge.models.failure import CatalogError

logger = logging.getLogger(__name__)


class SearchSequencer:
    """Issues increasing sequence numbers and tells which one is current."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self.latest = 0

    def issue(self) -> int:
        self.latest = next(self._counter)
        return self.latest

    def observe(self, seq: int) -> None:
        """Record a number issued elsewhere (e.g. by a client)."""
        if seq > self.latest:
            self.latest = seq
            self._counter = itertools.count(seq + 1)

    def is_current(self, seq: int) -> bool:
        return seq == self.latest


@dataclass
class SearchResponse:
    """A search page tagged with its sequence number."""

    seq: int
    page: SearchPage = field(default_factory=SearchPage)
    warning: str | None = None


async def run_search(
    catalog: CatalogQuery,
    filters: SearchFilters,
    sequencer: SearchSequencer,
    seq: int | None = None,
) -> SearchResponse | None:
    """
    Run one search and return it, or None if it was superseded meanwhile.

    A catalog failure yields an empty page with a warning.
    """
    if seq is None:
        seq = sequencer.issue()
    else:
        sequencer.observe(seq)

    try:
        page = await catalog.search(filters)
        response = SearchResponse(seq=seq, page=page)
    except CatalogError as e:
        logger.warning("Card search failed: %s (%s)", e.message, e.detail)
        response = SearchResponse(seq=seq, warning=e.message)

    if not sequencer.is_current(seq):
        logger.debug("Discarding stale search response %d (latest %d)", seq, sequencer.latest)
        return None
    return response
