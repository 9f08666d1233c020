"""
Restriction table loading.

Fetching the restriction list can fail. Deck editing must keep working
when it does, so a failed fetch yields the permissive table plus a warning
instead of an exception.
"""

import logging
from dataclasses import dataclass

from deckforge.catalog.client import CatalogQuery
from deckforge.models.failure import CatalogError
from deckforge.models.restriction import (
    UNRESTRICTED,
    RestrictionTable,
    build_restriction_table,
)

logger = logging.getLogger(__name__)

RESTRICTIONS_UNAVAILABLE = (
    "The restriction list could not be loaded. Every card is capped at 3 copies for now."
)


@dataclass(frozen=True)
class RestrictionLoad:
    """Result of a restriction fetch. `warning` is set when the fetch failed."""

    table: RestrictionTable
    warning: str | None = None

    @property
    def degraded(self) -> bool:
        return self.warning is not None


async def load_restriction_table(catalog: CatalogQuery) -> RestrictionLoad:
    """Fetch the restriction list and build a table, never raising on fetch failure."""
    try:
        entries = await catalog.fetch_restriction_list()
    except CatalogError as e:
        logger.warning("Restriction list unavailable: %s (%s)", e.message, e.detail)
        return RestrictionLoad(table=UNRESTRICTED, warning=RESTRICTIONS_UNAVAILABLE)

    table = build_restriction_table(entries)
    logger.info("Loaded restriction table with %d restricted cards", len(table))
    return RestrictionLoad(table=table)
