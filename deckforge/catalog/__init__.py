from deckforge.catalog.client import (
    CatalogClient,
    CatalogQuery,
    SearchFilters,
    SearchPage,
    parse_cards,
)

__all__ = [
    "CatalogClient",
    "CatalogQuery",
    "SearchFilters",
    "SearchPage",
    "parse_cards",
]
