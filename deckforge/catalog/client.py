"""
YGOPRODeck card catalog client.

Wraps the public cardinfo endpoint: filtered search with pagination,
lookups by id and by fuzzy name, and the restriction list.

API docs: https://ygoprodeck.com/api-guide/
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from deckforge.config import settings
from deckforge.models.card import Card, CardSchemaError
from deckforge.models.failure import CatalogError
from deckforge.models.restriction import RestrictionEntry

logger = logging.getLogger(__name__)

# The catalog answers an empty match with HTTP 400 and this message
NO_MATCH_MARKER = "No card matching your query"

FILTER_FIELDS = ("type", "attribute", "level", "race", "linkval", "scale")


@dataclass
class SearchFilters:
    """
    Browsing filters. "all" or None leaves a filter out.

    `page` is 1-based.
    """

    name: str = ""
    type: str | None = None
    attribute: str | None = None
    level: str | None = None
    race: str | None = None
    linkval: str | None = None
    scale: str | None = None
    page: int = 1

    def to_params(self, page_size: int) -> dict[str, str]:
        params: dict[str, str] = {
            "num": str(page_size),
            "offset": str((max(self.page, 1) - 1) * page_size),
        }
        if self.name:
            params["fname"] = self.name
        for key in FILTER_FIELDS:
            value = getattr(self, key)
            if value is not None and str(value) != "all":
                params[key] = str(value)
        return params


@dataclass
class SearchPage:
    """One page of search results."""

    cards: list[Card] = field(default_factory=list)
    total_count: int = 0


class CatalogQuery(Protocol):
    """The catalog operations the engine depends on."""

    async def search(self, filters: SearchFilters) -> SearchPage: ...

    async def fetch_by_ids(self, ids: Sequence[str]) -> list[Card]: ...

    async def fetch_by_name(self, name: str) -> list[Card]: ...

    async def fetch_restriction_list(self) -> list[RestrictionEntry]: ...


def parse_cards(payload: Any) -> list[Card]:
    """
    Convert the catalog's `data` array to Cards.

    Entries that fail the card schema are dropped with a warning.
    """
    if not isinstance(payload, dict):
        raise CatalogError("Unexpected catalog response", detail=type(payload).__name__)

    cards: list[Card] = []
    for raw in payload.get("data") or []:
        try:
            cards.append(Card.from_catalog(raw))
        except CardSchemaError as e:
            logger.warning("Skipping malformed catalog entry: %s", e)
    return cards


class CatalogClient:
    """
    Async client for the card catalog.

    Every method raises CatalogError on transport or protocol failure and
    returns an empty result when the catalog reports no match.

    Usage:
        async with CatalogClient() as catalog:
            cards = await catalog.fetch_by_name("Dark Magician")
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        restriction_format: str | None = None,
        page_size: int | None = None,
    ) -> None:
        self.base_url = base_url or settings.catalog_url
        self.restriction_format = restriction_format or settings.restriction_format
        self.page_size = page_size or settings.search_page_size
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": settings.user_agent},
            timeout=settings.catalog_timeout,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, params: dict[str, str]) -> dict[str, Any]:
        try:
            response = await self._client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise CatalogError("Card catalog is unreachable", detail=str(e)) from e

        if response.status_code == 400 and NO_MATCH_MARKER in response.text:
            return {"data": [], "meta": {"total_rows": 0}}

        try:
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise CatalogError(
                "Card catalog returned an error",
                detail=f"HTTP {response.status_code}",
            ) from e
        except ValueError as e:
            raise CatalogError("Card catalog returned invalid JSON", detail=str(e)) from e

        if not isinstance(data, dict):
            raise CatalogError("Unexpected catalog response", detail=type(data).__name__)
        return data

    async def search(self, filters: SearchFilters) -> SearchPage:
        """Filtered, paginated card search."""
        data = await self._get(filters.to_params(self.page_size))
        meta = data.get("meta") or {}
        cards = parse_cards(data)
        return SearchPage(cards=cards, total_count=int(meta.get("total_rows") or len(cards)))

    async def fetch_by_ids(self, ids: Sequence[str]) -> list[Card]:
        """Cards for a list of passcodes, in one request."""
        if not ids:
            return []
        data = await self._get({"id": ",".join(ids)})
        return parse_cards(data)

    async def fetch_by_name(self, name: str) -> list[Card]:
        """Cards whose name contains `name` (catalog-side fuzzy match)."""
        data = await self._get({"fname": name})
        return parse_cards(data)

    async def fetch_restriction_list(self) -> list[RestrictionEntry]:
        """Every card on the configured format's restriction list."""
        data = await self._get({"banlist": self.restriction_format})
        return [
            RestrictionEntry(card_id=card.id, status=card.restriction(self.restriction_format))
            for card in parse_cards(data)
        ]
