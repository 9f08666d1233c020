from collections.abc import Callable, Sequence
from typing import Any

import pytest

from deckforge.catalog.client import SearchFilters, SearchPage
from deckforge.models.card import Card
from deckforge.models.failure import CatalogError
from deckforge.models.restriction import RestrictionEntry


def _payload(
    card_id: int,
    name: str,
    card_type: str = "Effect Monster",
    **extra: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": card_id,
        "name": name,
        "type": card_type,
        "desc": f"Text of {name}",
        "card_images": [
            {
                "id": card_id,
                "image_url": f"https://images.example/{card_id}.jpg",
                "image_url_small": f"https://images.example/small/{card_id}.jpg",
                "image_url_cropped": f"https://images.example/cropped/{card_id}.jpg",
            }
        ],
    }
    payload.update(extra)
    return payload


@pytest.fixture
def card_payload() -> Callable[..., dict[str, Any]]:
    """Factory for catalog-shaped card JSON."""
    return _payload


@pytest.fixture
def make_card() -> Callable[..., Card]:
    """Factory for validated Card objects."""

    def factory(card_id: int, name: str, card_type: str = "Effect Monster", **extra: Any) -> Card:
        return Card.from_catalog(_payload(card_id, name, card_type, **extra))

    return factory


@pytest.fixture
def pot_of_greed(make_card: Callable[..., Card]) -> Card:
    return make_card(55144522, "Pot of Greed", "Spell Card")


@pytest.fixture
def raigeki(make_card: Callable[..., Card]) -> Card:
    return make_card(12580477, "Raigeki", "Spell Card")


@pytest.fixture
def dark_magician(make_card: Callable[..., Card]) -> Card:
    return make_card(46986414, "Dark Magician", "Normal Monster")


@pytest.fixture
def blue_eyes_ultimate(make_card: Callable[..., Card]) -> Card:
    return make_card(23995346, "Blue-Eyes Ultimate Dragon", "Fusion Monster")


class FakeCatalog:
    """
    In-memory catalog with the same lookup semantics as the real one.

    `fetch_by_name` does a case-insensitive substring match and
    `fetch_by_ids` returns each matching card once, like the remote API.
    """

    def __init__(
        self,
        cards: Sequence[Card] = (),
        restrictions: Sequence[RestrictionEntry] = (),
        fail: bool = False,
    ) -> None:
        self.cards = list(cards)
        self.restrictions = list(restrictions)
        self.fail = fail
        self.failing_names: set[str] = set()
        self.name_queries: list[str] = []
        self.id_queries: list[list[str]] = []

    def _check(self) -> None:
        if self.fail:
            raise CatalogError("Card catalog is unreachable", detail="connection refused")

    async def search(self, filters: SearchFilters) -> SearchPage:
        self._check()
        needle = filters.name.lower()
        matches = [c for c in self.cards if needle in c.name.lower()]
        return SearchPage(cards=matches, total_count=len(matches))

    async def fetch_by_ids(self, ids: Sequence[str]) -> list[Card]:
        self._check()
        self.id_queries.append(list(ids))
        wanted = set(ids)
        return [c for c in self.cards if str(c.id) in wanted]

    async def fetch_by_name(self, name: str) -> list[Card]:
        self._check()
        self.name_queries.append(name)
        if name in self.failing_names:
            raise CatalogError("Card catalog returned an error", detail="HTTP 500")
        needle = name.lower()
        return [c for c in self.cards if needle in c.name.lower()]

    async def fetch_restriction_list(self) -> list[RestrictionEntry]:
        self._check()
        return self.restrictions


@pytest.fixture
def fake_catalog_cls() -> type[FakeCatalog]:
    return FakeCatalog
