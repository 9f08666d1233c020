"""Tests for deck builder API endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from deckforge.api.dependencies import get_restriction_warnings, get_restrictions
from deckforge.main import app
from deckforge.models.restriction import RestrictionEntry, build_restriction_table
from deckforge.services.restrictions import RESTRICTIONS_UNAVAILABLE


@pytest.fixture
def restrictions():
    return build_restriction_table(
        [RestrictionEntry(55144522, "Forbidden"), RestrictionEntry(12580477, "Limited")]
    )


@pytest.fixture
async def client(restrictions):
    """Test client validating against a fixed restriction table."""
    app.dependency_overrides[get_restrictions] = lambda: restrictions
    app.dependency_overrides[get_restriction_warnings] = lambda: []

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestAddCard:
    async def test_adds_to_main(self, client: AsyncClient, card_payload) -> None:
        card = card_payload(46986414, "Dark Magician", "Normal Monster")

        response = await client.post("/builder/add", json={"deck": {}, "card": card})

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "success"
        assert data["data"]["section"] == "main"
        assert [c["name"] for c in data["data"]["deck"]["main"]] == ["Dark Magician"]
        assert data["data"]["stats"]["monster_count"] == 1

    async def test_routes_extra_deck_card(self, client: AsyncClient, card_payload) -> None:
        card = card_payload(23995346, "Blue-Eyes Ultimate Dragon", "Fusion Monster")

        response = await client.post("/builder/add", json={"deck": {}, "card": card})

        data = response.json()
        assert data["data"]["section"] == "extra"
        assert len(data["data"]["deck"]["extra"]) == 1
        assert data["data"]["stats"]["extra_count"] == 1

    async def test_forbidden_is_refusal(self, client: AsyncClient, card_payload) -> None:
        card = card_payload(55144522, "Pot of Greed", "Spell Card")

        response = await client.post("/builder/add", json={"deck": {}, "card": card})

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "refusal"
        assert data["failure"]["kind"] == "forbidden"
        assert "Pot of Greed" in data["failure"]["message"]
        assert data["data"]["deck"]["main"] == []

    async def test_copy_limit_returns_unchanged_deck(
        self, client: AsyncClient, card_payload
    ) -> None:
        card = card_payload(12580477, "Raigeki", "Spell Card")

        response = await client.post(
            "/builder/add", json={"deck": {"main": [card], "name": "Burn"}, "card": card}
        )

        data = response.json()
        assert data["outcome"] == "refusal"
        assert data["failure"]["kind"] == "copy_limit"
        assert len(data["data"]["deck"]["main"]) == 1
        assert data["data"]["deck"]["name"] == "Burn"

    async def test_invalid_card_is_422(self, client: AsyncClient) -> None:
        response = await client.post(
            "/builder/add", json={"deck": {}, "card": {"name": "No id"}}
        )

        assert response.status_code == 422

    async def test_degraded_restrictions_add_warning(
        self, client: AsyncClient, card_payload
    ) -> None:
        app.dependency_overrides[get_restriction_warnings] = lambda: [RESTRICTIONS_UNAVAILABLE]
        card = card_payload(46986414, "Dark Magician", "Normal Monster")

        response = await client.post("/builder/add", json={"deck": {}, "card": card})

        assert response.json()["warnings"] == [RESTRICTIONS_UNAVAILABLE]


class TestRemoveCard:
    async def test_removes_first_copy(self, client: AsyncClient, card_payload) -> None:
        magician = card_payload(46986414, "Dark Magician", "Normal Monster")
        raigeki = card_payload(12580477, "Raigeki", "Spell Card")

        response = await client.post(
            "/builder/remove",
            json={
                "deck": {"main": [magician, raigeki, magician]},
                "card": magician,
                "section": "main",
            },
        )

        data = response.json()
        assert data["outcome"] == "success"
        assert [c["name"] for c in data["data"]["deck"]["main"]] == [
            "Raigeki",
            "Dark Magician",
        ]

    async def test_unknown_section_rejected(self, client: AsyncClient, card_payload) -> None:
        card = card_payload(46986414, "Dark Magician", "Normal Monster")

        response = await client.post(
            "/builder/remove", json={"deck": {}, "card": card, "section": "side"}
        )

        assert response.status_code == 422


class TestSummary:
    async def test_summary_counts_and_warnings(self, client: AsyncClient, card_payload) -> None:
        deck = {
            "main": [
                card_payload(46986414, "Dark Magician", "Normal Monster"),
                card_payload(12580477, "Raigeki", "Spell Card"),
                card_payload(44095762, "Mirror Force", "Trap Card"),
            ],
            "extra": [
                card_payload(23995346, "Blue-Eyes Ultimate Dragon", "Fusion Monster"),
                card_payload(1861629, "Decode Talker", "Link Monster"),
            ],
        }

        response = await client.post("/builder/summary", json=deck)

        data = response.json()
        assert data["stats"] == {
            "total": 3,
            "extra_count": 2,
            "monster_count": 1,
            "spell_count": 1,
            "trap_count": 1,
        }
        assert data["extra_by_type"] == {"Fusion Monster": 1, "Link Monster": 1}
        assert data["warnings"] == ["A deck must have at least 40 cards in the Main Deck."]
