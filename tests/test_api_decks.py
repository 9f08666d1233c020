"""Tests for saved deck API endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from deckforge.api.dependencies import get_catalog
from deckforge.db.database import get_session
from deckforge.main import app
from deckforge.models.db import Base


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def catalog(fake_catalog_cls, make_card, dark_magician, raigeki, blue_eyes_ultimate):
    return fake_catalog_cls(
        [
            dark_magician,
            make_card(38033121, "Dark Magician Girl"),
            raigeki,
            blue_eyes_ultimate,
        ]
    )


@pytest.fixture
async def client(async_engine, catalog):
    """Provide an async test client with overridden database session and catalog."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_catalog] = lambda: catalog

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def deck_body(card_payload):
    return {
        "name": "Magicians",
        "description": "Spellcasters",
        "main": [
            card_payload(46986414, "Dark Magician", "Normal Monster"),
            card_payload(12580477, "Raigeki", "Spell Card"),
        ],
        "extra": [card_payload(23995346, "Blue-Eyes Ultimate Dragon", "Fusion Monster")],
    }


class TestSaveAndRead:
    async def test_empty_list(self, client: AsyncClient) -> None:
        response = await client.get("/decks")

        assert response.status_code == 200
        assert response.json() == {"decks": [], "count": 0}

    async def test_save_then_get(self, client: AsyncClient, deck_body) -> None:
        saved = (await client.post("/decks", json=deck_body)).json()

        response = await client.get(f"/decks/{saved['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Magicians"
        assert [c["name"] for c in data["cards"]] == [
            "Dark Magician",
            "Raigeki",
            "Blue-Eyes Ultimate Dragon",
        ]
        assert data["stats"]["extra_count"] == 1
        # No chosen thumbnail: the first card's artwork
        assert data["thumbnail"] == "https://images.example/cropped/46986414.jpg"

    async def test_update_keeps_id(self, client: AsyncClient, deck_body) -> None:
        saved = (await client.post("/decks", json=deck_body)).json()

        deck_body.update(deck_id=saved["id"], name="Renamed", extra=[])
        updated = (await client.post("/decks", json=deck_body)).json()

        listing = (await client.get("/decks")).json()
        assert updated["id"] == saved["id"]
        assert listing["count"] == 1
        assert listing["decks"][0]["name"] == "Renamed"

    async def test_blank_name_rejected(self, client: AsyncClient, deck_body) -> None:
        deck_body["name"] = "  "

        response = await client.post("/decks", json=deck_body)

        assert response.status_code == 400
        assert (await client.get("/decks")).json()["count"] == 0

    async def test_missing_deck_404(self, client: AsyncClient) -> None:
        response = await client.get("/decks/nope")

        assert response.status_code == 404
        assert "nope" in response.json()["detail"]


class TestDeleteAndDuplicate:
    async def test_delete(self, client: AsyncClient, deck_body) -> None:
        saved = (await client.post("/decks", json=deck_body)).json()

        response = await client.delete(f"/decks/{saved['id']}")

        assert response.status_code == 204
        assert (await client.get(f"/decks/{saved['id']}")).status_code == 404

    async def test_delete_missing(self, client: AsyncClient) -> None:
        assert (await client.delete("/decks/nope")).status_code == 404

    async def test_duplicate(self, client: AsyncClient, deck_body) -> None:
        saved = (await client.post("/decks", json=deck_body)).json()

        response = await client.post(f"/decks/{saved['id']}/duplicate")

        assert response.status_code == 200
        copy = response.json()
        assert copy["id"] != saved["id"]
        assert copy["name"] == "Magicians (Copy)"
        assert (await client.get("/decks")).json()["count"] == 2

    async def test_duplicate_missing(self, client: AsyncClient) -> None:
        assert (await client.post("/decks/nope/duplicate")).status_code == 404


class TestImport:
    async def test_text_import(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/import",
            json={
                "name": "Imported",
                "payload": "== Main ==\n2 Dark Magician\n1 Raigeki\n1 Blue-Eyes Ultimate Dragon",
            },
        )

        data = response.json()
        assert data["outcome"] == "success"
        assert data["data"]["resolved_count"] == 4
        deck = data["data"]["deck"]
        assert [c["name"] for c in deck["cards"]][:2] == ["Dark Magician", "Dark Magician"]
        assert deck["stats"]["extra_count"] == 1

    async def test_partial_import_lists_missing_cards(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/import",
            json={"name": "Imported", "payload": "1 Raigeki\n1 Kuriboh"},
        )

        data = response.json()
        assert data["outcome"] == "partial_success"
        assert data["data"]["unresolved_tokens"] == ["Kuriboh"]
        assert data["warnings"] == ['Card not found: "Kuriboh"']
        assert (await client.get("/decks")).json()["count"] == 1

    async def test_identifier_import(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/import",
            json={
                "name": "By id",
                "payload": ["Exported", "46986414", "46986414"],
                "mode": "id",
            },
        )

        data = response.json()
        assert data["outcome"] == "success"
        assert data["data"]["resolved_count"] == 2

    async def test_nothing_resolved_saves_nothing(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/import",
            json={"name": "Imported", "payload": "1 Kuriboh"},
        )

        data = response.json()
        assert data["outcome"] == "known_failure"
        assert data["failure"]["kind"] == "nothing_imported"
        assert (await client.get("/decks")).json()["count"] == 0

    async def test_malformed_identifier_payload(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/import",
            json={"name": "Imported", "payload": "Dark Magician", "mode": "id"},
        )

        data = response.json()
        assert data["outcome"] == "known_failure"
        assert data["failure"]["kind"] == "malformed_import"

    async def test_blank_name(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/import", json={"name": "", "payload": "1 Raigeki"}
        )

        data = response.json()
        assert data["failure"]["kind"] == "invalid_input"

    async def test_catalog_down_imports_nothing(self, client: AsyncClient, catalog) -> None:
        catalog.fail = True

        response = await client.post(
            "/decks/import", json={"name": "Imported", "payload": "1 Raigeki"}
        )

        data = response.json()
        assert data["outcome"] == "known_failure"
        assert data["failure"]["kind"] == "nothing_imported"
        assert data["warnings"]
