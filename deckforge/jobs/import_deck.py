"""
Import a deck list from a file into the deck store.

Usage:
    python -m deckforge.jobs.import_deck decklist.txt --name "Blue-Eyes"
    python -m deckforge.jobs.import_deck export.json --name "Dragons" --mode id
"""

import argparse
import asyncio
import logging
from pathlib import Path

from deckforge.catalog.client import CatalogClient, CatalogQuery
from deckforge.db.database import async_session_factory, init_db
from deckforge.db.operations import save_deck
from deckforge.models.deck import DeckComposition, SavedDeckDocument
from deckforge.models.importing import ImportMode
from deckforge.services.deck_builder import to_document
from deckforge.services.import_resolver import ImportResolver, outcome_message

logger = logging.getLogger(__name__)


async def import_file(
    path: Path,
    name: str,
    mode: ImportMode,
    catalog: CatalogQuery,
) -> SavedDeckDocument | None:
    """
    Resolve a deck list file and save it.

    Returns:
        The saved deck, or None if the file is unreadable or nothing
        could be imported
    """
    try:
        payload = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.error("Deck list %s is not UTF-8 text: %s", path, e)
        return None

    outcome = await ImportResolver(catalog).run(payload, mode)
    logger.info(outcome_message(outcome))

    if not outcome.succeeded:
        return None

    document = to_document(DeckComposition(name=name))
    document.cards = list(outcome.resolved_cards)

    async with async_session_factory() as session:
        saved = await save_deck(session, document)
        await session.commit()

    logger.info("Saved deck %s with %d cards", saved.id, len(saved.cards))
    return saved


async def run_import(path: Path, name: str, mode: ImportMode) -> bool:
    await init_db()
    async with CatalogClient() as catalog:
        saved = await import_file(path, name, mode, catalog)
    return saved is not None


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for importing a deck list."""
    parser = argparse.ArgumentParser(description="Import a deck list into the deck store")
    parser.add_argument("path", type=Path, help="Deck list file")
    parser.add_argument("--name", required=True, help="Name for the new deck")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ImportMode],
        default=ImportMode.TEXT.value,
        help="text: '3 Card Name' lines; id: JSON list or comma-separated passcodes",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ok = asyncio.run(run_import(args.path, args.name, ImportMode(args.mode)))
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
