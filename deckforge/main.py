import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deckforge.api import builder_router, cards_router, decks_router, health_router
from deckforge.catalog.client import CatalogClient
from deckforge.config import settings
from deckforge.db.database import init_db
from deckforge.services.card_search import SearchSequencer
from deckforge.services.restrictions import load_restriction_table

logger = logging.getLogger(__name__)

try:
    __version__ = pkg_version("deckforge")
except PackageNotFoundError:
    __version__ = "0.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create tables, open the catalog client and load the restriction table."""
    await init_db()

    catalog = CatalogClient()
    app.state.catalog = catalog
    app.state.search_sequencer = SearchSequencer()

    load = await load_restriction_table(catalog)
    app.state.restrictions = load.table
    app.state.restriction_warning = load.warning
    if load.degraded:
        logger.warning("Starting with a permissive restriction table")

    yield

    await catalog.aclose()


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    lifespan=lifespan,
)

app.include_router(builder_router)
app.include_router(cards_router)
app.include_router(decks_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
