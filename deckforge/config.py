from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RESTRICTION_FORMATS = frozenset({"tcg", "ocg", "goat"})


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKFORGE_")

    app_name: str = "DeckForge"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./deckforge.db"

    catalog_url: str = "https://db.ygoprodeck.com/api/v7/cardinfo.php"
    # None waits forever; a hung catalog call stays pending
    catalog_timeout: float | None = None
    user_agent: str = "DeckForge/1.0"

    # Which banlist_info field the restriction table is built from
    restriction_format: str = "tcg"

    import_batch_size: int = 20
    search_page_size: int = 20

    # Type tags routed to the Extra Deck. Versioned so catalog taxonomy
    # changes can be rolled out without touching the classifier.
    extra_deck_markers_version: int = 1
    extra_deck_markers: tuple[str, ...] = (
        "Fusion Monster",
        "Synchro Monster",
        "XYZ Monster",
        "Link Monster",
    )

    @field_validator("restriction_format")
    @classmethod
    def check_restriction_format(cls, value: str) -> str:
        value = value.lower()
        if value not in RESTRICTION_FORMATS:
            raise ValueError(f"restriction_format must be one of {sorted(RESTRICTION_FORMATS)}")
        return value


settings = Settings()


# =============================================================================
# DECK CONSTRUCTION LIMITS
# =============================================================================

MAX_MAIN_DECK = 60
MIN_MAIN_DECK = 40
MAX_EXTRA_DECK = 15

# Copy cap for any card the restriction list does not mention
DEFAULT_COPY_CAP = 3
