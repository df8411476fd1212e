from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKVAULT_")

    app_name: str = "DeckVault"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///deckvault.db"

    # When False the store runs purely in memory (nothing survives a restart)
    persistence_enabled: bool = True

    scryfall_base_url: str = "https://api.scryfall.com"
    mtgjson_base_url: str = "https://mtgjson.com/api/v5"
    user_agent: str = "DeckVault/1.0"
    http_timeout: float = 30.0

    # Scryfall asks for 50-100ms between requests; MTGJSON is a static CDN
    scryfall_min_interval: float = 0.1
    mtgjson_min_interval: float = 0.15


settings = Settings()


# =============================================================================
# RESOLVER LIMITS
# =============================================================================

# Scryfall's /cards/collection endpoint accepts at most 75 identifiers
SCRYFALL_BATCH_SIZE = 75

# Storage keys owned by the stores
COLLECTION_KEY = "collection"
DECKS_KEY = "decks"
