from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKSMITH_")

    app_name: str = "Decksmith"
    debug: bool = False

    # Card catalog exported by the catalog service (canonical + alternate art)
    catalog_path: str = "data/cards.json"

    # Client-local store for the in-progress deck of anonymous users
    local_store_url: str = "sqlite:///decksmith.db"

    remote_decks_url: str = "http://localhost:3000/api"
    remote_timeout_seconds: float = 5.0


settings = Settings()


# =============================================================================
# DECK CONSTRUCTION RULES
# =============================================================================

# Hard ceiling on the number of cards (sum of quantities) in a deck
MAX_DECK_SIZE = 50

DEFAULT_DECK_NAME = "Mi Mazo"

# Local store key for the in-progress deck of a user without a session
TEMPORARY_DECK_KEY = "cartatech_temporary_deck"

# Schema version written into persisted deck records
RECORD_VERSION = 1
