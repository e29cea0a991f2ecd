from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# RESOLVER DEFAULTS
# =============================================================================

# Minimum gap between provider call initiations.
# Scryfall allows roughly 10 requests per second.
DEFAULT_RATE_LIMIT_MS = 100

# Number of lookups issued concurrently per resolve_many window
DEFAULT_BATCH_SIZE = 8


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "ManaPrism"

    scryfall_api_url: str = "https://api.scryfall.com"
    scryfall_user_agent: str = "manaprism/0.1.0"

    identity_rate_limit_ms: int = DEFAULT_RATE_LIMIT_MS
    identity_batch_size: int = DEFAULT_BATCH_SIZE
    identity_lookup_timeout_s: float = 10.0


settings = Settings()
