"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

PRODUCTION = "production"


class Settings(BaseSettings):
    """Engine settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="RENDER_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Execution mode
    environment: str = Field(default="development", description="Execution mode")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Default store
    cache_max_size: int = Field(default=500, gt=0, description="Max cached entries")
    cache_max_age_ms: int = Field(default=3_600_000, gt=0, description="Entry max age (ms)")
    hash_keys: bool = Field(default=True, description="Store entries under hashed keys")

    # Markup
    root_id_attr: str = Field(
        default="data-root-id", min_length=1, description="Attribute carrying the root id"
    )

    @property
    def is_production(self) -> bool:
        """Interception is only active in production."""
        return self.environment.strip().lower() == PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
