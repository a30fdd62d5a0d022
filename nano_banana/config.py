"""
Configuration management using pydantic-settings.
Loads from NANO_BANANA_* environment variables and ./.env
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nano_banana.constants import DEFAULT_API_ENDPOINT, DEFAULT_MAX_RETRIES, DEFAULT_MODEL_ID


class Settings(BaseSettings):
    """Process-wide defaults, read once at startup."""

    model_config = SettingsConfigDict(
        env_prefix="NANO_BANANA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        protected_namespaces=(),
    )

    # Generation
    api_endpoint: str = DEFAULT_API_ENDPOINT
    model_id: str = DEFAULT_MODEL_ID
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=1)
    request_timeout: float = 120.0

    # Local storage
    storage_path: Path = Path.home() / ".nano-banana" / "config.db"
    encryption_key: str = ""  # Fernet key for the stored API key


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
