"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        extra="ignore",
    )

    # MongoDB
    database_url: Optional[str] = None
    default_db_name: str = "Cluster0"
    db_timeout_seconds: float = 5.0

    # Password hashing
    bcrypt_rounds: int = 10

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",  # Development UI
    ]

    @property
    def database_configured(self) -> bool:
        """True when a non-empty connection string is available."""
        return bool(self.database_url)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
