"""
Application configuration using pydantic-settings.
"""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    PROJECT_NAME: str = "Live Channels Service"

    # Database backing the live source configuration store
    DATABASE_URL: str = "sqlite+aiosqlite:///./live_sources.db"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_database_url(cls, v: str) -> str:
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Live channel cache
    LIVE_CACHE_TTL_SECONDS: int = 30 * 60
    LIVE_CACHE_MAXSIZE: int = 256

    # Playlist fetching
    LIVE_FETCH_TIMEOUT_SECONDS: float = 30.0
    LIVE_DEFAULT_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
