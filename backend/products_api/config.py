"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - FRONTEND_URL is the single allowed CORS origin (no wildcard, no list)
    - get_settings() is cached (lru_cache) - single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://products:products@db:5432/products"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgres:// URLs; asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str):
            for prefix in ("postgresql://", "postgres://"):
                if v.startswith(prefix):
                    return v.replace(prefix, "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_auto_create: bool = True

    # API
    frontend_url: str = "http://localhost:5173"
    cors_allow_missing_origin: bool = False

    # Docs
    docs_title: str = "REST API Python / FastAPI Documentation"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
