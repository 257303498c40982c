"""
Notes API — Settings
=====================

Read once at import from environment variables (or a .env file in the
working directory); names are case-insensitive, so DATABASE_URL sets
`database_url`.

    DATABASE_URL=postgresql+asyncpg://notes:secret@db:5432/notes
    DEFAULT_PAGE_SIZE=25
    LOG_LEVEL=debug
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Store ─────────────────────────────────────────────────────────────
    database_url: str = Field(
        default="sqlite+aiosqlite:///./notes.db",
        description="Async SQLAlchemy URL (aiosqlite or asyncpg)",
    )
    # Ignored for SQLite
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = True
    # Off when Alembic owns the schema
    db_create_tables: bool = True

    # ── Listing ───────────────────────────────────────────────────────────
    default_page_size: int = Field(default=10, ge=1, le=100)

    # ── HTTP ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed origins",
    )
    rate_limit_requests: int = Field(default=600, ge=10, le=100000)
    rate_limit_window: int = Field(default=60, ge=1, le=86400)

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.strip().upper()
        if upper not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return upper

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
