"""Application configuration."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

STORAGE_BACKENDS = frozenset({"sqlite", "supabase"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    catalog_url: str = "https://jsonplaceholder.typicode.com/photos"
    catalog_limit: int | None = Field(default=None, ge=0)
    database_path: Path = Path("data/photos.sqlite3")
    storage_backend: str = "sqlite"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    http_timeout_seconds: float = Field(default=15.0, gt=0)
    max_concurrent_downloads: int = Field(default=8, ge=1)
    dedupe_by_id: bool = True
    sync_on_startup: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_storage_backend(raw: str | None) -> str:
    """Normalize the configured storage backend name."""
    if raw is None:
        return "sqlite"
    cleaned = raw.strip().lower()
    if not cleaned:
        return "sqlite"
    if cleaned not in STORAGE_BACKENDS:
        raise ValueError(f"Unsupported storage backend: {raw}")
    return cleaned
