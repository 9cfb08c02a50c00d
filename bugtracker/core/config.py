"""
Configuration helpers for the bug tracker backend.

Routers/services receive a Settings object instead of reading os.environ
directly; the store endpoint is injected configuration like everything else.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    bug_store: str
    json_store_path: str
    cors_origins: tuple[str, ...]
    host: str
    port: int
    log_level: str
    auto_create_tables: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _csv(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./bugtracker.db").strip(),
        bug_store=(os.getenv("BUG_STORE") or "sql").strip().lower(),
        json_store_path=os.getenv("JSON_STORE_PATH", "./bugs.json"),
        cors_origins=_csv(os.getenv("CORS_ORIGINS", "*")),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "5000"), 5000),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        auto_create_tables=_bool(os.getenv("AUTO_CREATE_TABLES"), True),
    )
