"""
Configuration helpers for the employee API.

Exposes a frozen Settings object read from environment variables so that the
app factory and entry point do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DB_PATH = "db.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    db_path: Path
    log_level: str
    host: str
    port: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        db_path=Path(os.getenv("EMPLOYEES_DB_PATH") or DEFAULT_DB_PATH),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "8000"), 8000),
    )
