"""Application settings.

Values are read from the environment, with a `.env` file in the project root
loaded first when present.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_DATABASE_URL = "sqlite:///nutrition.db"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the service."""

    openai_api_key: Optional[str]
    openai_model: str
    ai_timeout_seconds: float
    write_database_url: str
    read_database_url: str
    log_level: str


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def load_settings() -> Settings:
    """Build a `Settings` instance from the current environment."""
    write_url = os.getenv("WRITE_DATABASE_URL", DEFAULT_DATABASE_URL)
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        ai_timeout_seconds=_float_env("AI_TIMEOUT_SECONDS", 30.0),
        write_database_url=write_url,
        read_database_url=os.getenv("READ_DATABASE_URL", write_url),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings (cached after first read)."""
    return load_settings()
