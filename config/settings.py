"""Application settings and configuration management."""

import os
from pathlib import Path
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name, "")
    try:
        return float(value) if value else None
    except ValueError:
        return None


class Settings:
    """Application settings loaded from environment variables."""

    # API Keys (read by the relay only, never sent to the browser)
    ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY", "")

    # Upstream completion API
    ANTHROPIC_API_URL: str = os.getenv("ANTHROPIC_API_URL", "https://api.anthropic.com/v1/messages")
    ANTHROPIC_VERSION: str = os.getenv("ANTHROPIC_VERSION", "2023-06-01")

    # Chat relay
    CHAT_RELAY_URL: str = os.getenv("CHAT_RELAY_URL", "http://localhost:3004/api/chat")
    CHAT_RELAY_PORT: int = int(os.getenv("CHAT_RELAY_PORT", "3004"))
    CHAT_RELAY_TIMEOUT: Optional[float] = _env_float("CHAT_RELAY_TIMEOUT")  # None = wait forever

    # Chat panel
    CHAT_ENABLED: bool = _env_flag("CHAT_ENABLED", True)
    CHAT_MODE: str = os.getenv("CHAT_MODE", "user-controlled")
    CHAT_MODEL: str = os.getenv("CHAT_MODEL", "claude-sonnet-4-5")
    MAX_TOKENS_WITH_RESEARCH: int = 2000
    MAX_TOKENS_WITHOUT_RESEARCH: int = 1000
    RESEARCH_LIBRARY_NAME: str = "Writing Sites"

    # Bundled dataset
    DATA_PATH: Path = PROJECT_ROOT / "data" / "wac_institutions.json"

    # App settings
    MAX_COMPARISON_INSTITUTIONS: int = 5
    EXPORT_FILE_PREFIX: str = "wac-institutions"

    @property
    def has_anthropic_key(self) -> bool:
        return bool(self.ANTHROPIC_API_KEY)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
