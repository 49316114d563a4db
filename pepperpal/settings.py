"""Centralised settings for PepperPal, loaded from env / .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env into os.environ (won't overwrite existing env vars)
load_dotenv(override=False)

_DEFAULT_KNOWLEDGE = Path(__file__).parent / "knowledge" / "peppercoin.md"


class PepperPalSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PEPPERPAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # --- general ---
    app_name: str = "Pepper Pal"
    env: str = "dev"
    log_level: str = "INFO"

    # --- Telegram ---
    bot_token: str = Field(default="", validation_alias=AliasChoices("PEPPERPAL_BOT_TOKEN", "TELEGRAM_BOT_TOKEN"))
    bot_username: str = "PepperPal"

    # --- remote model (OpenRouter via litellm) ---
    openrouter_api_key: str = Field(
        default="", validation_alias=AliasChoices("PEPPERPAL_OPENROUTER_API_KEY", "OPENROUTER_API_KEY")
    )
    openrouter_api_base: str = "https://openrouter.ai/api/v1"
    model_fast: str = "liquid/lfm-2.5-1.2b-instruct:free"
    model_quality: str = "google/gemma-3-4b-it:free"
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)
    request_timeout_seconds: float = Field(default=15.0, gt=0)

    # --- rate limiting ---
    rate_limit_max: int = Field(default=5, gt=0)
    rate_limit_window_seconds: int = Field(default=60, gt=0)
    rate_limit_sweep_seconds: int = Field(default=300, gt=0)

    # --- duplicate suppression ---
    duplicate_window_seconds: int = Field(default=30, gt=0)
    duplicate_max_entries: int = Field(default=1000, gt=0)
    duplicate_sweep_seconds: int = Field(default=60, gt=0)

    # --- response cache (TTLs in seconds, per content class) ---
    cache_max_entries: int = Field(default=500, gt=0)
    cache_ttl_facts: int = Field(default=3600, gt=0)
    cache_ttl_stats: int = Field(default=300, gt=0)

    # --- admin (comma-separated Telegram user ids allowed to run /stats and /health) ---
    admin_ids: str = Field(default="", validation_alias=AliasChoices("PEPPERPAL_ADMIN_IDS", "ADMIN_USER_IDS"))

    # --- knowledge ---
    knowledge_path: Path = _DEFAULT_KNOWLEDGE

    @property
    def ai_configured(self) -> bool:
        return bool(self.openrouter_api_key)

    @property
    def admin_user_ids(self) -> frozenset[int]:
        """Parsed ``admin_ids``; entries that are not integers are skipped."""
        ids = set()
        for part in self.admin_ids.split(","):
            part = part.strip()
            if part.lstrip("-").isdigit():
                ids.add(int(part))
        return frozenset(ids)


@lru_cache
def get_settings() -> PepperPalSettings:
    return PepperPalSettings()
