"""Parser configuration via environment variables with LOOSE_DATES_ prefix."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Date parser configuration.

    All settings are read from environment variables prefixed with
    ``LOOSE_DATES_``; constructor arguments on ``DateParser`` take precedence.
    """

    model_config = SettingsConfigDict(env_prefix="LOOSE_DATES_")

    # ── Locale ─────────────────────────────────────────────────────────────
    # Used when a parser is built without an explicit locale
    default_locale: str = "en_US"

    # ── Logging ────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_json: bool = True
