from __future__ import annotations

import logging
import os
from functools import lru_cache

from pydantic import BaseModel, Field

DEFAULT_FALLBACK_MESSAGE = "The requested data cannot be found. Please verify it and try again."


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    # --- Ubidots (value lookups) ---
    ubidots_token: str | None = Field(default_factory=lambda: os.getenv("UBIDOTS_TOKEN"))
    ubidots_base_url: str = Field(
        default_factory=lambda: os.getenv(
            "UBIDOTS_BASE_URL", "https://industrial.api.ubidots.com"
        )
    )

    # --- Vonage Messages API (replies) ---
    # The API key arrives with every inbound webhook; only the secret is ours.
    vonage_api_secret: str | None = Field(
        default_factory=lambda: os.getenv("VONAGE_API_SECRET")
    )
    vonage_base_url: str = Field(
        default_factory=lambda: os.getenv("VONAGE_BASE_URL", "https://api.nexmo.com")
    )

    # --- Command handling ---
    trigger_keyword: str = Field(default_factory=lambda: os.getenv("TRIGGER_KEYWORD", "UBIDOTS"))
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE
    # False keeps the historical behaviour: malformed commands raise, and
    # non-trigger messages still get an (empty) reply.
    reply_on_invalid_command: bool = Field(
        default_factory=lambda: _env_flag("REPLY_ON_INVALID_COMMAND")
    )

    # Seconds, applied to every outbound HTTP call
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "10"))
    )

    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    model_config = {"frozen": True}


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s",
    )
