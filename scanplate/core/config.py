"""Environment-driven configuration objects for the cart engine."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .constants import API_TIMEOUT_SECONDS, CART_FILE_PATH, CART_STORAGE_KEY, DEFAULT_API_URL
from .exceptions import ConfigurationException


@dataclass(slots=True)
class Settings:
    api_base_url: str
    redis_url: str | None
    cart_file_path: str
    cart_storage_key: str
    api_timeout: float
    log_level: str


def _parse_timeout(value: str | None) -> float:
    if not value:
        return float(API_TIMEOUT_SECONDS)
    try:
        timeout = float(value)
    except ValueError as e:
        raise ConfigurationException(f"SCANPLATE_API_TIMEOUT must be a number, got {value!r}") from e
    if timeout <= 0:
        raise ConfigurationException("SCANPLATE_API_TIMEOUT must be positive")
    return timeout


def load_settings() -> Settings:
    """Load environment variables once and expose typed settings."""
    load_dotenv()

    api_base_url = os.getenv("SCANPLATE_API_URL", DEFAULT_API_URL).rstrip("/")

    return Settings(
        api_base_url=api_base_url,
        redis_url=os.getenv("REDIS_URL") or None,
        cart_file_path=os.getenv("SCANPLATE_CART_FILE", CART_FILE_PATH),
        cart_storage_key=os.getenv("SCANPLATE_CART_KEY", CART_STORAGE_KEY),
        api_timeout=_parse_timeout(os.getenv("SCANPLATE_API_TIMEOUT")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
