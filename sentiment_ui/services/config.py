"""Configuration helpers for the sentiment analyzer client."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_BASE_URL = "http://localhost:8000"
DEFAULT_LOG_PATH = Path("logs/sentiment_ui.log")

_CONFIG_CACHE: "ClientConfig | None" = None
_CONFIG_SIGNATURE: tuple[tuple[str, str | None], ...] | None = None
_CACHE_LOCK = threading.Lock()

_FALSEY = {"0", "false", "no", "off", "f", "n", ""}
_TRUEY = {"1", "true", "yes", "on", "t", "y"}

_SIGNATURE_KEYS = (
    "SENTIMENT_API_URL",
    "API_BASE_URL",
    "SENTIMENT_REQUEST_TIMEOUT",
    "SENTIMENT_DISCARD_STALE",
    "SENTIMENT_LOG_PATH",
    "SENTIMENT_LOG_LEVEL",
)


def parse_bool(value: object | None, default: bool = False) -> bool:
    """Coerce user-provided strings and booleans into a boolean."""

    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip()
    if not text:
        return False
    lowered = text.lower()
    if lowered in _TRUEY:
        return True
    if lowered in _FALSEY:
        return False
    return default


def sanitize_base_url(value: str | None, *, default: str = DEFAULT_API_BASE_URL) -> str:
    candidate = (value or "").strip().rstrip("/")
    return candidate or default


def _coerce_timeout(value: object | None) -> Optional[float]:
    if value is None:
        return None
    try:
        timeout = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    return timeout if timeout > 0 else None


class ClientConfig(BaseModel):
    """Settings injected into the interaction controller at construction time."""

    model_config = ConfigDict(frozen=True)

    api_base_url: str = Field(default=DEFAULT_API_BASE_URL)
    # None waits indefinitely, matching a plain browser fetch
    request_timeout: Optional[float] = Field(default=None)
    discard_stale_responses: bool = Field(default=False)
    log_path: Path = Field(default=DEFAULT_LOG_PATH)
    log_level: str = Field(default="INFO")

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, value: object) -> str:
        name = str(value or "").strip().upper()
        # getLevelName returns an int only for registered level names
        if isinstance(logging.getLevelName(name), int):
            return name
        return "INFO"


def _env_signature() -> tuple[tuple[str, str | None], ...]:
    return tuple((name, os.getenv(name)) for name in _SIGNATURE_KEYS)


def _build_config() -> ClientConfig:
    load_dotenv(override=False)

    base_url = sanitize_base_url(os.getenv("SENTIMENT_API_URL") or os.getenv("API_BASE_URL"))
    log_path = os.getenv("SENTIMENT_LOG_PATH", "").strip()
    log_level = os.getenv("SENTIMENT_LOG_LEVEL", "").strip().upper() or "INFO"

    return ClientConfig(
        api_base_url=base_url,
        request_timeout=_coerce_timeout(os.getenv("SENTIMENT_REQUEST_TIMEOUT")),
        discard_stale_responses=parse_bool(os.getenv("SENTIMENT_DISCARD_STALE"), default=False),
        log_path=Path(log_path) if log_path else DEFAULT_LOG_PATH,
        log_level=log_level,
    )


def config_from_env() -> ClientConfig:
    """Build :class:`ClientConfig` from environment variables without caching."""

    return _build_config()


def get_client_config() -> ClientConfig:
    global _CONFIG_CACHE, _CONFIG_SIGNATURE
    signature = _env_signature()
    with _CACHE_LOCK:
        if _CONFIG_CACHE is None or signature != _CONFIG_SIGNATURE:
            _CONFIG_CACHE = _build_config()
            _CONFIG_SIGNATURE = signature
        return _CONFIG_CACHE


def refresh_client_config() -> ClientConfig:
    global _CONFIG_CACHE, _CONFIG_SIGNATURE
    with _CACHE_LOCK:
        _CONFIG_CACHE = _build_config()
        _CONFIG_SIGNATURE = _env_signature()
        return _CONFIG_CACHE


__all__ = [
    "ClientConfig",
    "DEFAULT_API_BASE_URL",
    "config_from_env",
    "get_client_config",
    "parse_bool",
    "refresh_client_config",
    "sanitize_base_url",
]
