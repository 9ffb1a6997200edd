from __future__ import annotations
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

log = logging.getLogger(__name__)

DEFAULT_FEED_URL = "https://api.nasa.gov/neo/rest/v1/feed"


@dataclass(frozen=True)
class Settings:
    nasa_api_key: str = "DEMO_KEY"
    nasa_api_url: str = DEFAULT_FEED_URL
    neo_cache_ttl_s: float = 3600.0
    http_timeout_s: float = 10.0
    log_level: str = "INFO"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning(f"[config] {name}={raw!r} is not a number; using {default}")
        return default


def _env_level(name: str, default: str) -> str:
    raw = (os.getenv(name) or default).strip().upper()
    if raw not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
        log.warning(f"[config] {name}={raw!r} is not a logging level; using {default}")
        return default
    return raw


def load_settings() -> Settings:
    """Read .env (if present) and the process environment."""
    load_dotenv()
    return Settings(
        nasa_api_key=os.getenv("NASA_API_KEY") or "DEMO_KEY",
        nasa_api_url=os.getenv("NASA_API_URL") or DEFAULT_FEED_URL,
        neo_cache_ttl_s=_env_float("NEO_CACHE_TTL_S", 3600.0),
        http_timeout_s=_env_float("HTTP_TIMEOUT_S", 10.0),
        log_level=_env_level("LOG_LEVEL", "INFO"),
    )
