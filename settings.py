"""Runtime settings loaded once from the environment (and an optional .env file)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.dexscreener.com"

T = TypeVar("T")


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    temperature: float = 0.1
    dexscreener_base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 10.0
    max_candidates: int = 20
    max_workers: int = 8
    max_jitter_seconds: float = 0.2
    log_level: str = "INFO"

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openai_api_key)


def _read(
    env: Mapping[str, str],
    key: str,
    cast: Callable[[str], T],
    default: T,
    valid: Optional[Callable[[T], bool]] = None,
) -> T:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw.strip())
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed %s=%r; using default %r", key, raw, default)
        return default
    if valid is not None and not valid(value):
        logger.warning("Ignoring out-of-range %s=%r; using default %r", key, raw, default)
        return default
    return value


def _positive(value: float) -> bool:
    return value > 0


def _non_negative(value: float) -> bool:
    return value >= 0


def _log_level(raw: str) -> str:
    level = raw.upper()
    # getLevelName maps known names to their int value and anything else to a string
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"unknown log level {raw!r}")
    return level


def settings_from_env(env: Mapping[str, str]) -> Settings:
    defaults = Settings()
    return Settings(
        openai_api_key=env.get("OPENAI_API_KEY") or None,
        openai_model=_read(env, "OPENAI_MODEL", str, defaults.openai_model),
        temperature=_read(env, "OPENAI_TEMPERATURE", float, defaults.temperature, _non_negative),
        dexscreener_base_url=_read(env, "DEXSCREENER_BASE_URL", str, defaults.dexscreener_base_url).rstrip("/"),
        request_timeout=_read(env, "DEXSCREENER_TIMEOUT", float, defaults.request_timeout, _positive),
        max_candidates=_read(env, "MAX_CANDIDATES", int, defaults.max_candidates, _positive),
        max_workers=_read(env, "MAX_WORKERS", int, defaults.max_workers, _positive),
        max_jitter_seconds=_read(env, "MAX_JITTER_SECONDS", float, defaults.max_jitter_seconds, _non_negative),
        log_level=_read(env, "LOG_LEVEL", _log_level, defaults.log_level),
    )


def load_settings() -> Settings:
    """Load `.env` (if present) and build an immutable Settings snapshot."""
    load_dotenv()
    return settings_from_env(os.environ)
