"""
Configuration for the image info analyzer.

Every setting is read from the environment when a `Settings` object is
built, so tests can monkeypatch variables and call `load_settings()` again.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from .shared import get_logger
from .utils import env_bool

logger = get_logger(__name__)

DEFAULT_FETCH_TIMEOUT_S = 30.0
DEFAULT_MAX_FETCH_BYTES = 64 * 1024 * 1024
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8188


def _env_raw(*names: str, default: str | None = None) -> str | None:
    for name in names:
        if not name:
            continue
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return str(val).strip()
    return default


def _env_int(default: int, *names: str, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid integer for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


def _env_float(default: float, *names: str, min_value: float | None = None, max_value: float | None = None) -> float:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid float for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


def _env_bool(default: bool, *names: str) -> bool:
    for name in names:
        if name and name in os.environ:
            return env_bool(name, default)
    return default


@dataclass(frozen=True)
class Settings:
    fetch_timeout_s: float = DEFAULT_FETCH_TIMEOUT_S
    max_fetch_bytes: int = DEFAULT_MAX_FETCH_BYTES
    allow_file_locators: bool = False
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def load_settings() -> Settings:
    """Build a `Settings` snapshot from the current environment."""
    return Settings(
        fetch_timeout_s=_env_float(DEFAULT_FETCH_TIMEOUT_S, "IMGINFO_FETCH_TIMEOUT", min_value=1.0, max_value=600.0),
        max_fetch_bytes=_env_int(DEFAULT_MAX_FETCH_BYTES, "IMGINFO_MAX_FETCH_BYTES", min_value=1024),
        allow_file_locators=_env_bool(False, "IMGINFO_ALLOW_FILE_LOCATORS"),
        host=_env_raw("IMGINFO_HOST", default=DEFAULT_HOST) or DEFAULT_HOST,
        port=_env_int(DEFAULT_PORT, "IMGINFO_PORT", min_value=1, max_value=65535),
    )
