"""
Shared helpers for sanitizing error messages before they reach clients.
"""
from __future__ import annotations

import os
import re
from typing import Any

from .log import get_logger

logger = get_logger(__name__)
_WINDOWS_PATH_RE = re.compile(r"[A-Za-z]:\\[^\s]+")
_UNC_PATH_RE = re.compile(r"\\\\[^\s\\]+\\[^\s]+")
_UNIX_PATH_RE = re.compile(r"(?<![A-Za-z0-9:/?&=#%])/(?!/)[^\s#?]+")


def _debug_enabled() -> bool:
    return os.getenv("IMGINFO_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")


def _mask_paths(value: str) -> str:
    """Mask path-looking substrings to avoid leaking filesystem structure."""
    cleaned = _WINDOWS_PATH_RE.sub("[path]", value)
    cleaned = _UNC_PATH_RE.sub("[path]", cleaned)
    cleaned = _UNIX_PATH_RE.sub("[path]", cleaned)
    return cleaned


def sanitize_error_message(exc: Any, fallback: str = "") -> str:
    """
    Build a safe, single-line description of an error for clients.

    Args:
        exc: Exception or raw value to sanitize.
        fallback: Message to return when nothing meaningful remains.

    Returns:
        The masked message (at most 200 characters), or ``fallback``.
    """
    if exc is None:
        return fallback

    try:
        raw = str(exc)
    except Exception:
        raw = ""

    if not raw:
        return fallback or type(exc).__name__

    sanitized = _mask_paths(raw.replace(os.getcwd(), "[cwd]"))
    sanitized = " ".join(sanitized.splitlines()).strip()

    if _debug_enabled():
        logger.debug("Sanitized error payload: %s", sanitized)

    return sanitized[:200] if sanitized else fallback
