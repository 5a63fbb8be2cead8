"""
User-facing message catalog.

Templates use positional `{0}` placeholders filled from `args`.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Final

MESSAGES: Final[dict[str, str]] = {
    "error_analyze_failed": "Failed to analyze image: {0}",
    "error_fetch_failed": "Failed to load image: {0}",
    "error_invalid_request": "Invalid analysis request: {0}",
}


def format_error(key: str, args: Sequence[Any] = ()) -> str:
    template = MESSAGES.get(key)
    if template is None:
        return ": ".join([key, *(str(a) for a in args)])
    return template.format(*args)
