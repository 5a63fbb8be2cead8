"""
Declared content type -> canonical image format.
"""
from __future__ import annotations

from enum import Enum
from typing import Final


class FormatId(str, Enum):
    BMP = "BMP"
    GIF = "GIF"
    JPEG = "JPEG"
    ICO = "ICO"
    PGM = "PGM"
    PNG = "PNG"
    SVG = "SVG"
    TIFF = "TIFF"
    WEBP = "WebP"
    XBM = "XBM"


MIME_TYPES: Final[dict[FormatId, frozenset[str]]] = {
    FormatId.BMP: frozenset({"image/bmp", "image/x-windows-bmp"}),
    FormatId.GIF: frozenset({"image/gif"}),
    FormatId.JPEG: frozenset({"image/jpeg", "image/pjpeg"}),
    FormatId.ICO: frozenset({"image/x-icon"}),
    FormatId.PGM: frozenset({"image/x-portable-graymap"}),
    FormatId.PNG: frozenset({"image/png"}),
    FormatId.SVG: frozenset({"image/svg+xml", "image/svg-xml"}),
    FormatId.TIFF: frozenset({"image/tiff", "image/x-tiff"}),
    FormatId.WEBP: frozenset({"image/webp"}),
    FormatId.XBM: frozenset({"image/x-xbitmap"}),
}


def normalize_content_type(declared_type: str | None) -> str:
    """Lower-case a Content-Type value and drop its parameters."""
    if not declared_type:
        return ""
    return str(declared_type).split(";", 1)[0].strip().lower()


def resolve_format(declared_type: str | None) -> FormatId | None:
    """
    Map a declared content type to its `FormatId`.

    Returns None for unrecognized types, which disables container parsing.
    """
    normalized = normalize_content_type(declared_type)
    if not normalized:
        return None
    for format_id, mime_types in MIME_TYPES.items():
        if normalized in mime_types:
            return format_id
    return None
