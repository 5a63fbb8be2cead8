"""
The progressively filled metadata record for one analysis request.
"""
from __future__ import annotations

import copy
from typing import Any, TypedDict

from .formats import FormatId, resolve_format


class _GenericInfo(TypedDict):
    mimeType: str
    type: FormatId | None
    fileSize: int


class ImageInfo(_GenericInfo, total=False):
    # Animated containers
    frames: int
    duration: float
    framerate: float
    loopCount: int
    # Logical screen size (GIF)
    width: int
    height: int
    # Decoded tag directory (JPEG/EXIF)
    metadata: dict[str, Any]


def generic_image_info(declared_type: str, data: bytes) -> ImageInfo:
    """Build the first record every analysis emits."""
    return ImageInfo(
        mimeType=declared_type,
        type=resolve_format(declared_type),
        fileSize=len(data),
    )


def snapshot(info: ImageInfo) -> ImageInfo:
    """Detached deep copy; later parser writes never reach an emitted snapshot."""
    return copy.deepcopy(info)
