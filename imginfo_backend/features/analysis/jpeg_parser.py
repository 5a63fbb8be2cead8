"""
JPEG container parser: decodes the embedded EXIF tag directory.

Pillow only reads the JPEG marker segments on open; pixel data stays
untouched because `load()` is never called.
"""
from __future__ import annotations

import io
import math
from collections.abc import Iterator
from typing import Any

from PIL import ExifTags, Image
from PIL.TiffImagePlugin import IFDRational

from ...shared import get_logger
from .errors import AnalysisFailed, NoExifData
from .info import ImageInfo

logger = get_logger(__name__)

# Sub-directory pointers; their entries are flattened into the same mapping.
_IFD_POINTERS = {int(ExifTags.IFD.Exif), int(ExifTags.IFD.GPSInfo), int(ExifTags.IFD.Interop)}

_EXIF_PREFIX = b"Exif\x00\x00"
_TIFF_HEADERS = (b"II*\x00", b"MM\x00*")


def _tag_name(tag_id: int, names: dict[int, str]) -> str:
    return names.get(tag_id) or f"Tag0x{tag_id:04X}"


def _json_value(value: Any) -> Any:
    if isinstance(value, IFDRational):
        as_float = float(value)
        return as_float if math.isfinite(as_float) else None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace").rstrip("\x00")
    if isinstance(value, str):
        return value.rstrip("\x00")
    if isinstance(value, (tuple, list)):
        return [_json_value(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _json_value(v) for k, v in value.items()}
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def load_exif(data: bytes) -> Image.Exif:
    """
    Decode the EXIF tag directory of a JPEG buffer.

    Raises:
        NoExifData: the buffer is a JPEG without an APP1 Exif segment.
        AnalysisFailed: the Exif segment does not hold a TIFF directory.
        PIL.UnidentifiedImageError: the buffer is not a readable JPEG.
    """
    with Image.open(io.BytesIO(data), formats=["JPEG"]) as img:
        raw = img.info.get("exif")
        if not raw:
            raise NoExifData()
        tiff = raw[len(_EXIF_PREFIX):] if raw.startswith(_EXIF_PREFIX) else raw
        # Pillow returns an empty directory for a bad header instead of raising
        if tiff[:4] not in _TIFF_HEADERS:
            raise AnalysisFailed("Invalid Exif data: bad TIFF header")
        return img.getexif()


def exif_tags(exif: Image.Exif) -> dict[str, Any]:
    """Flatten IFD0 and its Exif/GPS sub-directories into `{tag name: value}`."""
    tags: dict[str, Any] = {}
    for tag_id, value in exif.items():
        if tag_id in _IFD_POINTERS:
            continue
        tags[_tag_name(tag_id, ExifTags.TAGS)] = _json_value(value)
    for tag_id, value in exif.get_ifd(ExifTags.IFD.Exif).items():
        if tag_id in _IFD_POINTERS:
            continue
        tags[_tag_name(tag_id, ExifTags.TAGS)] = _json_value(value)
    for tag_id, value in exif.get_ifd(ExifTags.IFD.GPSInfo).items():
        tags[_tag_name(tag_id, ExifTags.GPSTAGS)] = _json_value(value)
    return tags


class JpegExifParser:
    """Adds `metadata` when an EXIF directory is present; silent otherwise."""

    def parse(self, data: bytes, info: ImageInfo) -> Iterator[ImageInfo]:
        try:
            exif = load_exif(data)
        except NoExifData:
            logger.debug("JPEG: no EXIF directory")
            return
        info["metadata"] = exif_tags(exif)
        logger.debug("JPEG: decoded %s EXIF tag(s)", len(info["metadata"]))
        yield info
