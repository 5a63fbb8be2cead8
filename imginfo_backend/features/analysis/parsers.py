"""Static registry of container parsers, keyed by format."""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Protocol

from .formats import FormatId
from .gif_parser import GifParser
from .info import ImageInfo
from .jpeg_parser import JpegExifParser


class ContainerParser(Protocol):
    def parse(self, data: bytes, info: ImageInfo) -> Iterator[ImageInfo]:
        """
        Refine `info` in place, yielding it at each point of increased
        completeness. Failures propagate as exceptions.
        """
        ...


def default_parsers() -> Mapping[FormatId, ContainerParser]:
    return {
        FormatId.GIF: GifParser(),
        FormatId.JPEG: JpegExifParser(),
    }
