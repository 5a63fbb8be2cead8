"""GIF container parser: animation timing from Graphics Control Extensions."""
from __future__ import annotations

from collections.abc import Iterator

from ...shared import get_logger
from .byte_stream import ByteStreamReader
from .gif_blocks import ApplicationBlock, GceBlock, GifBlockHandler, GifHeader, parse_gif
from .info import ImageInfo

logger = get_logger(__name__)


class _TimingHandler(GifBlockHandler):
    def __init__(self, info: ImageInfo) -> None:
        self.info = info
        self.finished = False

        self.info["frames"] = 0
        self.info["framerate"] = 0.0
        self.info["duration"] = 0.0

    def header(self, block: GifHeader) -> None:
        self.info["width"] = block.width
        self.info["height"] = block.height

    def gce(self, block: GceBlock) -> None:
        self.info["frames"] += 1
        self.info["duration"] += block.delay_time / 100

    def app(self, block: ApplicationBlock) -> None:
        if block.loop_count is not None:
            self.info["loopCount"] = block.loop_count

    def eof(self) -> None:
        if self.info["duration"] > 0:
            self.info["framerate"] = self.info["frames"] / self.info["duration"]
        else:
            del self.info["framerate"]
            del self.info["duration"]
        self.finished = True


class GifParser:
    """Counts frames and sums delays; pixel data is never decoded."""

    def parse(self, data: bytes, info: ImageInfo) -> Iterator[ImageInfo]:
        handler = _TimingHandler(info)
        parse_gif(ByteStreamReader(data), handler)
        if handler.finished:
            logger.debug("GIF: %s frame(s), duration=%s", info["frames"], info.get("duration"))
            yield info
