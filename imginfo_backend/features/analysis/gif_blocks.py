"""
Streaming GIF block decoder.

Walks the block structure of a GIF87a/GIF89a stream and reports each block
to a handler. Image data sub-blocks are skipped, never LZW-decoded.
"""
from __future__ import annotations

from dataclasses import dataclass

from .byte_stream import ByteStreamReader
from .errors import GifFormatError

EXTENSION_INTRODUCER = 0x21
IMAGE_SEPARATOR = 0x2C
TRAILER = 0x3B

LABEL_GRAPHICS_CONTROL = 0xF9
LABEL_PLAIN_TEXT = 0x01
LABEL_COMMENT = 0xFE
LABEL_APPLICATION = 0xFF


@dataclass(frozen=True)
class GifHeader:
    version: str
    width: int
    height: int
    global_color_table_size: int
    background_color: int
    pixel_aspect_ratio: int


@dataclass(frozen=True)
class GceBlock:
    """Graphics Control Extension. `delay_time` is in hundredths of a second."""

    delay_time: int
    disposal_method: int
    user_input: bool
    transparency_index: int | None


@dataclass(frozen=True)
class ApplicationBlock:
    identifier: str
    auth_code: str
    loop_count: int | None = None


@dataclass(frozen=True)
class ImageDescriptor:
    left: int
    top: int
    width: int
    height: int
    interlaced: bool
    local_color_table_size: int


class GifBlockHandler:
    """Receives decoded blocks. Every hook is optional."""

    def header(self, block: GifHeader) -> None:
        pass

    def gce(self, block: GceBlock) -> None:
        pass

    def app(self, block: ApplicationBlock) -> None:
        pass

    def comment(self, text: str) -> None:
        pass

    def plain_text(self) -> None:
        pass

    def image(self, block: ImageDescriptor) -> None:
        pass

    def eof(self) -> None:
        pass


def _color_table_bytes(packed: int) -> int:
    return 3 * (1 << ((packed & 0x07) + 1))


def _skip_sub_blocks(stream: ByteStreamReader) -> None:
    while True:
        size = stream.read_byte()
        if size == 0:
            return
        stream.skip(size)


def _read_sub_blocks(stream: ByteStreamReader) -> bytes:
    chunks = []
    while True:
        size = stream.read_byte()
        if size == 0:
            return b"".join(chunks)
        chunks.append(bytes(stream.read_bytes(size)))


def _parse_header(stream: ByteStreamReader, handler: GifBlockHandler) -> None:
    signature = stream.read(3)
    version = stream.read(3)
    if signature != "GIF":
        raise GifFormatError("Not a GIF file.")
    width = stream.read_unsigned()
    height = stream.read_unsigned()
    packed = stream.read_byte()
    background = stream.read_byte()
    aspect = stream.read_byte()
    gct_size = 0
    if packed & 0x80:
        gct_size = _color_table_bytes(packed) // 3
        stream.skip(gct_size * 3)
    handler.header(
        GifHeader(
            version=version,
            width=width,
            height=height,
            global_color_table_size=gct_size,
            background_color=background,
            pixel_aspect_ratio=aspect,
        )
    )


def _parse_gce(stream: ByteStreamReader, handler: GifBlockHandler) -> None:
    stream.read_byte()  # block size, always 4
    packed = stream.read_byte()
    delay_time = stream.read_unsigned()
    transparency_index = stream.read_byte()
    stream.read_byte()  # terminator
    handler.gce(
        GceBlock(
            delay_time=delay_time,
            disposal_method=(packed >> 2) & 0x07,
            user_input=bool(packed & 0x02),
            transparency_index=transparency_index if packed & 0x01 else None,
        )
    )


def _parse_application(stream: ByteStreamReader, handler: GifBlockHandler) -> None:
    block_size = stream.read_byte()
    identifier = stream.read(8)
    auth_code = stream.read(3)
    stream.skip(max(0, block_size - 11))
    loop_count = None
    data = _read_sub_blocks(stream)
    # NETSCAPE2.0 / ANIMEXTS1.0 looping sub-block: id 1, then a uint16 count
    if identifier in ("NETSCAPE", "ANIMEXTS") and len(data) >= 3 and data[0] == 1:
        loop_count = data[1] | (data[2] << 8)
    handler.app(ApplicationBlock(identifier=identifier, auth_code=auth_code, loop_count=loop_count))


def _parse_extension(stream: ByteStreamReader, handler: GifBlockHandler) -> None:
    label = stream.read_byte()
    if label == LABEL_GRAPHICS_CONTROL:
        _parse_gce(stream, handler)
    elif label == LABEL_APPLICATION:
        _parse_application(stream, handler)
    elif label == LABEL_COMMENT:
        handler.comment(_read_sub_blocks(stream).decode("latin-1"))
    elif label == LABEL_PLAIN_TEXT:
        stream.skip(stream.read_byte())
        _skip_sub_blocks(stream)
        handler.plain_text()
    else:
        _skip_sub_blocks(stream)


def _parse_image(stream: ByteStreamReader, handler: GifBlockHandler) -> None:
    left = stream.read_unsigned()
    top = stream.read_unsigned()
    width = stream.read_unsigned()
    height = stream.read_unsigned()
    packed = stream.read_byte()
    lct_size = 0
    if packed & 0x80:
        lct_size = _color_table_bytes(packed) // 3
        stream.skip(lct_size * 3)
    stream.read_byte()  # LZW minimum code size
    _skip_sub_blocks(stream)
    handler.image(
        ImageDescriptor(
            left=left,
            top=top,
            width=width,
            height=height,
            interlaced=bool(packed & 0x40),
            local_color_table_size=lct_size,
        )
    )


def parse_gif(stream: ByteStreamReader, handler: GifBlockHandler) -> None:
    """
    Decode the block stream until the trailer, notifying `handler`.

    Raises:
        GifFormatError: bad signature or unknown block introducer.
        EndOfStream: the stream ends before the trailer.
    """
    _parse_header(stream, handler)
    while True:
        introducer = stream.read_byte()
        if introducer == EXTENSION_INTRODUCER:
            _parse_extension(stream, handler)
        elif introducer == IMAGE_SEPARATOR:
            _parse_image(stream, handler)
        elif introducer == TRAILER:
            handler.eof()
            return
        else:
            raise GifFormatError(f"Unknown block: 0x{introducer:02x}")
