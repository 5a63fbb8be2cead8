import io
import struct
import sys
from pathlib import Path

import pytest
from PIL import Image

REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from imginfo_backend.features.analysis import FetchedResource, FetchFailed  # noqa: E402


def build_gif(
    delays: list[int] | None = None,
    *,
    width: int = 4,
    height: int = 4,
    loop: int | None = None,
    comment: bytes | None = None,
) -> bytes:
    """Minimal GIF89a: one GCE + image per delay, or a single static image."""
    out = bytearray(b"GIF89a")
    out += struct.pack("<HH", width, height)
    out += bytes([0x80, 0x00, 0x00])  # 2-entry global color table
    out += b"\x00\x00\x00\xff\xff\xff"
    if loop is not None:
        out += b"\x21\xff\x0bNETSCAPE2.0\x03\x01" + struct.pack("<H", loop) + b"\x00"
    if comment is not None:
        out += b"\x21\xfe" + bytes([len(comment)]) + comment + b"\x00"

    def image() -> bytes:
        return (
            b"\x2c"
            + struct.pack("<HHHH", 0, 0, width, height)
            + b"\x00"  # no local color table
            + b"\x02"  # LZW minimum code size
            + b"\x02\x4c\x01"  # one 2-byte data sub-block
            + b"\x00"
        )

    if delays:
        for delay in delays:
            out += b"\x21\xf9\x04\x00" + struct.pack("<H", delay) + b"\x00\x00"
            out += image()
    else:
        out += image()
    out += b"\x3b"
    return bytes(out)


def build_jpeg(
    tags: dict[int, object] | None = None,
    ifds: dict[int, dict[int, object]] | None = None,
) -> bytes:
    """Encode a tiny JPEG; `ifds` maps a sub-directory pointer (Exif, GPS) to its entries."""
    buf = io.BytesIO()
    img = Image.new("RGB", (8, 8), "white")
    if tags or ifds:
        exif = Image.Exif()
        for tag_id, value in (tags or {}).items():
            exif[tag_id] = value
        for pointer, entries in (ifds or {}).items():
            exif[pointer] = dict(entries)
        img.save(buf, format="JPEG", exif=exif)
    else:
        img.save(buf, format="JPEG")
    return buf.getvalue()


class FakeFetcher:
    """Serves canned resources and records every release."""

    def __init__(self, resources: dict[str, FetchedResource | Exception] | None = None) -> None:
        self.resources = dict(resources or {})
        self.fetched: list[str] = []
        self.released: list[str] = []

    async def fetch(self, locator: str) -> FetchedResource:
        self.fetched.append(locator)
        resource = self.resources.get(locator)
        if resource is None:
            raise FetchFailed("404 Not Found")
        if isinstance(resource, Exception):
            raise resource
        return resource

    def release(self, locator: str) -> None:
        self.released.append(locator)


@pytest.fixture
def gif_bytes():
    return build_gif


@pytest.fixture
def jpeg_bytes():
    return build_jpeg


@pytest.fixture
def make_fetcher():
    return FakeFetcher
