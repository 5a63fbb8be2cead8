"""Sequential reader over an immutable byte buffer."""
from __future__ import annotations

from .errors import EndOfStream


class ByteStreamReader:
    """
    Position-tracked reader used by the container parsers.

    `skip()` never validates bounds; a cursor moved past the end only fails
    on the next read. GIF streams whose final sub-block is shorter than its
    declared length rely on this.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return max(0, len(self._data) - self._pos)

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def read_byte(self) -> int:
        if self._pos >= len(self._data):
            raise EndOfStream()
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read_bytes(self, length: int) -> list[int]:
        end = self._pos + length
        if length < 0 or end > len(self._data):
            raise EndOfStream()
        chunk = self._data[self._pos:end]
        self._pos = end
        return list(chunk)

    def read_unsigned(self) -> int:
        """Read a 16-bit little-endian unsigned integer."""
        lo, hi = self.read_bytes(2)
        return (hi << 8) + lo

    def read(self, length: int) -> str:
        """Read `length` bytes as characters with code point == byte value."""
        return bytes(self.read_bytes(length)).decode("latin-1")

    def skip(self, length: int) -> None:
        self._pos += length
