# Copyright (c) 2026 Livecolor
# SPDX-License-Identifier: MIT

"""
Bounds-checked big-endian cursor over a byte buffer.

Every read either returns exactly the requested bytes or raises
TruncatedDataError, so malformed lengths and short input surface
uniformly instead of as silent short slices.
"""

from __future__ import annotations

from livecolor.errors import TruncatedDataError


class ByteReader:
    """Sequential reader over an immutable byte buffer."""

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes | bytearray | memoryview, offset: int = 0) -> None:
        self._data = memoryview(bytes(data))
        if not 0 <= offset <= len(self._data):
            raise TruncatedDataError(
                f"Offset {offset} outside buffer of {len(self._data)} bytes"
            )
        self._pos = offset

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def read(self, n: int) -> bytes:
        """Read exactly n bytes."""
        if n < 0:
            raise TruncatedDataError(f"Negative read length {n}")
        if n > self.remaining:
            raise TruncatedDataError(
                f"Need {n} bytes at offset {self._pos}, "
                f"only {self.remaining} remain"
            )
        chunk = self._data[self._pos:self._pos + n].tobytes()
        self._pos += n
        return chunk

    def skip(self, n: int) -> None:
        """Advance n bytes without copying."""
        if n < 0 or n > self.remaining:
            raise TruncatedDataError(
                f"Cannot skip {n} bytes at offset {self._pos}, "
                f"only {self.remaining} remain"
            )
        self._pos += n

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_u32(self) -> int:
        """Big-endian unsigned 32-bit integer."""
        return int.from_bytes(self.read(4), "big")

    def read_tag(self) -> str:
        """Four-byte ASCII tag (PNG chunk type)."""
        return self.read(4).decode("latin-1")
