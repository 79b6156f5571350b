"""Random-access little-endian reads over a binary stream."""

import io
import struct
from typing import BinaryIO

from .exceptions import TruncatedReadError


class ByteReader:
    """
    Fixed-width little-endian reads at absolute offsets.

    Every read seeks before reading, so the stream cursor position
    between calls is meaningless to callers.
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream

    @classmethod
    def from_bytes(cls, data: bytes) -> "ByteReader":
        """Create a reader over an in-memory buffer."""
        return cls(io.BytesIO(data))

    def read_bytes(self, offset: int, size: int) -> bytes:
        """
        Read exactly ``size`` bytes starting at ``offset``.

        Raises:
            TruncatedReadError: If the stream ends before ``size`` bytes.
        """
        if offset < 0:
            raise ValueError(f"Negative offset: {offset}")
        self._stream.seek(offset)
        data = self._stream.read(size)
        if len(data) < size:
            raise TruncatedReadError(offset, size, len(data))
        return data

    def read_u16_le(self, offset: int) -> int:
        """Read unsigned 16-bit little-endian value."""
        return struct.unpack("<H", self.read_bytes(offset, 2))[0]

    def read_u32_le(self, offset: int) -> int:
        """Read unsigned 32-bit little-endian value."""
        return struct.unpack("<I", self.read_bytes(offset, 4))[0]
