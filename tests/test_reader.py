"""Tests for reader module."""

import io

import pytest

from richscan.reader import ByteReader
from richscan.exceptions import TruncatedReadError


class TestByteReader:
    """Tests for ByteReader."""

    def test_read_u16(self):
        """Test 16-bit little-endian reading."""
        reader = ByteReader.from_bytes(b"\x4d\x5a")  # MZ signature
        assert reader.read_u16_le(0) == 0x5A4D

    def test_read_u16_offset(self):
        """Test reading at offset."""
        reader = ByteReader.from_bytes(b"\x00\x00\x34\x12")
        assert reader.read_u16_le(2) == 0x1234

    def test_read_u32(self):
        """Test 32-bit little-endian reading."""
        reader = ByteReader.from_bytes(b"\x50\x45\x00\x00")  # PE signature
        assert reader.read_u32_le(0) == 0x4550

    def test_read_u32_unaligned(self):
        """Test reading at an unaligned offset."""
        reader = ByteReader.from_bytes(b"\x00\x78\x56\x34\x12")
        assert reader.read_u32_le(1) == 0x12345678

    def test_reads_seek_explicitly(self):
        """Test that each read ignores the previous cursor position."""
        stream = io.BytesIO(b"\x01\x00\x02\x00")
        reader = ByteReader(stream)

        assert reader.read_u16_le(2) == 2
        stream.seek(1)
        assert reader.read_u16_le(0) == 1
        assert reader.read_u16_le(0) == 1

    def test_truncated_u32(self):
        """Test error when fewer than 4 bytes remain."""
        reader = ByteReader.from_bytes(b"\x01\x02\x03\x04\x05")

        with pytest.raises(TruncatedReadError) as exc_info:
            reader.read_u32_le(2)

        err = exc_info.value
        assert err.offset == 2
        assert err.size == 4
        assert err.available == 3
        assert "0x2" in str(err)

    def test_read_past_end(self):
        """Test reading entirely beyond the end of the stream."""
        reader = ByteReader.from_bytes(b"MZ")
        with pytest.raises(TruncatedReadError):
            reader.read_u16_le(0x3C)

    def test_read_bytes_exact(self):
        """Test reading an exact byte range."""
        reader = ByteReader.from_bytes(b"abcdef")
        assert reader.read_bytes(1, 3) == b"bcd"

    def test_negative_offset(self):
        """Test that negative offsets are rejected."""
        reader = ByteReader.from_bytes(b"abcd")
        with pytest.raises(ValueError):
            reader.read_bytes(-1, 2)
