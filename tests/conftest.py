"""Shared fixtures: synthetic PE images with Rich headers."""

import logging
import struct
from typing import Optional, Sequence, Tuple

import pytest

from richscan.constants import (
    MZ_SIGNATURE,
    PE_SIGNATURE,
    RICH_SIGNATURE,
    DANS_SIGNATURE,
)

DEFAULT_ENTRIES = ((0x00E1520D, 10), (0x00DF520D, 1))


def encode_rich_header(
    entries: Sequence[Tuple[int, int]],
    xor_key: int,
    trailing_dword: Optional[int] = None,
) -> bytes:
    """Encode (comp_id, count) pairs the way the linker does."""
    rich = bytearray()
    rich += struct.pack("<I", DANS_SIGNATURE ^ xor_key)
    # 3 zero padding DWORDs (XOR'd with key)
    for _ in range(3):
        rich += struct.pack("<I", xor_key)
    for comp_id, count in entries:
        rich += struct.pack("<II", comp_id ^ xor_key, count ^ xor_key)
    if trailing_dword is not None:
        rich += struct.pack("<I", trailing_dword ^ xor_key)
    rich += struct.pack("<II", RICH_SIGNATURE, xor_key)
    return bytes(rich)


def build_pe(
    entries: Sequence[Tuple[int, int]] = DEFAULT_ENTRIES,
    xor_key: int = 0x12345678,
    with_rich_header: bool = True,
    reloc_offset: int = 0x40,
    num_relocs: int = 0,
    header_paragraphs: int = 4,
    machine: int = 0x8664,
    trailing_dword: Optional[int] = None,
) -> bytes:
    """
    Create a minimal PE image: DOS header, optional Rich header, PE header.

    The Rich header starts at the paragraph-aligned end of the DOS
    relocation table.
    """
    stub_start = reloc_offset + 4 * num_relocs
    if stub_start % 16:
        stub_start += 16 - stub_start % 16

    image = bytearray(max(64, stub_start))
    struct.pack_into("<H", image, 0, MZ_SIGNATURE)
    struct.pack_into("<H", image, 0x06, num_relocs)
    struct.pack_into("<H", image, 0x08, header_paragraphs)
    struct.pack_into("<H", image, 0x18, reloc_offset)

    if with_rich_header:
        image += encode_rich_header(entries, xor_key, trailing_dword)

    # Align PE header
    image += b"\x00" * ((16 - len(image) % 16) % 16)

    pe_offset = len(image)
    struct.pack_into("<H", image, 0x3C, pe_offset)

    # Minimal COFF header
    pe_header = bytearray(24)
    struct.pack_into("<I", pe_header, 0, PE_SIGNATURE)
    struct.pack_into("<H", pe_header, 4, machine)

    return bytes(image + pe_header)


def pe_offset_of(data: bytes) -> int:
    """PE header offset recorded in a synthetic image."""
    return struct.unpack_from("<H", data, 0x3C)[0]


@pytest.fixture
def make_pe():
    """Factory for synthetic PE images."""
    return build_pe


@pytest.fixture
def pe_path(tmp_path):
    """Write a synthetic PE image to disk and return its path."""
    def _write(data: bytes = None, name: str = "sample.exe") -> str:
        path = tmp_path / name
        path.write_bytes(build_pe() if data is None else data)
        return str(path)
    return _write


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so they never outlive capsys."""
    yield
    logger = logging.getLogger("richscan")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
