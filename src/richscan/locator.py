"""Minimal DOS/PE header validation and Rich header search bounds."""

import logging
from typing import Optional

from .constants import (
    MZ_SIGNATURE,
    PE_SIGNATURE,
    DOS_HEADER_SIZE,
    DOS_NUM_RELOCS_OFFSET,
    DOS_HEADER_PARA_OFFSET,
    DOS_RELOC_OFFSET,
    DOS_PE_OFFSET,
    DOS_MIN_HEADER_PARAGRAPHS,
    PARAGRAPH_SIZE,
    RELOC_ENTRY_SIZE,
    PE_MACHINE_OFFSET,
    UNKNOWN_MACHINE,
    get_machine_type,
)
from .exceptions import (
    TruncatedReadError,
    NotAnExecutableError,
    MalformedDosHeaderError,
    NotAPEImageError,
)
from .models import HeaderBounds, PEInfo
from .reader import ByteReader

logger = logging.getLogger(__name__)


def align_paragraph(offset: int) -> int:
    """Round an offset up to the next 16-byte paragraph boundary."""
    if offset % PARAGRAPH_SIZE:
        offset += PARAGRAPH_SIZE - (offset % PARAGRAPH_SIZE)
    return offset


def dos_stub_start(reloc_table_offset: int, num_relocations: int) -> int:
    """Offset where the DOS stub program begins, past its relocations."""
    return align_paragraph(
        reloc_table_offset + RELOC_ENTRY_SIZE * num_relocations
    )


def locate_header_bounds(reader: ByteReader) -> HeaderBounds:
    """
    Validate the DOS and PE headers and compute the Rich header window.

    Args:
        reader: Reader over the file contents.

    Returns:
        HeaderBounds from the end of the DOS relocations to the PE header.

    Raises:
        TruncatedReadError: If the file ends inside a header.
        NotAnExecutableError: If MZ signature not found.
        MalformedDosHeaderError: If DOS header values are invalid.
        NotAPEImageError: If PE signature not found.
    """
    mz = reader.read_u16_le(0)
    if mz != MZ_SIGNATURE:
        raise NotAnExecutableError(
            f"No MZ header - not an executable. Magic is: 0x{mz:x}"
        )

    # The whole DOS header must be present before any field is trusted
    reader.read_bytes(0, DOS_HEADER_SIZE)

    num_relocs = reader.read_u16_le(DOS_NUM_RELOCS_OFFSET)
    header_para = reader.read_u16_le(DOS_HEADER_PARA_OFFSET)
    if header_para < DOS_MIN_HEADER_PARAGRAPHS:
        raise MalformedDosHeaderError(
            f"Too few paragraphs in DOS header: {header_para}, "
            f"not a PE executable."
        )

    reloc_offset = reader.read_u16_le(DOS_RELOC_OFFSET)
    pe_offset = reader.read_u16_le(DOS_PE_OFFSET)
    if pe_offset < header_para * PARAGRAPH_SIZE:
        raise MalformedDosHeaderError(
            f"PE offset is too small: 0x{pe_offset:x}, not a PE executable."
        )

    pe_sig = reader.read_u32_le(pe_offset)
    if pe_sig != PE_SIGNATURE:
        raise NotAPEImageError(
            f"No PE header signature: 0x{pe_sig:x}, not a PE executable."
        )

    stub_start = dos_stub_start(reloc_offset, num_relocs)
    if stub_start > pe_offset:
        raise MalformedDosHeaderError(
            f"DOS stub start 0x{stub_start:x} lies beyond PE header "
            f"at 0x{pe_offset:x}"
        )

    logger.debug(
        "DOS stub starts at 0x%x, PE header at 0x%x", stub_start, pe_offset
    )
    return HeaderBounds(dos_stub_start=stub_start, pe_header_start=pe_offset)


def read_machine_type(reader: ByteReader, bounds: HeaderBounds) -> int:
    """Read the COFF machine field that follows the PE signature."""
    return reader.read_u16_le(bounds.pe_header_start + PE_MACHINE_OFFSET)


def locate_pe(reader: ByteReader) -> PEInfo:
    """
    Locate header bounds and identify the target machine.

    The machine field is informational: a file that ends right after the
    PE signature still yields bounds, with an unknown machine.
    """
    bounds = locate_header_bounds(reader)
    try:
        machine_type: Optional[int] = read_machine_type(reader, bounds)
    except TruncatedReadError as e:
        logger.debug("No machine field: %s", e)
        machine_type = None
    return PEInfo(
        machine_type=machine_type,
        machine_name=(
            UNKNOWN_MACHINE if machine_type is None
            else get_machine_type(machine_type)
        ),
        bounds=bounds,
    )
