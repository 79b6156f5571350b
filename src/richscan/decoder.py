"""Rich header search, XOR key recovery and entry decoding."""

import logging
import struct
from dataclasses import replace
from typing import Iterable, List, Mapping, Optional, Tuple

from .constants import (
    RICH_SIGNATURE,
    DANS_SIGNATURE,
    DANS_BLOCK_SIZE,
    RICH_TRAILER_SIZE,
    RICH_ENTRY_SIZE,
)
from .database import lookup_description
from .exceptions import (
    RichSignatureNotFoundError,
    DansTokenNotFoundError,
    RichHeaderOverrunsPEHeaderError,
)
from .models import HeaderBounds, RichEntry, RichHeader, RichHeaderLocation
from .reader import ByteReader

logger = logging.getLogger(__name__)


def find_dword(
    window: bytes, target: int, key: int = 0, limit: Optional[int] = None
) -> Optional[int]:
    """
    Find the first 4-byte aligned dword in a window matching a value.

    Each candidate is XORed with ``key`` before comparison. Candidate
    offsets run from 0 up to (not including) ``limit``, which defaults
    to the last offset with a full dword in the window.

    Returns:
        Offset relative to the window start, or None.
    """
    last = len(window) - 3
    if limit is None or limit > last:
        limit = last
    return next(
        (
            pos
            for pos in range(0, limit, 4)
            if struct.unpack_from("<I", window, pos)[0] ^ key == target
        ),
        None,
    )


def find_rich_signature(window: bytes, limit: Optional[int] = None) -> Optional[int]:
    """Find the plain-text "Rich" signature."""
    return find_dword(window, RICH_SIGNATURE, limit=limit)


def find_dans_token(
    window: bytes, key: int, limit: Optional[int] = None
) -> Optional[int]:
    """Find the "DanS" token, stored XORed with the key."""
    return find_dword(window, DANS_SIGNATURE, key=key, limit=limit)


def decode_entries(window: bytes, key: int) -> List[RichEntry]:
    """
    Decode XOR-obfuscated (@comp.id, count) pairs.

    Args:
        window: Bytes between the DanS block and the "Rich" signature.
        key: XOR key.

    Returns:
        Entries in file order. A trailing partial pair is dropped.
    """
    entries: List[RichEntry] = []
    for pos in range(0, len(window) - RICH_ENTRY_SIZE + 1, RICH_ENTRY_SIZE):
        ver_raw, count_raw = struct.unpack_from("<II", window, pos)
        ver = ver_raw ^ key
        entries.append(RichEntry(
            comp_id=ver >> 16,
            build_version=ver & 0xFFFF,
            use_count=count_raw ^ key,
        ))
    return entries


def annotate_entries(
    entries: Iterable[RichEntry], descriptions: Optional[Mapping[int, str]]
) -> List[RichEntry]:
    """Attach descriptions looked up by full @comp.id value."""
    if not descriptions:
        return list(entries)
    annotated = []
    for entry in entries:
        description = lookup_description(descriptions, entry.ver_dword)
        if description is not None:
            entry = replace(entry, description=description)
        annotated.append(entry)
    return annotated


def read_search_window(reader: ByteReader, bounds: HeaderBounds) -> bytes:
    """Read from the DOS stub start through the PE signature."""
    return reader.read_bytes(
        bounds.dos_stub_start,
        bounds.pe_header_start - bounds.dos_stub_start + 4,
    )


def locate_rich_header(
    reader: ByteReader, bounds: HeaderBounds
) -> RichHeaderLocation:
    """
    Find the Rich header markers and XOR key.

    Args:
        reader: Reader over the file contents.
        bounds: Window computed by the PE locator.

    Returns:
        RichHeaderLocation with absolute file offsets.

    Raises:
        RichSignatureNotFoundError: If "Rich" signature not found.
        DansTokenNotFoundError: If DanS token not found.
        RichHeaderOverrunsPEHeaderError: If trailer runs into PE header.
    """
    start = bounds.dos_stub_start
    limit = bounds.pe_header_start - start
    window = read_search_window(reader, bounds)

    rich_pos = find_rich_signature(window, limit)
    if rich_pos is None:
        raise RichSignatureNotFoundError(
            f"Rich header not found between 0x{start:x} "
            f"and 0x{bounds.pe_header_start:x}."
        )
    rich_offset = start + rich_pos

    # XOR key is immediately after "Rich"
    key = reader.read_u32_le(rich_offset + 4)
    logger.debug("Rich signature at 0x%x, key 0x%08x", rich_offset, key)

    # DanS always precedes the signature it pairs with
    dans_pos = find_dans_token(window, key, rich_pos)
    if dans_pos is None:
        raise DansTokenNotFoundError(
            f"Rich header's DanS token not found (key 0x{key:08x})."
        )
    dans_offset = start + dans_pos

    end_offset = rich_offset + RICH_TRAILER_SIZE
    if end_offset > bounds.pe_header_start:
        raise RichHeaderOverrunsPEHeaderError(
            f"Calculated end offset runs into PE header: 0x{end_offset:x}"
        )

    logger.debug("DanS token at 0x%x, end offset 0x%x", dans_offset, end_offset)
    return RichHeaderLocation(
        dans_offset=dans_offset,
        rich_sig_offset=rich_offset,
        key=key,
    )


def entry_span(location: RichHeaderLocation) -> Tuple[int, int]:
    """File offsets [start, end) of the encoded entry table."""
    return location.dans_offset + DANS_BLOCK_SIZE, location.rich_sig_offset


def decode_rich_header(
    reader: ByteReader,
    bounds: HeaderBounds,
    descriptions: Optional[Mapping[int, str]] = None,
) -> RichHeader:
    """
    Locate and decode the Rich header.

    Args:
        reader: Reader over the file contents.
        bounds: Window computed by the PE locator.
        descriptions: Optional description table for annotation.

    Returns:
        RichHeader with decoded entries.
    """
    location = locate_rich_header(reader, bounds)
    start, end = entry_span(location)
    window = reader.read_bytes(start, end - start) if end > start else b""
    entries = annotate_entries(
        decode_entries(window, location.key), descriptions
    )
    logger.debug("Decoded %d Rich header entries", len(entries))
    return RichHeader(location=location, entries=tuple(entries))
