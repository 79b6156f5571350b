"""Per-file Rich header scanning."""

import io
import logging
from typing import BinaryIO, Optional

from .database import DescriptionTable
from .decoder import decode_rich_header
from .exceptions import FileOpenError, RichScanError
from .locator import locate_pe
from .models import ParseResult
from .reader import ByteReader

logger = logging.getLogger(__name__)


def parse_stream(
    stream: BinaryIO,
    db: Optional[DescriptionTable] = None,
    filename: str = "<stream>",
) -> ParseResult:
    """
    Scan an open binary stream for a Rich header.

    Args:
        stream: Seekable binary stream with the PE file contents.
        db: Optional description table for annotation.
        filename: Name recorded in the result.

    Returns:
        ParseResult with parsed data or error information.
    """
    result = ParseResult(filename=filename)
    reader = ByteReader(stream)

    try:
        pe_info = locate_pe(reader)
        result.pe_info = pe_info

        result.rich_header = decode_rich_header(reader, pe_info.bounds, db)
        result.success = True

    except RichScanError as e:
        logger.debug("%s: %s", filename, e)
        result.error = str(e)
    except Exception as e:
        logger.debug("%s: unexpected failure", filename, exc_info=True)
        result.error = f"Unexpected error: {e}"

    return result


def _open_binary(filename: str) -> BinaryIO:
    """Open a file read-only in binary mode."""
    try:
        return open(filename, "rb")
    except OSError as e:
        raise FileOpenError(f"Failed to open file {filename}: {e}") from e


def parse_file(
    filename: str,
    db: Optional[DescriptionTable] = None,
) -> ParseResult:
    """
    Scan a PE file for a Rich header.

    Args:
        filename: Path to PE file.
        db: Optional description table for annotation.

    Returns:
        ParseResult with parsed data or error information.
    """
    try:
        f = _open_binary(filename)
    except FileOpenError as e:
        return ParseResult(filename=filename, opened=False, error=str(e))

    with f:
        return parse_stream(f, db, filename)


def parse_bytes(
    data: bytes,
    db: Optional[DescriptionTable] = None,
    filename: str = "<bytes>",
) -> ParseResult:
    """
    Scan raw bytes for a Rich header.

    Args:
        data: PE file contents as bytes.
        db: Optional description table for annotation.
        filename: Optional filename for result.

    Returns:
        ParseResult with parsed data or error information.
    """
    return parse_stream(io.BytesIO(data), db, filename)
