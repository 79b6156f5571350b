"""
richscan - Locate and decode Rich headers in Windows PE executables.

The Rich header is metadata embedded by Microsoft's linker between the
DOS stub and the PE header. It lists the tools (@comp.id records) that
produced the objects linked into the image, XOR-obfuscated with a
checksum key.
"""

from .parser import parse_file, parse_bytes, parse_stream
from .reader import ByteReader
from .locator import locate_header_bounds, locate_pe
from .decoder import (
    find_rich_signature,
    find_dans_token,
    decode_entries,
    annotate_entries,
    locate_rich_header,
    decode_rich_header,
)
from .database import (
    load_database,
    parse_descriptions,
    lookup_description,
    DescriptionTable,
)
from .models import (
    RichEntry,
    HeaderBounds,
    RichHeaderLocation,
    RichHeader,
    PEInfo,
    ParseResult,
)
from .constants import (
    MZ_SIGNATURE,
    PE_SIGNATURE,
    RICH_SIGNATURE,
    DANS_SIGNATURE,
    MACHINE_TYPES,
    get_machine_type,
)
from .exceptions import (
    RichScanError,
    FileOpenError,
    TruncatedReadError,
    NotAnExecutableError,
    MalformedDosHeaderError,
    NotAPEImageError,
    RichSignatureNotFoundError,
    DansTokenNotFoundError,
    RichHeaderOverrunsPEHeaderError,
)

__version__ = "1.0.0"

__all__ = [
    # Main API
    "parse_file",
    "parse_bytes",
    "parse_stream",
    "load_database",
    "parse_descriptions",
    "lookup_description",
    # Components
    "ByteReader",
    "locate_header_bounds",
    "locate_pe",
    "find_rich_signature",
    "find_dans_token",
    "decode_entries",
    "annotate_entries",
    "locate_rich_header",
    "decode_rich_header",
    # Models
    "RichEntry",
    "HeaderBounds",
    "RichHeaderLocation",
    "RichHeader",
    "PEInfo",
    "ParseResult",
    "DescriptionTable",
    # Constants
    "MZ_SIGNATURE",
    "PE_SIGNATURE",
    "RICH_SIGNATURE",
    "DANS_SIGNATURE",
    "MACHINE_TYPES",
    "get_machine_type",
    # Exceptions
    "RichScanError",
    "FileOpenError",
    "TruncatedReadError",
    "NotAnExecutableError",
    "MalformedDosHeaderError",
    "NotAPEImageError",
    "RichSignatureNotFoundError",
    "DansTokenNotFoundError",
    "RichHeaderOverrunsPEHeaderError",
    # Version
    "__version__",
]
