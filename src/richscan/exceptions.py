"""Custom exceptions for richscan."""


class RichScanError(Exception):
    """Base exception for richscan errors."""
    pass


class FileOpenError(RichScanError):
    """Failed to open file."""
    pass


class TruncatedReadError(RichScanError):
    """Fewer bytes remain in the stream than a read asked for."""

    def __init__(self, offset: int, size: int, available: int):
        self.offset = offset
        self.size = size
        self.available = available
        super().__init__(
            f"Truncated read at offset 0x{offset:x}: "
            f"wanted {size} bytes, got {available}"
        )


class NotAnExecutableError(RichScanError):
    """File does not have MZ (DOS) header signature."""
    pass


class MalformedDosHeaderError(RichScanError):
    """DOS header has values that rule out a PE image."""
    pass


class NotAPEImageError(RichScanError):
    """File does not have a valid PE header signature."""
    pass


class RichSignatureNotFoundError(RichScanError):
    """Rich signature not found between DOS stub and PE header."""
    pass


class DansTokenNotFoundError(RichScanError):
    """Rich header's DanS token not found."""
    pass


class RichHeaderOverrunsPEHeaderError(RichScanError):
    """Rich header trailer extends into the PE header."""
    pass
