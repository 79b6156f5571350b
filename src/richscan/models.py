"""Data models for richscan."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class RichEntry:
    """A single decoded entry from the Rich header."""
    comp_id: int  # Tool identifier (high 16 bits of the decoded value)
    build_version: int  # Build version number (low 16 bits)
    use_count: int  # Number of objects built with this tool
    description: Optional[str] = None  # From the description table

    @property
    def ver_dword(self) -> int:
        """Full @comp.id value (comp_id << 16 | build_version)."""
        return (self.comp_id << 16) | self.build_version


@dataclass(frozen=True)
class HeaderBounds:
    """Byte window between the DOS stub and the PE header."""
    dos_stub_start: int
    pe_header_start: int


@dataclass(frozen=True)
class RichHeaderLocation:
    """Offsets of the Rich header markers and the XOR key."""
    dans_offset: int
    rich_sig_offset: int
    key: int


@dataclass(frozen=True)
class RichHeader:
    """Located and decoded Rich header."""
    location: RichHeaderLocation
    entries: Tuple[RichEntry, ...] = ()


@dataclass(frozen=True)
class PEInfo:
    """Basic PE file information."""
    machine_type: Optional[int]  # None when the file ends after "PE\0\0"
    machine_name: str
    bounds: HeaderBounds


@dataclass
class ParseResult:
    """Complete result of scanning one file."""
    filename: str
    success: bool = False
    opened: bool = True  # False when the file could not be opened
    error: Optional[str] = None
    pe_info: Optional[PEInfo] = None
    rich_header: Optional[RichHeader] = None

    def to_dict(self) -> dict:
        """Convert result to dictionary for JSON serialization."""
        result = {
            "filename": self.filename,
            "success": self.success,
        }
        if self.error:
            result["error"] = self.error
        if self.pe_info:
            bounds = self.pe_info.bounds
            result["pe_info"] = {
                "machine_type": self.pe_info.machine_type,
                "machine_name": self.pe_info.machine_name,
                "pe_offset": bounds.pe_header_start,
                "dos_stub_start": bounds.dos_stub_start,
            }
        if self.rich_header:
            location = self.rich_header.location
            result["rich_header"] = {
                "xor_key": f"0x{location.key:08x}",
                "dans_offset": location.dans_offset,
                "rich_offset": location.rich_sig_offset,
                "entries": [
                    {
                        "comp_id": f"0x{e.ver_dword:08x}",
                        "product_id": e.comp_id,
                        "build_version": e.build_version,
                        "count": e.use_count,
                        "description": e.description,
                    }
                    for e in self.rich_header.entries
                ],
            }
        return result
