"""Compiler ID description table loading."""

import importlib.resources
import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)

# Read-only mapping of @comp.id values to descriptions
DescriptionTable = Mapping[int, str]

BUNDLED_PACKAGE = "richscan.data"
BUNDLED_FILENAME = "comp_id.txt"

# "<8 hex digits> <description>"
_ID_WIDTH = 8
_MIN_LINE_LENGTH = _ID_WIDTH + 1


def parse_descriptions(lines: Iterable[str]) -> DescriptionTable:
    """
    Parse description lines into a table.

    Lines starting with ``#`` or shorter than 9 characters are skipped.
    When an id repeats, both lines are logged as a warning and the first
    description is kept.

    Args:
        lines: Lines of a comp_id.txt style resource.

    Returns:
        Read-only mapping from @comp.id to description.
    """
    descriptions: Dict[int, str] = {}

    for line in lines:
        line = line.rstrip("\n\r")

        if len(line) < _MIN_LINE_LENGTH or line.startswith("#"):
            continue

        try:
            comp_id = int(line[:_ID_WIDTH], 16)
        except ValueError:
            logger.debug("Skipping malformed description line: %r", line)
            continue
        desc = line[_MIN_LINE_LENGTH:]

        if comp_id in descriptions:
            logger.warning(
                "Duplicate comp.id:\n%08x %s\n%08x %s",
                comp_id, descriptions[comp_id], comp_id, desc,
            )
            continue
        descriptions[comp_id] = desc

    return MappingProxyType(descriptions)


def load_database(path: Optional[str] = None) -> DescriptionTable:
    """
    Load compiler ID description table from file.

    Args:
        path: Path to comp_id.txt file. If None, uses bundled table.

    Returns:
        Read-only mapping of @comp.id values to descriptions. Empty if
        the file cannot be read.
    """
    if path is None:
        files = importlib.resources.files(BUNDLED_PACKAGE)
        content = (files / BUNDLED_FILENAME).read_text(encoding="utf-8")
        return parse_descriptions(content.splitlines())

    try:
        # Undecodable bytes are kept as U+FFFD rather than failing the load
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return parse_descriptions(f)
    except OSError as e:
        logger.warning("Cannot read description table %s: %s", path, e)
        return MappingProxyType({})


def lookup_description(db: DescriptionTable, comp_id: int) -> Optional[str]:
    """Description for a full @comp.id value, or None."""
    return db.get(comp_id)
