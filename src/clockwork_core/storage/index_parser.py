"""Parser for the Clockwork storage index file.

The index holds one tab-separated line per request:

    id, time, method, uri, controller, responseStatus, responseDuration, type

For console commands the fourth column carries the command name instead of
the URI, and method/controller are empty.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..models import IndexEntry

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index"


def _to_int(value: str) -> Optional[int]:
    try:
        return int(value) if value else None
    except ValueError:
        return None


def _to_float(value: str) -> Optional[float]:
    try:
        return float(value) if value else None
    except ValueError:
        return None


def parse_index_line(line: str) -> Optional[IndexEntry]:
    """Parse one index line, returning None when it has no usable id/time."""
    parts = line.rstrip("\r\n").split("\t")
    parts += [""] * (8 - len(parts))

    request_id = parts[0].strip()
    time = _to_float(parts[1])
    if not request_id or time is None:
        return None

    request_type = parts[7] or None
    entry = {
        "id": request_id,
        "time": time,
        "type": request_type,
        "response_status": _to_int(parts[5]),
        "response_duration": _to_float(parts[6]),
    }

    if request_type == "command":
        entry["command_name"] = parts[3] or None
    else:
        entry["method"] = parts[2] or None
        entry["uri"] = parts[3] or None
        entry["controller"] = parts[4] or None

    return IndexEntry(**entry)


def parse_index(storage_path: Union[str, Path]) -> List[IndexEntry]:
    """Read the storage index, most recent entry first.

    A missing index means an empty storage, not an error.
    """
    index_path = Path(storage_path) / INDEX_FILENAME
    if not index_path.exists():
        return []

    entries: List[IndexEntry] = []
    with open(index_path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            entry = parse_index_line(line)
            if entry is None:
                logger.warning("Skipping malformed index line %d in %s", line_no, index_path)
                continue
            entries.append(entry)

    entries.sort(key=lambda e: e.time, reverse=True)
    return entries
