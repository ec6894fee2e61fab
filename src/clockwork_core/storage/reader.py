"""Readers for per-request Clockwork metadata files (``<id>.json``)."""

import json
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..models import ClockworkRequest

PathLike = Union[str, Path]


def request_file(storage_path: PathLike, request_id: str) -> Path:
    return Path(storage_path) / f"{request_id}.json"


def request_exists(storage_path: PathLike, request_id: str) -> bool:
    return request_file(storage_path, request_id).exists()


def read_request(storage_path: PathLike, request_id: str) -> Optional[ClockworkRequest]:
    """Read and validate a request file.

    Returns None when the file does not exist. Unreadable or corrupt files
    raise (``OSError``, ``json.JSONDecodeError`` or pydantic's
    ``ValidationError``) so the caller can decide what to report.
    """
    path = request_file(storage_path, request_id)
    if not path.exists():
        return None

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not data.get("id"):
        data["id"] = request_id
    return ClockworkRequest.model_validate(data)


def read_requests(storage_path: PathLike, request_ids: Sequence[str]) -> List[ClockworkRequest]:
    """Read several request files, skipping the ones that are missing."""
    requests = []
    for request_id in request_ids:
        request = read_request(storage_path, request_id)
        if request is not None:
            requests.append(request)
    return requests
