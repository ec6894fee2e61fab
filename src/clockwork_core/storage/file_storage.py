"""File-backed storage reading Clockwork's ``storage/clockwork`` directory."""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..models import ClockworkRequest, IndexEntry
from .index_parser import parse_index
from .reader import read_request, read_requests


class FileStorage:
    """Storage implementation over a Clockwork file storage directory."""

    def __init__(self, storage_path: Union[str, Path]):
        self.storage_path = Path(storage_path)

    def find(self, request_id: str) -> Optional[ClockworkRequest]:
        return read_request(self.storage_path, request_id)

    def find_many(self, request_ids: Sequence[str]) -> List[ClockworkRequest]:
        return read_requests(self.storage_path, request_ids)

    def latest(self) -> Optional[ClockworkRequest]:
        entries = self.list()
        if not entries:
            return None
        return self.find(entries[0].id)

    def list(self) -> List[IndexEntry]:
        return parse_index(self.storage_path)

    def __repr__(self) -> str:
        return f"FileStorage({str(self.storage_path)!r})"
