"""Storage protocol consumed by the analysis core."""

from typing import List, Optional, Protocol, Sequence, runtime_checkable

from ..models import ClockworkRequest, IndexEntry


@runtime_checkable
class Storage(Protocol):
    """Read-only access to captured Clockwork requests.

    Implementations must return ``list()`` ordered most recent first, and
    ``find_many`` must silently skip ids that do not exist.
    """

    def find(self, request_id: str) -> Optional[ClockworkRequest]:
        ...

    def find_many(self, request_ids: Sequence[str]) -> List[ClockworkRequest]:
        ...

    def latest(self) -> Optional[ClockworkRequest]:
        ...

    def list(self) -> List[IndexEntry]:
        ...
