"""Artisan commands, queue jobs and test runs.

Clockwork profiles these as requests with ``type`` set to ``command``,
``queue-job`` or ``test``. The index only carries basic columns, so the
queue/job/test-name/status filters load the full request for the entries
that survive the index-level filters.
"""

from typing import Any, List, Optional

from .config import DEFAULT_PAGE_LIMIT
from .models import ClockworkRequest, IndexEntry
from .requests import filter_time_range, paginate
from .storage import Storage

COMMAND_TYPE = "command"
QUEUE_JOB_TYPE = "queue-job"
TEST_TYPE = "test"

JOB_STATUSES = ("pending", "processing", "completed", "failed")
TEST_STATUSES = ("passed", "failed", "skipped")


def _entries_of_type(
    storage: Storage, type: str, start: Optional[float], end: Optional[float]
) -> List[IndexEntry]:
    entries = [e for e in storage.list() if e.type == type]
    return filter_time_range(entries, start, end)


def _keep_matching(storage: Storage, entries: List[IndexEntry], predicate) -> List[IndexEntry]:
    """Materialise ``entries`` and keep those whose full request satisfies ``predicate``."""
    requests = storage.find_many([e.id for e in entries])
    matched = {request.id for request in requests if predicate(request)}
    return [e for e in entries if e.id in matched]


def _string_field(data: Optional[dict], key: str) -> Optional[str]:
    value: Any = (data or {}).get(key)
    return value if isinstance(value, str) else None


# --- Commands ---

def list_commands(
    storage: Storage,
    name: Optional[str] = None,
    start: Optional[float] = None,
    end: Optional[float] = None,
    limit: int = DEFAULT_PAGE_LIMIT,
    offset: int = 0,
) -> List[IndexEntry]:
    entries = [e for e in storage.list() if e.type == COMMAND_TYPE]
    if name:
        entries = [e for e in entries if e.command_name and name in e.command_name]
    entries = filter_time_range(entries, start, end)
    return paginate(entries, limit, offset)


def get_command(storage: Storage, request_id: str) -> Optional[ClockworkRequest]:
    return storage.find(request_id)


# --- Queue jobs ---

def queue_name(request: ClockworkRequest) -> Optional[str]:
    if request.command_name and "queue:" in request.command_name:
        return request.command_name
    return _string_field(request.request_data, "queue") or request.command_name


def job_name(request: ClockworkRequest) -> Optional[str]:
    if request.controller:
        return request.controller
    return _string_field(request.command_arguments, "job")


def job_status(request: ClockworkRequest) -> str:
    """Infer a queue job status: exit code, then response status, then duration."""
    if request.command_exit_code is not None:
        return "completed" if request.command_exit_code == 0 else "failed"

    status = request.response_status
    if status is not None:
        if 200 <= status < 300:
            return "completed"
        if status >= 400:
            return "failed"

    if request.response_duration is not None:
        return "completed"
    return "pending"


def list_queue_jobs(
    storage: Storage,
    queue: Optional[str] = None,
    job: Optional[str] = None,
    status: Optional[str] = None,
    start: Optional[float] = None,
    end: Optional[float] = None,
    limit: int = DEFAULT_PAGE_LIMIT,
    offset: int = 0,
) -> List[IndexEntry]:
    entries = _entries_of_type(storage, QUEUE_JOB_TYPE, start, end)

    if queue or job or status:
        def matches(request: ClockworkRequest) -> bool:
            if queue and queue not in (queue_name(request) or ""):
                return False
            if job and job not in (job_name(request) or ""):
                return False
            if status and job_status(request) != status:
                return False
            return True

        entries = _keep_matching(storage, entries, matches)

    return paginate(entries, limit, offset)


def get_queue_job(storage: Storage, request_id: str) -> Optional[ClockworkRequest]:
    """The request if it is a queue job, otherwise ``None``."""
    request = storage.find(request_id)
    if request is not None and request.type != QUEUE_JOB_TYPE:
        return None
    return request


# --- Tests ---

def name_of_test(request: ClockworkRequest) -> Optional[str]:
    return request.command_name or request.controller or request.uri or None


def status_of_test(request: ClockworkRequest) -> str:
    """Infer a test result: exit code, then response status, then error logs."""
    if request.command_exit_code is not None:
        return "passed" if request.command_exit_code == 0 else "failed"

    status = request.response_status
    if status is not None:
        if 200 <= status < 300:
            return "passed"
        if status >= 400:
            return "failed"

    if any(entry.level == "error" for entry in request.log or []):
        return "failed"
    return "passed"


def list_tests(
    storage: Storage,
    name: Optional[str] = None,
    status: Optional[str] = None,
    start: Optional[float] = None,
    end: Optional[float] = None,
    limit: int = DEFAULT_PAGE_LIMIT,
    offset: int = 0,
) -> List[IndexEntry]:
    entries = _entries_of_type(storage, TEST_TYPE, start, end)

    if name or status:
        def matches(request: ClockworkRequest) -> bool:
            if name and name not in (name_of_test(request) or ""):
                return False
            if status and status_of_test(request) != status:
                return False
            return True

        entries = _keep_matching(storage, entries, matches)

    return paginate(entries, limit, offset)


def get_test(storage: Storage, request_id: str) -> Optional[ClockworkRequest]:
    """The request if it is a test run, otherwise ``None``."""
    request = storage.find(request_id)
    if request is not None and request.type != TEST_TYPE:
        return None
    return request
