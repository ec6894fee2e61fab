"""Artisan command, queue job and test tools."""

from typing import Any, Dict, List, Optional

from clockwork_core import jobs as jobs_core

from ..exceptions import handle_mcp_exception, validate_choice, validate_required_params
from ..storage import get_storage
from .common import _resp, validate_pagination


@handle_mcp_exception
def list_commands(
    name: Optional[str] = None,
    from_time: Optional[float] = None,
    to_time: Optional[float] = None,
    limit: int = 20,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """List profiled Artisan command executions.

    Args:
        name: Substring of the command name
        from_time: Only commands at or after this unix timestamp
        to_time: Only commands at or before this unix timestamp
        limit: Max results to return
        offset: Number of results to skip
    """
    validate_pagination(limit, offset)
    return _resp(
        jobs_core.list_commands(
            get_storage(), name=name, start=from_time, end=to_time, limit=limit, offset=offset
        )
    )


@handle_mcp_exception
def get_command(request_id: str) -> List[Dict[str, Any]]:
    """Get full details of an Artisan command execution.

    Args:
        request_id: Clockwork request ID of the command
    """
    validate_required_params(request_id=request_id)
    return _resp(jobs_core.get_command(get_storage(), request_id))


@handle_mcp_exception
def list_queue_jobs(
    queue: Optional[str] = None,
    job: Optional[str] = None,
    status: Optional[str] = None,
    from_time: Optional[float] = None,
    to_time: Optional[float] = None,
    limit: int = 20,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """List profiled queue jobs.

    Args:
        queue: Substring of the queue name
        job: Substring of the job class name
        status: pending, processing, completed or failed
        from_time: Only jobs at or after this unix timestamp
        to_time: Only jobs at or before this unix timestamp
        limit: Max results to return
        offset: Number of results to skip
    """
    validate_pagination(limit, offset)
    validate_choice("status", status, jobs_core.JOB_STATUSES)
    return _resp(
        jobs_core.list_queue_jobs(
            get_storage(),
            queue=queue,
            job=job,
            status=status,
            start=from_time,
            end=to_time,
            limit=limit,
            offset=offset,
        )
    )


@handle_mcp_exception
def get_queue_job(request_id: str) -> List[Dict[str, Any]]:
    """Get full details of a queue job; null if the request is not a queue job.

    Args:
        request_id: Clockwork request ID of the job
    """
    validate_required_params(request_id=request_id)
    return _resp(jobs_core.get_queue_job(get_storage(), request_id))


@handle_mcp_exception
def list_tests(
    name: Optional[str] = None,
    status: Optional[str] = None,
    from_time: Optional[float] = None,
    to_time: Optional[float] = None,
    limit: int = 20,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """List profiled test executions.

    Args:
        name: Substring of the test name
        status: passed, failed or skipped
        from_time: Only tests at or after this unix timestamp
        to_time: Only tests at or before this unix timestamp
        limit: Max results to return
        offset: Number of results to skip
    """
    validate_pagination(limit, offset)
    validate_choice("status", status, jobs_core.TEST_STATUSES)
    return _resp(
        jobs_core.list_tests(
            get_storage(),
            name=name,
            status=status,
            start=from_time,
            end=to_time,
            limit=limit,
            offset=offset,
        )
    )


@handle_mcp_exception
def get_test(request_id: str) -> List[Dict[str, Any]]:
    """Get full details of a test execution; null if the request is not a test.

    Args:
        request_id: Clockwork request ID of the test
    """
    validate_required_params(request_id=request_id)
    return _resp(jobs_core.get_test(get_storage(), request_id))
