"""Request discovery tools.

- list_requests: recent requests with filters and pagination
- get_request: full request data by id
- get_latest_request: the most recent request
- search_requests: search by controller, URI, status or duration
"""

from typing import Any, Dict, List, Optional

from clockwork_core import requests as requests_core

from ..exceptions import handle_mcp_exception, validate_required_params
from ..storage import get_storage
from ..utils.pylogger import get_python_logger
from .common import _resp, validate_pagination

logger = get_python_logger()


@handle_mcp_exception
def list_requests(
    type: Optional[str] = None,
    status: Optional[int] = None,
    uri: Optional[str] = None,
    method: Optional[str] = None,
    from_time: Optional[float] = None,
    to_time: Optional[float] = None,
    limit: int = 20,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """List recent Clockwork requests with optional filtering.

    Args:
        type: Request type (request, command, queue-job, test)
        status: HTTP response status code
        uri: Substring the request URI must contain
        method: HTTP method (GET, POST, ...)
        from_time: Only requests at or after this unix timestamp
        to_time: Only requests at or before this unix timestamp
        limit: Max results to return
        offset: Number of results to skip

    Returns:
        Index entries, most recent first
    """
    validate_pagination(limit, offset)
    entries = requests_core.list_requests(
        get_storage(),
        type=type,
        status=status,
        uri=uri,
        method=method,
        start=from_time,
        end=to_time,
        limit=limit,
        offset=offset,
    )
    logger.debug("Listed requests", count=len(entries))
    return _resp(entries)


@handle_mcp_exception
def get_request(request_id: str) -> List[Dict[str, Any]]:
    """Get full details of a specific request by ID.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(requests_core.get_request(get_storage(), request_id))


@handle_mcp_exception
def get_latest_request() -> List[Dict[str, Any]]:
    """Get the most recent Clockwork request."""
    return _resp(requests_core.get_latest_request(get_storage()))


@handle_mcp_exception
def search_requests(
    controller: Optional[str] = None,
    uri: Optional[str] = None,
    status: Optional[int] = None,
    min_duration: Optional[float] = None,
    max_duration: Optional[float] = None,
    limit: int = 20,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """Search requests by controller, URI, status or response duration.

    Args:
        controller: Substring of the controller name
        uri: Substring of the request URI
        status: HTTP response status code
        min_duration: Minimum response duration in ms
        max_duration: Maximum response duration in ms
        limit: Max results to return
        offset: Number of results to skip
    """
    validate_pagination(limit, offset)
    entries = requests_core.search_requests(
        get_storage(),
        controller=controller,
        uri=uri,
        status=status,
        min_duration=min_duration,
        max_duration=max_duration,
        limit=limit,
        offset=offset,
    )
    return _resp(entries)
