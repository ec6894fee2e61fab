"""Storage status and request flow tools."""

from typing import Any, Dict, List

from clockwork_core import status as status_core
from clockwork_core.storage import FileStorage

from ..exceptions import handle_mcp_exception, validate_required_params
from ..storage import get_storage, get_storage_path
from .common import _resp


@handle_mcp_exception
def get_clockwork_status() -> List[Dict[str, Any]]:
    """Report whether Clockwork storage was found, how many requests it holds and its size.

    Unlike the other tools this does not fail when storage is missing; it
    reports ``found: false`` with the path that was checked.
    """
    path = get_storage_path()
    return _resp(status_core.get_clockwork_status(FileStorage(path), path))


@handle_mcp_exception
def explain_request_flow(request_id: str) -> List[Dict[str, Any]]:
    """Summarize what happened in a request: route, middleware, queries, status, timing.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(status_core.explain_request_flow(get_storage(), request_id))
