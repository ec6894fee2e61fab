"""Request context tools: logs, events, views, outgoing HTTP, auth, session, routing."""

from typing import Any, Dict, List, Optional

from clockwork_core import context as context_core
from clockwork_core.config import LOG_LEVELS

from ..exceptions import handle_mcp_exception, validate_choice, validate_required_params
from ..storage import get_storage
from .common import _resp


@handle_mcp_exception
def get_logs(request_id: str, level: Optional[str] = None) -> List[Dict[str, Any]]:
    """Get log entries for a request.

    Args:
        request_id: Clockwork request ID
        level: Minimum level to include (debug, info, warning, error)
    """
    validate_required_params(request_id=request_id)
    validate_choice("level", level, LOG_LEVELS)
    return _resp(context_core.get_logs(get_storage(), request_id, level=level))


@handle_mcp_exception
def get_events(request_id: str) -> List[Dict[str, Any]]:
    """Get events dispatched during a request, with their listeners.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(context_core.get_events(get_storage(), request_id))


@handle_mcp_exception
def get_views(request_id: str) -> List[Dict[str, Any]]:
    """Get views rendered during a request.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(context_core.get_views(get_storage(), request_id))


@handle_mcp_exception
def get_http_requests(request_id: str) -> List[Dict[str, Any]]:
    """Get outgoing HTTP requests made during a request.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(context_core.get_http_requests(get_storage(), request_id))


@handle_mcp_exception
def get_auth_user(request_id: str) -> List[Dict[str, Any]]:
    """Get the authenticated user of a request, or null.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(context_core.get_auth_user(get_storage(), request_id))


@handle_mcp_exception
def get_session_data(request_id: str, keys: Optional[List[str]] = None) -> List[Dict[str, Any]]:
    """Get session data for a request.

    Args:
        request_id: Clockwork request ID
        keys: Only return these session keys
    """
    validate_required_params(request_id=request_id)
    return _resp(context_core.get_session_data(get_storage(), request_id, keys=keys))


@handle_mcp_exception
def get_middleware_chain(request_id: str) -> List[Dict[str, Any]]:
    """Get the middleware a request passed through, in order.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(context_core.get_middleware_chain(get_storage(), request_id))


@handle_mcp_exception
def get_route_details(request_id: str) -> List[Dict[str, Any]]:
    """Get route, route name, URI, method and controller of a request.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(context_core.get_route_details(get_storage(), request_id))
