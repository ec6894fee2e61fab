"""Cache and Redis tools."""

from typing import Any, Dict, List

from clockwork_core import cache as cache_core

from ..exceptions import handle_mcp_exception, validate_required_params
from ..storage import get_storage
from .common import _resp


@handle_mcp_exception
def get_cache_operations(request_id: str) -> List[Dict[str, Any]]:
    """Get cache operations (hits, misses, writes, deletes) performed during a request.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(cache_core.get_cache_operations(get_storage(), request_id))


@handle_mcp_exception
def get_cache_stats(request_id: str) -> List[Dict[str, Any]]:
    """Get cache statistics for a request, including the hit ratio.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(cache_core.get_cache_stats(get_storage(), request_id))


@handle_mcp_exception
def get_redis_commands(request_id: str) -> List[Dict[str, Any]]:
    """Get Redis commands executed during a request.

    Args:
        request_id: Clockwork request ID
    """
    validate_required_params(request_id=request_id)
    return _resp(cache_core.get_redis_commands(get_storage(), request_id))
