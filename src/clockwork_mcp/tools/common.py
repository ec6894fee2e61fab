"""Helpers shared by the Clockwork MCP tools."""

import json
from typing import Any, Dict, List, Optional

from clockwork_core.models import RequestScope

from ..exceptions import validate_non_negative


def to_jsonable(value: Any) -> Any:
    """Convert core results (models, dataclasses, lists of them) to JSON-ready data."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def _resp(data: Any) -> List[Dict[str, Any]]:
    """Helper to format MCP tool responses consistently."""
    return [{"type": "text", "text": json.dumps(to_jsonable(data), indent=2, default=str)}]


def build_scope(
    request_id: Optional[str] = None,
    count: Optional[int] = None,
    since: Optional[str] = None,
    all_requests: bool = False,
    uri: Optional[str] = None,
) -> RequestScope:
    """Turn flattened tool arguments into a RequestScope.

    Empty strings count as absent. ``count`` is clamped by the resolver,
    not rejected here.
    """
    return RequestScope(
        request_id=request_id or None,
        count=count,
        since=since or None,
        all=all_requests,
        uri=uri or None,
    )


def validate_pagination(limit: int, offset: int) -> None:
    validate_non_negative(limit=limit, offset=offset)
