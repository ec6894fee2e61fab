"""
Core data models for Clockwork telemetry.

Clockwork writes its metadata as camelCase JSON. The models below expose the
same data with snake_case attributes (through an alias generator) so that
records read from storage can be validated as-is, and keep any fields they do
not declare.
"""

from typing import Any, Dict, List, Optional, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .config import BYTES_PER_MB


def _container_of(annotation: Any) -> Optional[type]:
    """``dict`` or ``list`` when the (possibly Optional) annotation is one, else None."""
    if get_origin(annotation) is Union:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) != 1:
            return None
        annotation = args[0]
    origin = get_origin(annotation) or annotation
    return origin if origin in (dict, list) else None


def normalize_php_value(value: Any, container: Optional[type]) -> Any:
    """Reshape a decoded PHP array to the container a field expects.

    ``json_encode`` writes an empty associative array as ``[]`` and a
    non-sequential list as an object.
    """
    if container is dict and isinstance(value, list):
        return {str(index): item for index, item in enumerate(value)}
    if container is list and isinstance(value, dict):
        return list(value.values())
    return value


class ClockworkModel(BaseModel):
    """Base model accepting Clockwork's camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_php_json(cls, data: Any) -> Any:
        # null falls back to the field default; arrays are reshaped per field
        if not isinstance(data, dict):
            return data

        normalized = dict(data)
        for name, info in cls.model_fields.items():
            container = _container_of(info.annotation)
            for key in {name, info.alias or to_camel(name)}:
                if key not in normalized:
                    continue
                value = normalized[key]
                if value is None:
                    if not info.is_required() and info.default is not None:
                        del normalized[key]
                else:
                    normalized[key] = normalize_php_value(value, container)
        return normalized

    def to_dict(self) -> Dict[str, Any]:
        """Dump using Clockwork key names, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Collected data ---

class DatabaseQuery(ClockworkModel):
    query: str = ""
    duration: float = 0.0
    bindings: Optional[Any] = None
    connection: Optional[str] = None
    file: Optional[str] = None
    line: Optional[int] = None
    model: Optional[str] = None
    tags: Optional[List[str]] = None


class CacheQuery(ClockworkModel):
    type: str = ""
    key: str = ""
    value: Optional[Any] = None
    duration: Optional[float] = None
    connection: Optional[str] = None


class RedisCommand(ClockworkModel):
    command: str = ""
    parameters: Optional[List[Any]] = None
    duration: Optional[float] = None
    connection: Optional[str] = None


class LogEntry(ClockworkModel):
    level: str = ""
    message: str = ""
    context: Optional[Dict[str, Any]] = None
    time: Optional[float] = None
    file: Optional[str] = None
    line: Optional[int] = None

    @field_validator("message", mode="before")
    @classmethod
    def _stringify_message(cls, value: Any) -> Any:
        return "" if value is None else str(value)


class TimelineEvent(ClockworkModel):
    description: str = ""
    start: float = 0.0
    end: float = 0.0
    duration: float = 0.0
    color: Optional[str] = None
    data: Optional[Dict[str, Any]] = None

    @model_validator(mode="before")
    @classmethod
    def _derive_duration(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("duration") is None:
            if data.get("start") is not None and data.get("end") is not None:
                return {**data, "duration": data["end"] - data["start"]}
        return data


class DispatchedEvent(ClockworkModel):
    event: str = ""
    listeners: Optional[List[Any]] = None
    data: Optional[Any] = None
    time: Optional[float] = None
    duration: Optional[float] = None


class RenderedView(ClockworkModel):
    name: str = ""
    path: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    duration: Optional[float] = None


class OutgoingHttpRequest(ClockworkModel):
    method: str = ""
    url: str = ""
    duration: Optional[float] = None
    response_status: Optional[int] = None
    request: Optional[Dict[str, Any]] = None
    response: Optional[Dict[str, Any]] = None


# --- Requests ---

class ClockworkRequest(ClockworkModel):
    """One profiled unit of execution: HTTP request, command, queue job or test."""

    id: str
    time: float = 0.0
    type: Optional[str] = None
    version: Optional[int] = None

    # HTTP request fields
    method: Optional[str] = None
    uri: Optional[str] = None
    url: Optional[str] = None
    controller: Optional[str] = None
    headers: Optional[Dict[str, Any]] = None
    get_data: Optional[Dict[str, Any]] = None
    post_data: Optional[Dict[str, Any]] = None
    request_data: Optional[Dict[str, Any]] = None
    response_status: Optional[int] = None
    response_duration: Optional[float] = None
    memory_usage: Optional[float] = None
    middleware: Optional[List[str]] = None

    # Route info
    route: Optional[str] = None
    route_name: Optional[str] = None

    # Command fields
    command_name: Optional[str] = None
    command_arguments: Optional[Dict[str, Any]] = None
    command_options: Optional[Dict[str, Any]] = None
    command_exit_code: Optional[int] = None
    command_output: Optional[str] = None

    # Collected data
    database_queries: Optional[List[DatabaseQuery]] = None
    database_queries_count: Optional[int] = None
    database_slow_queries: Optional[int] = None
    database_duration: Optional[float] = None

    cache_queries: Optional[List[CacheQuery]] = None
    cache_reads: Optional[int] = None
    cache_hits: Optional[int] = None
    cache_writes: Optional[int] = None
    cache_deletes: Optional[int] = None
    cache_duration: Optional[float] = None

    redis_commands: Optional[List[RedisCommand]] = None
    log: Optional[List[LogEntry]] = None
    events: Optional[List[DispatchedEvent]] = None
    views: Optional[List[RenderedView]] = None
    views_data: Optional[List[RenderedView]] = None
    timeline_data: Optional[List[TimelineEvent]] = None
    http_requests: Optional[List[OutgoingHttpRequest]] = None

    authenticated_user: Optional[Dict[str, Any]] = None
    session_data: Optional[Dict[str, Any]] = None

    @property
    def memory_mb(self) -> Optional[float]:
        if self.memory_usage is None:
            return None
        return self.memory_usage / BYTES_PER_MB


class IndexEntry(ClockworkModel):
    """Lightweight projection of a request, as stored in the Clockwork index."""

    id: str
    time: float = 0.0
    type: Optional[str] = None
    method: Optional[str] = None
    uri: Optional[str] = None
    controller: Optional[str] = None
    response_status: Optional[int] = None
    response_duration: Optional[float] = None
    command_name: Optional[str] = None


# --- Scope ---

class RequestScope(BaseModel):
    """Selection of requests for a cross-request analysis.

    Priority: ``request_id`` > ``count`` > ``all``/``since`` > latest only.
    """

    model_config = ConfigDict(frozen=True)

    request_id: Optional[str] = None
    count: Optional[int] = None
    since: Optional[str] = None
    all: bool = False
    uri: Optional[str] = None
