"""Storage access for Clockwork request data.

- Storage: protocol the analysis core depends on
- FileStorage: reads Clockwork's file storage (index + one JSON per request)
"""

from .base import Storage
from .file_storage import FileStorage
from .index_parser import parse_index, parse_index_line
from .reader import read_request, read_requests, request_exists

__all__ = [
    "Storage",
    "FileStorage",
    "parse_index",
    "parse_index_line",
    "read_request",
    "read_requests",
    "request_exists",
]
