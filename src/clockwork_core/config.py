"""
Configuration constants for Clockwork request analysis

Centralizes the policy thresholds and unit tables shared by the analyzers,
the scope resolver and the MCP tools.
"""

from typing import Dict, Tuple

# Hard upper bound on the number of requests a single cross-request analysis
# may touch, whatever the scope asks for.
MAX_REQUESTS: int = 100

# Scope defaults
DEFAULT_SCOPE_LIMIT: int = 1

# Database analysis defaults
DEFAULT_SLOW_QUERY_THRESHOLD_MS: float = 100.0
DEFAULT_SLOW_QUERY_LIMIT: int = 20
DEFAULT_N_PLUS_ONE_THRESHOLD: int = 2

# Exception analysis defaults
DEFAULT_EXCEPTION_LIMIT: int = 20
EXCEPTION_EXAMPLES_PER_GROUP: int = 3
EXCEPTION_LEVELS: Tuple[str, ...] = ("error", "critical")

# Memory analysis defaults
DEFAULT_MEMORY_THRESHOLD_MB: float = 128.0
MEMORY_GROWTH_MIN_SAMPLES: int = 4
MEMORY_GROWTH_PERCENT: float = 20.0

# Route performance defaults
DEFAULT_ROUTE_GROUP_BY: str = "uri"
ROUTE_GROUP_BY_OPTIONS: Tuple[str, ...] = ("uri", "route", "controller")
DEFAULT_ROUTE_MIN_SAMPLES: int = 1

# Listing defaults
DEFAULT_PAGE_LIMIT: int = 20

BYTES_PER_MB: int = 1024 * 1024

# Ordered from least to most severe
LOG_LEVELS: Tuple[str, ...] = ("debug", "info", "warning", "error")

# Duration string units in milliseconds
DURATION_UNITS_MS: Dict[str, int] = {
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
}

# Request type written by Clockwork for HTTP requests
HTTP_REQUEST_TYPE: str = "request"
