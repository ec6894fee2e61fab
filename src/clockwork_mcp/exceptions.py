"""
MCP Server Exception Handling

Standardized exception handling for the Clockwork MCP tools: error codes,
structured error responses, logging and recovery suggestions.

- MCPException and its subclasses carry an error code, details and a
  suggestion, and render themselves as MCP text content
- handle_mcp_exception wraps every tool so errors never escape as raw
  tracebacks
- validate_* helpers check tool arguments before the core is called
"""

import functools
import json
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


class MCPErrorCode(Enum):
    """Standardized error codes for MCP operations."""

    # Input/Validation Errors (4xx equivalent)
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_PARAMETER = "MISSING_PARAMETER"

    # Storage Errors
    STORAGE_NOT_FOUND = "STORAGE_NOT_FOUND"
    STORAGE_READ_ERROR = "STORAGE_READ_ERROR"

    # Internal Errors (5xx equivalent)
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class MCPException(Exception):
    """Base exception class for MCP operations."""

    def __init__(
        self,
        message: str,
        error_code: MCPErrorCode,
        details: Optional[Dict[str, Any]] = None,
        recovery_suggestion: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.recovery_suggestion = recovery_suggestion
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        error_data = {
            "error": True,
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details
        }
        if self.recovery_suggestion:
            error_data["recovery_suggestion"] = self.recovery_suggestion
        return error_data

    def to_mcp_response(self) -> List[Dict[str, Any]]:
        """Convert exception to MCP-compliant error response."""
        return [{"type": "text", "text": json.dumps(self.to_dict(), indent=2)}]


class ValidationError(MCPException):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None, details: Optional[Dict[str, Any]] = None):
        combined_details = details or {}
        if field:
            combined_details["field"] = field
        if value is not None:
            combined_details["provided_value"] = str(value)

        super().__init__(
            message=message,
            error_code=MCPErrorCode.INVALID_INPUT,
            details=combined_details,
            recovery_suggestion="Please check the input parameters and try again."
        )


class StorageNotFoundError(MCPException):
    """Raised when the Clockwork storage directory does not exist."""

    def __init__(self, storage_path: str):
        super().__init__(
            message=f"Clockwork storage not found at {storage_path}",
            error_code=MCPErrorCode.STORAGE_NOT_FOUND,
            details={"storage_path": storage_path},
            recovery_suggestion=(
                "Set CLOCKWORK_STORAGE_PATH to the storage/clockwork directory, "
                "or CLOCKWORK_PROJECT_PATH to the Laravel project root."
            )
        )


class StorageReadError(MCPException):
    """Raised when Clockwork storage exists but cannot be read."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        details = {}
        if original_exception is not None:
            details["error_type"] = type(original_exception).__name__
        super().__init__(
            message=message,
            error_code=MCPErrorCode.STORAGE_READ_ERROR,
            details=details,
            recovery_suggestion="Check file permissions and that the request files are valid JSON.",
            original_exception=original_exception
        )


class ConfigurationError(MCPException):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {}
        if config_key:
            details["config_key"] = config_key

        super().__init__(
            message=message,
            error_code=MCPErrorCode.CONFIGURATION_ERROR,
            details=details,
            recovery_suggestion="Check environment variables and configuration files."
        )


def handle_mcp_exception(func):
    """Decorator to standardize exception handling for MCP tools."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except MCPException as e:
            logger.error(
                "MCP tool error: %s",
                e.message,
                extra={
                    "error_code": e.error_code.value,
                    "tool_name": func.__name__,
                    "details": e.details
                }
            )
            return e.to_mcp_response()
        except (OSError, ValueError) as e:
            logger.error(
                "Storage read failed in MCP tool: %s",
                func.__name__,
                extra={"tool_name": func.__name__, "error_type": type(e).__name__}
            )
            return StorageReadError(
                message=f"Failed to read Clockwork storage: {e}",
                original_exception=e
            ).to_mcp_response()
        except Exception as e:
            logger.exception(
                "Unexpected error in MCP tool: %s",
                func.__name__,
                extra={
                    "tool_name": func.__name__,
                    "error_type": type(e).__name__
                }
            )

            internal_error = MCPException(
                message=f"An unexpected error occurred: {str(e)}",
                error_code=MCPErrorCode.INTERNAL_ERROR,
                details={"error_type": type(e).__name__},
                recovery_suggestion="Please try again. If the problem persists, report an issue.",
                original_exception=e
            )
            return internal_error.to_mcp_response()

    return wrapper


def validate_required_params(**params) -> None:
    """Validate that required parameters are provided and not empty."""
    for param_name, param_value in params.items():
        if param_value is None or (isinstance(param_value, str) and not param_value.strip()):
            raise ValidationError(
                message=f"Required parameter '{param_name}' is missing or empty",
                field=param_name,
                value=param_value
            )


def validate_non_negative(**params) -> None:
    for param_name, param_value in params.items():
        if param_value is not None and param_value < 0:
            raise ValidationError(
                message=f"Parameter '{param_name}' must not be negative",
                field=param_name,
                value=param_value
            )


def validate_choice(field: str, value: Optional[str], choices: Sequence[str]) -> None:
    """Validate an optional enumerated parameter."""
    if value is not None and value not in choices:
        raise ValidationError(
            message=f"Parameter '{field}' must be one of {list(choices)}",
            field=field,
            value=value
        )
