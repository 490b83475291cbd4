"""swgohhelp Error Handling Module

This module defines the error handling system for swgohhelp, providing
structured error classes with context information and readable messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

# Keys never exported by ErrorContext.safe_dict()
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("password", "token", "client_secret")


class ErrorCode(str, Enum):
    """Error codes for swgohhelp.

    This enum serves as the single source of truth for all error codes
    used throughout the package.
    """

    # Input Errors
    ALLY_CODE_PARSE_FAILED = "ALLY_CODE_PARSE_FAILED"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Network and API Errors
    NETWORK_ERROR = "NETWORK_ERROR"
    API_TIMEOUT = "API_TIMEOUT"
    API_AUTHENTICATION_FAILED = "API_AUTHENTICATION_FAILED"
    API_REQUEST_FAILED = "API_REQUEST_FAILED"
    API_INVALID_RESPONSE = "API_INVALID_RESPONSE"
    STAT_CALC_FAILED = "STAT_CALC_FAILED"

    # Cache Errors
    CACHE_DIRECTORY_UNAVAILABLE = "CACHE_DIRECTORY_UNAVAILABLE"
    CACHE_READ_FAILED = "CACHE_READ_FAILED"
    CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"
    CACHE_CORRUPTED = "CACHE_CORRUPTED"
    CACHE_SERIALIZATION_ERROR = "CACHE_SERIALIZATION_ERROR"

    # Debug trace Errors
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"

    # Configuration Errors
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"

    # Application Errors
    APPLICATION_ERROR = "APPLICATION_ERROR"
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path and Enum values to their primitive form.

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif val is None:
            continue
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to ensure safe serialization.

    Attributes:
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Export context as dict with sensitive keys removed.

        Example:
            >>> ErrorContext(operation="sign_in", additional_data={"password": "x"}).safe_dict()
            {'operation': 'sign_in', 'additional_data': {}}
        """
        if mask_keys is None:
            mask_keys = SAFE_DICT_MASK_KEYS

        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = {
            key: value
            for key, value in (self.additional_data or {}).items()
            if key not in mask_keys
        }
        return data


class SwgohHelpError(Exception):
    """Base exception class for all swgohhelp errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize SwgohHelpError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(SwgohHelpError):
    """Errors caused by invalid input or violated domain rules.

    Examples:
    - Malformed ally codes
    - Records that fail validation
    """


class InfrastructureError(SwgohHelpError):
    """Errors raised while talking to external systems.

    Examples:
    - Network connection failures
    - Non-2xx API responses
    - Cache file I/O failures
    """


class ApplicationError(SwgohHelpError):
    """Application-level errors such as configuration or CLI failures."""


class ParseError(DomainError):
    """Raised when an ally code cannot be parsed into its numeric form."""

    def __init__(
        self,
        raw_input: str,
        message: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.raw_input = raw_input
        super().__init__(
            ErrorCode.ALLY_CODE_PARSE_FAILED,
            message or f"Invalid ally code: {raw_input!r}",
            ErrorContext(
                operation="parse_ally_codes",
                additional_data={"raw_input": raw_input},
            ),
            original_error,
        )


class AuthError(InfrastructureError):
    """Raised when the sign-in exchange fails."""


class TransportError(InfrastructureError):
    """Raised on connection failures, timeouts and other transport problems."""


class ProtocolError(InfrastructureError):
    """Raised on non-2xx responses or bodies that cannot be decoded."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(code, message, context, original_error)
        self.status_code = status_code


class CacheError(InfrastructureError):
    """Cache store failures.

    Always handled inside the cache layer: logged and degraded to an empty
    or ephemeral cache, never surfaced to callers of the API client.
    """


def create_transport_error(
    message: str,
    url: str,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> TransportError:
    """Create a transport error with context."""
    return TransportError(
        ErrorCode.NETWORK_ERROR,
        message,
        ErrorContext(operation=operation, additional_data={"url": url}),
        original_error,
    )


def create_protocol_error(
    message: str,
    url: str,
    status_code: int | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ProtocolError:
    """Create a protocol error with context.

    A missing status code means the response body was the problem.
    """
    additional_data: dict[str, PrimitiveContextValue] = {"url": url}
    if status_code is not None:
        additional_data["status_code"] = status_code
    return ProtocolError(
        ErrorCode.API_REQUEST_FAILED if status_code is not None else ErrorCode.API_INVALID_RESPONSE,
        message,
        ErrorContext(operation=operation, additional_data=additional_data),
        original_error,
        status_code=status_code,
    )


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    return ApplicationError(
        ErrorCode.CONFIG_INVALID,
        message,
        ErrorContext(operation=operation, additional_data=additional_data),
        original_error,
    )
