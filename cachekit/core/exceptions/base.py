"""
Base Exception Class

This module contains ONLY the base exception class that all other exceptions inherit from.
All specialized exceptions are in their respective themed modules.

Author: System Architect
Date: 2026-10-19
"""

from typing import Any


class CacheKitError(Exception):
    """
    Base exception for all cache-aside errors.

    All custom exceptions inherit from this class to enable:
    - Consistent error handling (one ``except CacheKitError`` covers the layer)
    - Operation ID correlation
    - Structured error logging
    - Rich context for debugging

    Attributes:
        message: Error message
        operation_id: Operation ID for correlation (if available)
        details: Additional error details (dict)

    Example:
        raise BackendError(
            "Redis GET failed",
            operation_id="abc-123",
            details={"key": "user:42", "backend": "redis"}
        )
    """

    def __init__(
        self, message: str, operation_id: str | None = None, details: dict[str, Any] | None = None
    ):
        self.message = message
        self.operation_id = operation_id
        self.details = (details or {}).copy()  # Create a copy to prevent external modification
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for logging.

        Returns:
            Dict with error_type, message, operation_id, and details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "operation_id": self.operation_id,
            "details": self.details,
        }

    def with_suggestion(self, suggestion: str) -> "CacheKitError":
        """
        Add a suggestion to help users fix the error.

        Args:
            suggestion: Helpful suggestion for resolving the error

        Returns:
            Self (for method chaining)
        """
        self.details["suggestion"] = suggestion
        return self

    def with_context(self, **context) -> "CacheKitError":
        """
        Add additional context to the error details.

        Args:
            **context: Key-value pairs to add to details

        Returns:
            Self (for method chaining)
        """
        self.details.update(context)
        return self

    def __repr__(self) -> str:
        """
        Return detailed string representation for debugging.

        Example:
            >>> error = BackendError("GET failed", operation_id="abc-123", details={"key": "user:1"})
            >>> repr(error)
            "BackendError(message='GET failed', operation_id='abc-123', details={'key': 'user:1'})"
        """
        details_str = f", details={self.details}" if self.details else ""
        operation_id_str = f", operation_id='{self.operation_id}'" if self.operation_id else ""
        return f"{self.__class__.__name__}(message='{self.message}'{operation_id_str}{details_str})"

    @classmethod
    def from_exception(
        cls,
        exc: Exception,
        message: str | None = None,
        operation_id: str | None = None,
        **details
    ) -> "CacheKitError":
        """
        Create an error of this class from another exception.

        Useful for wrapping third-party exceptions (redis, msgpack, pydantic,
        database drivers) with additional context.

        Example:
            >>> try:
            ...     await client.get(key)
            ... except redis.RedisError as e:
            ...     raise BackendError.from_exception(e, key=key) from e
        """
        error_message = message or str(exc)
        error_details = {
            "original_error": exc.__class__.__name__,
            "original_message": str(exc),
            **details
        }
        return cls(error_message, operation_id=operation_id, details=error_details)


# Configuration exception (kept here as it's fundamental)
class ConfigurationError(CacheKitError):
    """Raised when configuration is invalid or missing."""
    pass
