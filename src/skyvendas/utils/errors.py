"""
Unified error handling for SkyVendas.
"""

import logging

logger = logging.getLogger(__name__)


class SkyVendasError(Exception):
    """Base exception for SkyVendas errors."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}. {self.suggestion}"
        return self.message


class TransientFetchError(SkyVendasError):
    """Network, timeout or server-side failure that a retry may fix."""

    pass


class AuthenticationError(SkyVendasError):
    """Authentication or authorization error."""

    pass


class NotFoundError(SkyVendasError):
    """Resource not found error."""

    pass


class APIError(SkyVendasError):
    """Non-transient API failure (bad request, malformed body)."""

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, suggestion)
        self.status_code = status_code


class ConfigurationError(SkyVendasError):
    """Configuration error."""

    pass


def error_kind(error: BaseException) -> str:
    """Classify an exception into the kind recorded on a failed fetch."""
    if isinstance(error, TransientFetchError):
        return "transient"
    if isinstance(error, AuthenticationError):
        return "authentication"
    if isinstance(error, NotFoundError):
        return "not_found"
    if isinstance(error, SkyVendasError):
        return "api"
    return "unexpected"


def handle_error(error: Exception, operation: str = "operation") -> str:
    """
    Handle errors consistently across presenters.

    Args:
        error: The exception that occurred
        operation: Name of the operation that failed

    Returns:
        User-friendly error message with suggestions
    """
    logger.error(f"Error in {operation}: {str(error)}")

    if isinstance(error, SkyVendasError):
        return f"Error: {error}"

    error_str = str(error).lower()
    error_type = type(error).__name__

    if "connection" in error_str or "timeout" in error_str:
        return (
            "Error: Could not reach the SkyVendas server. "
            "Check your connection and try again."
        )

    if "401" in error_str or "unauthorized" in error_str:
        return "Error: Authentication failed. Please sign in again."

    # Generic error
    return f"Error in {operation}: {error_type} - {str(error)}"


def format_api_error(status_code: int, message: str = "") -> str:
    """Format an API error with appropriate message."""
    error_messages = {
        400: "Bad request. Please check your input parameters.",
        401: "Authentication required. Please set SKYVENDAS_API_TOKEN.",
        403: "Access denied. You don't have permission to perform this action.",
        404: "Resource not found.",
        429: "Rate limit exceeded. Please wait before making more requests.",
        500: "SkyVendas server error. Please try again later.",
        502: "SkyVendas gateway error. Please try again later.",
        503: "SkyVendas service unavailable. Please try again later.",
        504: "SkyVendas gateway timeout. Please try again later.",
    }

    default_message = f"API error (status {status_code})"
    base_message = error_messages.get(status_code, default_message)

    if message:
        return f"Error: {base_message} Details: {message}"
    return f"Error: {base_message}"
