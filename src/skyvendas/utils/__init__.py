"""
Utility functions and helpers for SkyVendas.
"""

from .errors import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    NotFoundError,
    SkyVendasError,
    TransientFetchError,
    format_api_error,
    handle_error,
)
from .logging_config import PerformanceMonitor, initialize_logging, setup_logging

__all__ = [
    "SkyVendasError",
    "TransientFetchError",
    "AuthenticationError",
    "NotFoundError",
    "APIError",
    "ConfigurationError",
    "format_api_error",
    "handle_error",
    "PerformanceMonitor",
    "initialize_logging",
    "setup_logging",
]
