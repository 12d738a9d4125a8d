# src/apisources/domain/errors.py
"""
Domain Errors - Source and Adapter Exceptions

This module defines the error kinds raised by the adapters and the facade.
Every kind can carry the source name and query that were being fetched,
which the facade fills in when it re-raises an adapter failure.
"""
from typing import Any, Optional


class SourceError(Exception):
    """Base exception for all apisources errors."""

    def __init__(self, message: str, *, source: Optional[str] = None, query: Any = None):
        super().__init__(message)
        self.message = message
        self.source = source
        self.query = query

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(SourceError, ValueError):
    """Raised when a source name, query or option has the wrong shape or is empty."""
    pass


class ConfigurationError(SourceError):
    """Raised when a required setting (such as an API key) is missing."""
    pass


class UnsupportedSourceError(SourceError):
    """Raised when no adapter is registered under the requested source name."""
    pass


class NotFoundError(SourceError):
    """Raised when an upstream lookup (e.g. geocoding) yields no match."""
    pass


class UpstreamError(SourceError):
    """Raised when an upstream API fails or returns an unusable response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        source: Optional[str] = None,
        query: Any = None,
    ):
        super().__init__(message, source=source, query=query)
        self.status_code = status_code
