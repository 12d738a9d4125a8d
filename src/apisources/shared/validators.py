# src/apisources/shared/validators.py
"""
Input Validation Utilities - Configuration and Query Validation

This module provides small validation and parsing helpers shared by the
settings layer, the facade and the adapters: endpoint URL checks,
numeric checks for coordinates, and lenient number parsing for upstream
payloads.

Files that USE this module:
- apisources.config.settings (uses validation functions in Settings field validators)
- apisources.application.source_client (query shape checks)
- apisources.adapters.providers.* (coordinate checks and number parsing)

Files that this module USES:
- None (pure utility functions)
"""
import math
import re
from collections.abc import Mapping
from typing import Any, Optional

_LEADING_FLOAT = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def validate_http_url(url: str) -> bool:
    """
    Validate that a URL is an absolute http(s) URL.

    Args:
        url: URL to validate

    Returns:
        True if valid, False otherwise
    """
    if not url:
        return False
    return bool(re.match(r"^https?://[^\s/]+", url))


def is_number(value: Any) -> bool:
    """Return True for real int/float values (bool is not a number here)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_query_shape(value: Any) -> bool:
    """Return True if value is a string or a mapping."""
    return isinstance(value, (str, Mapping))


def parse_float(value: Any) -> float:
    """
    Parse an upstream numeric field leniently.

    Numbers pass through; strings are read up to the first non-numeric
    character (so "187.50 USD" gives 187.5). Anything unparseable gives NaN
    instead of raising.

    Args:
        value: Raw upstream value (str, int, float or None)

    Returns:
        Parsed float, or NaN
    """
    if is_number(value):
        return float(value)
    if value is None:
        return math.nan
    match = _LEADING_FLOAT.match(str(value))
    if not match:
        return math.nan
    return float(match.group(0))


def parse_int(value: Any) -> Optional[int]:
    """
    Parse an upstream integer field leniently.

    Args:
        value: Raw upstream value (str, int, float or None)

    Returns:
        Parsed integer (decimals truncated), or None if unparseable
    """
    if is_number(value):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return int(value)
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(0))
