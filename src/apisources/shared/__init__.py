# src/apisources/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation and lenient number parsing
- Logging configuration
"""

from apisources.shared.validators import (
    is_number,
    is_query_shape,
    parse_float,
    parse_int,
    validate_http_url,
)
from apisources.shared.logging_conf import setup_logging

__all__ = [
    "is_number",
    "is_query_shape",
    "parse_float",
    "parse_int",
    "validate_http_url",
    "setup_logging",
]
