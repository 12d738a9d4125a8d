# src/apisources/domain/__init__.py
"""
Domain Layer - Records and Errors

This package contains the normalized records and the error kinds.
No dependencies on infrastructure or external systems.
"""

from apisources.domain.models import (
    Location,
    NewsItem,
    NewsQuery,
    NewsResult,
    PriceRecord,
    QuoteRecord,
    Record,
    SourceFamily,
    WEATHER_CODES,
    WeatherRecord,
    describe_weather_code,
)
from apisources.domain.errors import (
    ConfigurationError,
    InvalidArgumentError,
    NotFoundError,
    SourceError,
    UnsupportedSourceError,
    UpstreamError,
)

__all__ = [
    "Location",
    "NewsItem",
    "NewsQuery",
    "NewsResult",
    "PriceRecord",
    "QuoteRecord",
    "Record",
    "SourceFamily",
    "WEATHER_CODES",
    "WeatherRecord",
    "describe_weather_code",
    "ConfigurationError",
    "InvalidArgumentError",
    "NotFoundError",
    "SourceError",
    "UnsupportedSourceError",
    "UpstreamError",
]
