# src/apisources/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for the external data APIs and the
capability interfaces each source family implements.
"""

from apisources.adapters.providers.base import (
    CAPABILITIES,
    CustomSource,
    NewsSource,
    QuoteSource,
    WeatherSource,
)
from apisources.adapters.providers.googlenews import GoogleNewsProvider
from apisources.adapters.providers.openmeteo import OpenMeteoProvider
from apisources.adapters.providers.twelvedata import TwelveDataProvider

__all__ = [
    "CAPABILITIES",
    "CustomSource",
    "NewsSource",
    "QuoteSource",
    "WeatherSource",
    "GoogleNewsProvider",
    "OpenMeteoProvider",
    "TwelveDataProvider",
]
