# src/apisources/adapters/providers/base.py
"""
Source Capability Interfaces

This module defines the capabilities a source adapter can expose, one per
source family. They are structural: an adapter does not have to inherit
from them, it only has to provide the methods. The registry checks them
once, when a source is registered.

Files that USE this module:
- apisources.adapters.providers.twelvedata (TwelveDataProvider implements QuoteSource)
- apisources.adapters.providers.openmeteo (OpenMeteoProvider implements WeatherSource)
- apisources.adapters.providers.googlenews (GoogleNewsProvider implements NewsSource)
- apisources.application.registry (capability checks at registration)

Files that this module USES:
- apisources.domain.models (record types and SourceFamily)
"""
from typing import Any, Dict, Mapping, Protocol, Type, Union, runtime_checkable

from apisources.domain.models import NewsResult, PriceRecord, QuoteRecord, SourceFamily, WeatherRecord


@runtime_checkable
class QuoteSource(Protocol):
    def get_current_price(self, symbol: str) -> PriceRecord:
        """Return the latest price for a ticker symbol."""
        ...

    def get_quote(self, symbol: str) -> QuoteRecord:
        """Return the detailed quote for a ticker symbol."""
        ...


@runtime_checkable
class WeatherSource(Protocol):
    def get_current(self, place_or_coordinates: Union[str, Mapping[str, Any]]) -> WeatherRecord:
        """Return current conditions for a place name or {latitude, longitude, name?}."""
        ...


@runtime_checkable
class NewsSource(Protocol):
    def get_headlines(self, query: Union[str, Mapping[str, Any]]) -> NewsResult:
        """Return headlines for search text or {q, lang?, country?, max?}."""
        ...


@runtime_checkable
class CustomSource(Protocol):
    def fetch(self, query: str, **options: Any) -> Any:
        """Return whatever record the custom source produces for a query."""
        ...


# Checked in this order when a family is inferred
CAPABILITIES: Dict[SourceFamily, Type[Any]] = {
    SourceFamily.QUOTE: QuoteSource,
    SourceFamily.WEATHER: WeatherSource,
    SourceFamily.NEWS: NewsSource,
    SourceFamily.CUSTOM: CustomSource,
}
