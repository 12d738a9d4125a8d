# src/apisources/domain/models.py
"""
Domain Models - Normalized Records

This module contains the records every adapter normalizes into:
- Price and quote records (Twelve Data)
- Weather records and the weather-code table (Open-Meteo)
- News items and results (Google News)
- The source family tag used by the registry

Records are immutable and live for a single call. to_dict() returns the
stable wire shape (camelCase keys) shared by all callers.

Files that USE this module:
- apisources.adapters.providers.* (adapters create records)
- apisources.application.* (registry and facade use SourceFamily)
- tests.* (tests assert on record fields)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Decorator for creating data classes
from datetime import datetime, timezone  # Date/time utilities for timestamps
from enum import Enum  # Source family tags
from typing import Any, Dict, List, Optional, Tuple, Union  # Type hints


class SourceFamily(str, Enum):
    """Kind of adapter registered under a source name."""
    QUOTE = "quote"
    WEATHER = "weather"
    NEWS = "news"
    CUSTOM = "custom"


# Open-Meteo WMO weather codes collapsed to simple labels
WEATHER_CODES: Dict[int, str] = {
    0: "clear",
    1: "mostly_clear",
    2: "partly_cloudy",
    3: "overcast",
    45: "foggy",
    48: "foggy",
    51: "drizzling",
    53: "drizzling",
    55: "drizzling",
    61: "raining",
    63: "raining",
    65: "raining",
    71: "snowing",
    73: "snowing",
    75: "snowing",
    77: "snowing",
    80: "light_rain",
    81: "light_rain",
    82: "heavy_rain",
    85: "light_snow",
    86: "heavy_snow",
    95: "thunderstorm",
    96: "thunderstorm",
    99: "thunderstorm",
}

UNKNOWN_WEATHER = "unknown"


def describe_weather_code(code: Any) -> str:
    """
    Map a weather code to its label.

    Args:
        code: Weather code from the forecast (int, or None when absent)

    Returns:
        Label from WEATHER_CODES, or "unknown" for anything not in the table
    """
    if isinstance(code, bool):
        return UNKNOWN_WEATHER
    if isinstance(code, float) and code.is_integer():
        code = int(code)
    return WEATHER_CODES.get(code, UNKNOWN_WEATHER) if isinstance(code, int) else UNKNOWN_WEATHER


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision and Z suffix."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


@dataclass(frozen=True)
class PriceRecord:
    """
    Latest traded price for a symbol.

    Attributes:
        symbol: Upper-cased ticker symbol
        price: Parsed price (NaN if upstream sent a non-numeric value)
        timestamp: Time of the call (not an upstream time), ISO-8601 UTC
        source: Name of the source that produced the record
    """
    symbol: str
    price: float
    timestamp: str
    source: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "price": self.price,
            "timestamp": self.timestamp,
            "source": self.source,
        }


@dataclass(frozen=True)
class QuoteRecord:
    """Detailed quote for a symbol; numeric fields are NaN when upstream is non-numeric."""
    symbol: Optional[str]
    name: Optional[str]
    price: float
    change: float
    change_percent: float
    volume: Optional[int]
    high: float
    low: float
    open: float
    previous_close: float
    timestamp: str
    source: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "price": self.price,
            "change": self.change,
            "changePercent": self.change_percent,
            "volume": self.volume,
            "high": self.high,
            "low": self.low,
            "open": self.open,
            "previousClose": self.previous_close,
            "timestamp": self.timestamp,
            "source": self.source,
        }


@dataclass(frozen=True)
class Location:
    """Resolved place: coordinates plus a display name."""
    latitude: float
    longitude: float
    name: str


@dataclass(frozen=True)
class WeatherRecord:
    """
    Current conditions at a location.

    Missing numeric fields are None rather than zero.
    """
    location: str
    latitude: float
    longitude: float
    temperature_c: Optional[float]
    wind_speed_mps: Optional[float]
    wind_direction_deg: Optional[float]
    weather_code: Optional[int]
    weather: str
    timestamp: str
    source: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": self.location,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "temperatureC": self.temperature_c,
            "windSpeedMps": self.wind_speed_mps,
            "windDirectionDeg": self.wind_direction_deg,
            "weatherCode": self.weather_code,
            "weather": self.weather,
            "timestamp": self.timestamp,
            "source": self.source,
        }


@dataclass(frozen=True)
class NewsQuery:
    """Normalized headline search."""
    q: str
    lang: str = "en"
    country: str = "US"
    max: int = 10


@dataclass(frozen=True)
class NewsItem:
    """One feed entry; any field may be None when absent upstream."""
    title: Optional[str] = None
    link: Optional[str] = None
    published: Optional[str] = None
    source: Optional[str] = None
    snippet: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "published": self.published,
            "source": self.source,
            "snippet": self.snippet,
        }


@dataclass(frozen=True)
class NewsResult:
    """
    Headline search result.

    Attributes:
        query: Search text that was sent
        lang: Language code used
        country: Country code used
        items: Feed entries, truncated to the requested maximum
        source: Name of the source that produced the record
    """
    query: str
    lang: str
    country: str
    items: Tuple[NewsItem, ...] = field(default_factory=tuple)
    source: str = "googlenews"

    @property
    def total(self) -> int:
        """Number of items returned (after truncation), not the upstream total."""
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        items: List[Dict[str, Any]] = [item.to_dict() for item in self.items]
        return {
            "query": self.query,
            "lang": self.lang,
            "country": self.country,
            "items": items,
            "total": self.total,
            "source": self.source,
        }


Record = Union[PriceRecord, QuoteRecord, WeatherRecord, NewsResult]
