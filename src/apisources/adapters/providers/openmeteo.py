# src/apisources/adapters/providers/openmeteo.py
"""
Open-Meteo API Provider for Current Weather

This module implements the Open-Meteo client. A call resolves the location
first (geocoding a place name, or taking coordinates as given), then fetches
the current conditions from the forecast endpoint and normalizes them into
a WeatherRecord. The two requests are always made one after the other.

No API key is needed.

Files that USE this module:
- apisources.application.source_client (SourceClient registers it as "openmeteo")
- tests.test_providers (unit tests)

Files that this module USES:
- apisources.config (default endpoint URLs and HTTP timeout)
- apisources.domain (records, weather-code table and error kinds)
- apisources.shared.validators (numeric checks)
"""
import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

import requests

from apisources.config import settings
from apisources.domain.errors import InvalidArgumentError, NotFoundError, UpstreamError
from apisources.domain.models import (
    UNKNOWN_WEATHER,
    Location,
    WeatherRecord,
    describe_weather_code,
    utc_now_iso,
)
from apisources.shared.validators import is_number

log = logging.getLogger(__name__)

SOURCE_NAME = "openmeteo"

CURRENT_FIELDS = "temperature_2m,wind_speed_10m,wind_direction_10m,weather_code"


class OpenMeteoProvider:
    """
    Client for the Open-Meteo geocoding and forecast endpoints.

    Accepts either a free-text place name ("stockholm") or a mapping
    {"latitude": 40.7128, "longitude": -74.006, "name": "New York"}.
    """

    def __init__(
        self,
        forecast_url: Optional[str] = None,
        geocoding_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        """
        Initialize Open-Meteo API provider.

        Args:
            forecast_url: Optional forecast endpoint (defaults to settings.openmeteo_forecast_url)
            geocoding_url: Optional geocoding endpoint (defaults to settings.openmeteo_geocoding_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
        """
        self.forecast_url = forecast_url or settings.openmeteo_forecast_url
        self.geocoding_url = geocoding_url or settings.openmeteo_geocoding_url
        self.timeout = timeout or settings.http_timeout_seconds

    @staticmethod
    def get_weather_description(code: Any) -> str:
        """Map a weather code to its label ("unknown" if not in the table)."""
        return describe_weather_code(code)

    def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        GET an Open-Meteo endpoint and decode the JSON body.

        Raises:
            UpstreamError: On non-2xx responses or a non-JSON body
            requests.exceptions.RequestException: On connection-level failures
        """
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            reason = _error_reason(e.response) or str(e)
            log.error("Open-Meteo HTTP error %s: %s", status, reason)
            raise UpstreamError(f"Open-Meteo API Error: {status} - {reason}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            log.error("Open-Meteo request failed: %s", e)
            raise

        try:
            data = resp.json()
        except ValueError as e:
            log.error("Open-Meteo returned invalid JSON: %s", e)
            raise UpstreamError(f"Open-Meteo: invalid JSON in response: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamError("Open-Meteo: unexpected response type")
        return data

    def resolve_location(self, place_or_coordinates: Union[str, Mapping, None]) -> Location:
        """
        Turn a place name or coordinates into a Location.

        Coordinates are passed through without a request; a place name is
        geocoded to its single best match.

        Args:
            place_or_coordinates: Place name, or mapping with latitude/longitude (and optional name)

        Returns:
            Location with coordinates and display name

        Raises:
            InvalidArgumentError: If coordinates are not numbers or the place name is empty
            NotFoundError: If geocoding finds no match
        """
        query = place_or_coordinates
        if isinstance(query, Mapping) and "latitude" in query and "longitude" in query:
            latitude = query["latitude"]
            longitude = query["longitude"]
            if not is_number(latitude) or not is_number(longitude):
                raise InvalidArgumentError("Open-Meteo: latitude/longitude must be numbers")
            name = query.get("name") or f"{latitude},{longitude}"
            return Location(latitude=latitude, longitude=longitude, name=str(name))

        if isinstance(query, Mapping):
            place = str(query.get("name") or "").strip()
        else:
            place = "" if query is None else str(query).strip()
        if not place:
            raise InvalidArgumentError("Open-Meteo: place is required")

        log.info("Geocoding %r via Open-Meteo", place)
        data = self._get_json(self.geocoding_url, {"name": place, "count": 1, "format": "json"})

        results = data.get("results") or []
        if not results:
            log.warning("Open-Meteo found no match for %r", place)
            raise NotFoundError(f'Open-Meteo: could not geocode "{place}"')

        first = results[0]
        log.debug("Geocoded %r to %s,%s", place, first.get("latitude"), first.get("longitude"))
        return Location(
            latitude=first.get("latitude"),
            longitude=first.get("longitude"),
            name=first.get("name") or place,
        )

    def get_current(self, place_or_coordinates: Union[str, Mapping, None]) -> WeatherRecord:
        """
        Get current conditions for a place name or coordinates.

        Args:
            place_or_coordinates: Place name, or mapping with latitude/longitude (and optional name)

        Returns:
            WeatherRecord; numeric fields missing upstream are None

        Raises:
            InvalidArgumentError: If the location input is invalid
            NotFoundError: If the place name cannot be geocoded
            UpstreamError: If the forecast lacks a "current" object or the request fails
        """
        location = self.resolve_location(place_or_coordinates)

        log.info("Fetching Open-Meteo current weather for %s", location.name)
        data = self._get_json(
            self.forecast_url,
            {
                "latitude": location.latitude,
                "longitude": location.longitude,
                "current": CURRENT_FIELDS,
                "wind_speed_unit": "ms",
                "timezone": "UTC",
            },
        )

        current = data.get("current")
        if not isinstance(current, Mapping):
            log.error("Open-Meteo response missing 'current': %s", data)
            raise UpstreamError("Open-Meteo: missing current weather in response")

        weather_code = current.get("weather_code")
        weather = describe_weather_code(weather_code) if weather_code is not None else UNKNOWN_WEATHER

        return WeatherRecord(
            location=location.name,
            latitude=location.latitude,
            longitude=location.longitude,
            temperature_c=_number_or_none(current.get("temperature_2m")),
            wind_speed_mps=_number_or_none(current.get("wind_speed_10m")),
            wind_direction_deg=_number_or_none(current.get("wind_direction_10m")),
            weather_code=weather_code,
            weather=weather,
            timestamp=current.get("time") or utc_now_iso(),
            source=SOURCE_NAME,
        )


def _number_or_none(value: Any) -> Optional[float]:
    return value if is_number(value) else None


def _error_reason(resp: Optional[requests.Response]) -> Optional[str]:
    # Open-Meteo errors look like {"error": true, "reason": "..."}
    if resp is None:
        return None
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("reason"):
        return str(body["reason"])
    return None
