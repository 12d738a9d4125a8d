# tests/test_models.py
"""
Model and Utility Tests - Unit Tests for Records, Settings and Helpers

This module contains unit tests for the weather-code table, record
serialization, lenient number parsing, settings validation and logging
setup.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- apisources.domain.models (records and weather-code table)
- apisources.shared.validators (parsing and validation helpers)
- apisources.shared.logging_conf (setup_logging)
- apisources.config (Settings)
- pytest (testing framework)
"""
import logging  # Standard library logging (inspecting configured handlers)
import logging.handlers  # RotatingFileHandler type check
import math  # NaN checks

import pytest  # Testing framework for writing and running tests
from pydantic import ValidationError  # Raised for invalid settings

from apisources.config import Settings  # Settings class to validate
from apisources.domain.models import (
    WEATHER_CODES,
    NewsItem,
    NewsResult,
    PriceRecord,
    WeatherRecord,
    describe_weather_code,
    utc_now_iso,
)
from apisources.shared.logging_conf import setup_logging  # Logging setup to test
from apisources.shared.validators import (
    is_number,
    is_query_shape,
    parse_float,
    parse_int,
    validate_http_url,
)


class TestWeatherCodes:
    def test_table(self):
        expected = {
            0: "clear", 1: "mostly_clear", 2: "partly_cloudy", 3: "overcast",
            45: "foggy", 48: "foggy",
            51: "drizzling", 53: "drizzling", 55: "drizzling",
            61: "raining", 63: "raining", 65: "raining",
            71: "snowing", 73: "snowing", 75: "snowing", 77: "snowing",
            80: "light_rain", 81: "light_rain", 82: "heavy_rain",
            85: "light_snow", 86: "heavy_snow",
            95: "thunderstorm", 96: "thunderstorm", 99: "thunderstorm",
        }
        assert WEATHER_CODES == expected

    def test_clear_and_unknown(self):
        assert describe_weather_code(0) == "clear"
        assert describe_weather_code(999) == "unknown"

    def test_odd_inputs(self):
        assert describe_weather_code(None) == "unknown"
        assert describe_weather_code("0") == "unknown"
        assert describe_weather_code(False) == "unknown"
        assert describe_weather_code(95.0) == "thunderstorm"


class TestRecords:
    def test_price_record_to_dict(self):
        record = PriceRecord(symbol="AAPL", price=187.25, timestamp="2025-10-06T14:30:00.000Z", source="twelvedata")
        assert record.to_dict() == {
            "symbol": "AAPL",
            "price": 187.25,
            "timestamp": "2025-10-06T14:30:00.000Z",
            "source": "twelvedata",
        }

    def test_weather_record_to_dict_keys(self):
        record = WeatherRecord(
            location="Oslo", latitude=59.9, longitude=10.7, temperature_c=None, wind_speed_mps=4.0,
            wind_direction_deg=180, weather_code=3, weather="overcast", timestamp="t", source="openmeteo",
        )
        data = record.to_dict()
        assert list(data) == [
            "location", "latitude", "longitude", "temperatureC", "windSpeedMps",
            "windDirectionDeg", "weatherCode", "weather", "timestamp", "source",
        ]
        assert data["temperatureC"] is None

    def test_news_result_total_follows_items(self):
        result = NewsResult(query="q", lang="en", country="US", items=(NewsItem(title="a"), NewsItem()))
        assert result.total == 2
        data = result.to_dict()
        assert data["total"] == 2
        assert data["items"][1] == {"title": None, "link": None, "published": None, "source": None, "snippet": None}

    def test_records_are_immutable(self):
        record = PriceRecord(symbol="AAPL", price=1.0, timestamp="t", source="s")
        with pytest.raises(AttributeError):
            record.price = 2.0

    def test_utc_now_iso_format(self):
        stamp = utc_now_iso()
        assert stamp.endswith("Z")
        assert len(stamp) == len("2025-10-06T14:30:00.000Z")


class TestNumberParsing:
    def test_parse_float(self):
        assert parse_float("187.25") == 187.25
        assert parse_float(3) == 3.0
        assert parse_float("12.5abc") == 12.5
        assert parse_float(" -0.79") == -0.79
        assert parse_float("1e3") == 1000.0
        assert math.isnan(parse_float("abc"))
        assert math.isnan(parse_float(None))
        assert math.isnan(parse_float(""))

    def test_parse_int(self):
        assert parse_int("51234567") == 51234567
        assert parse_int("12.9") == 12
        assert parse_int(7.8) == 7
        assert parse_int("abc") is None
        assert parse_int(None) is None
        assert parse_int(float("nan")) is None

    def test_is_number(self):
        assert is_number(1)
        assert is_number(-74.006)
        assert not is_number(True)
        assert not is_number("1")

    def test_is_query_shape(self):
        assert is_query_shape("x")
        assert is_query_shape({"q": "x"})
        assert not is_query_shape(None)
        assert not is_query_shape(["x"])


class TestValidators:
    def test_validate_http_url(self):
        assert validate_http_url("https://api.twelvedata.com")
        assert validate_http_url("http://localhost:8080/rss")
        assert not validate_http_url("ftp://example.com")
        assert not validate_http_url("")


class TestSettings:
    def test_defaults(self):
        settings = Settings(TWELVEDATA_API_KEY="", LOG_LEVEL="info")
        assert settings.twelvedata_api_key == ""
        assert settings.log_level == "INFO"
        assert settings.googlenews_base_url.startswith("https://")

    def test_urls_lose_trailing_slash(self):
        settings = Settings(TWELVEDATA_BASE_URL="https://example.com/api/")
        assert settings.twelvedata_base_url == "https://example.com/api"

    def test_short_api_key_loads(self):
        settings = Settings(TWELVEDATA_API_KEY="demo")
        assert settings.twelvedata_api_key == "demo"

    def test_api_key_is_trimmed(self):
        settings = Settings(TWELVEDATA_API_KEY="  abc123  ")
        assert settings.twelvedata_api_key == "abc123"

    def test_invalid_timeout(self):
        with pytest.raises(ValidationError):
            Settings(HTTP_TIMEOUT_SECONDS=0)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="chatty")


class TestLoggingSetup:
    def test_file_logging(self, tmp_path):
        setup_logging(level="DEBUG", log_dir=tmp_path, log_stdout=False)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert (tmp_path / "apisources.log").exists()
        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)

        for handler in root.handlers:
            handler.close()
        logging.basicConfig(force=True)

    def test_log_file_and_stdout(self, tmp_path):
        log_path = tmp_path / "nested" / "run.log"
        setup_logging(level="info", log_file=log_path, log_stdout=True)

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert log_path.exists()
        assert len(root.handlers) == 2
        assert logging.getLogger("urllib3").level == logging.INFO

        for handler in root.handlers:
            handler.close()
        logging.basicConfig(force=True)

    def test_defaults_to_stdout(self):
        setup_logging(level=logging.WARNING, log_stdout=False)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        logging.basicConfig(force=True)
