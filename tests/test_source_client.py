# tests/test_source_client.py
"""
Source Client Tests - Unit Tests for the Facade and Registry

This module contains unit tests for SourceClient and SourceRegistry:
source lookup, query validation, dispatch by source family, runtime
registration of custom sources and re-raising adapter failures with
context.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- apisources.application.source_client (SourceClient facade)
- apisources.application.registry (SourceRegistry, resolve_family)
- apisources.app (build_client wiring)
- unittest.mock (Mock for API mocking)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock, patch  # Mock objects and patching for testing without real API calls

from apisources.app import build_client  # Composition root helper
from apisources.application.registry import SourceRegistry, resolve_family  # Registry to test
from apisources.application.source_client import SourceClient  # Facade to test
from apisources.config import Settings  # Settings for build_client
from apisources.domain.errors import (
    ConfigurationError,
    InvalidArgumentError,
    NotFoundError,
    SourceError,
    UnsupportedSourceError,
    UpstreamError,
)
from apisources.domain.models import NewsResult, PriceRecord, QuoteRecord, SourceFamily, WeatherRecord

BUILT_INS = ["twelvedata", "openmeteo", "googlenews"]


class StubQuoteSource:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def get_current_price(self, symbol):
        self.calls.append(("price", symbol))
        if self.error:
            raise self.error
        return PriceRecord(symbol=symbol.upper(), price=1.5, timestamp="t", source="stub")

    def get_quote(self, symbol):
        self.calls.append(("quote", symbol))
        return QuoteRecord(
            symbol=symbol.upper(), name="Stub", price=1.5, change=0.1, change_percent=0.2,
            volume=10, high=2.0, low=1.0, open=1.2, previous_close=1.4, timestamp="t", source="stub",
        )


class StubWeatherSource:
    def __init__(self):
        self.queries = []

    def get_current(self, place_or_coordinates):
        self.queries.append(place_or_coordinates)
        return "sunny"


class StubCustomSource:
    def __init__(self):
        self.calls = []

    def fetch(self, query, **options):
        self.calls.append((query, options))
        return {"echo": query, "options": options}


class TestSourceClientSources:
    def test_built_in_sources_in_order(self):
        client = SourceClient()
        assert client.get_available_sources() == BUILT_INS

    def test_built_in_families(self):
        client = SourceClient()
        families = [client.registry.lookup(name).family for name in BUILT_INS]
        assert families == [SourceFamily.QUOTE, SourceFamily.WEATHER, SourceFamily.NEWS]

    def test_unsupported_source_lists_available(self):
        client = SourceClient()
        with pytest.raises(UnsupportedSourceError) as exc_info:
            client.get("unsupported", "X")
        message = str(exc_info.value)
        assert "Unsupported API source: unsupported" in message
        assert "Available sources: twelvedata, openmeteo, googlenews" in message

    def test_unsupported_source_lists_added_sources(self):
        client = SourceClient()
        client.add_source("Echo", StubCustomSource())
        with pytest.raises(UnsupportedSourceError, match="googlenews, echo"):
            client.get("missing", "X")

    @pytest.mark.parametrize("source", ["", None, 42])
    def test_invalid_source_name(self, source):
        with pytest.raises(InvalidArgumentError, match="Source must be a non-empty string"):
            SourceClient().get(source, "AAPL")

    def test_source_name_is_case_insensitive(self):
        client = SourceClient()
        stub = StubQuoteSource()
        client.add_source("twelvedata", stub)
        record = client.get("TwelveData", "aapl")
        assert record.symbol == "AAPL"


class TestSourceClientValidation:
    @pytest.mark.parametrize("query", ["", None, 123, {"symbol": "AAPL"}])
    def test_quote_query_must_be_non_empty_string(self, query):
        client = SourceClient(twelvedata_api_key="test-key-1234567890")
        with patch('apisources.adapters.providers.twelvedata.requests.get') as mock_get:
            with pytest.raises(InvalidArgumentError, match="Symbol must be a non-empty string"):
                client.get("twelvedata", query)
            mock_get.assert_not_called()

    @pytest.mark.parametrize("source", ["openmeteo", "googlenews"])
    @pytest.mark.parametrize("query", [None, 42, ["a"]])
    def test_weather_and_news_need_string_or_mapping(self, source, query):
        with pytest.raises(InvalidArgumentError, match="provide a string or options object"):
            SourceClient().get(source, query)

    def test_custom_query_must_be_non_empty_string(self):
        client = SourceClient()
        stub = StubCustomSource()
        client.add_source("echo", stub)
        with pytest.raises(InvalidArgumentError):
            client.get("echo", "")
        assert stub.calls == []


class TestSourceClientDispatch:
    def test_price_path_without_quote_option(self):
        client = SourceClient()
        stub = StubQuoteSource()
        client.add_source("twelvedata", stub)

        record = client.get("twelvedata", "AAPL")

        assert isinstance(record, PriceRecord)
        assert stub.calls == [("price", "AAPL")]

    def test_quote_path_with_quote_option(self):
        client = SourceClient()
        stub = StubQuoteSource()
        client.add_source("twelvedata", stub)

        record = client.get("twelvedata", "AAPL", quote=True)

        assert isinstance(record, QuoteRecord)
        assert stub.calls == [("quote", "AAPL")]

    def test_get_quote_is_get_with_quote_option(self):
        client = SourceClient()
        stub = StubQuoteSource()
        client.add_source("twelvedata", stub)

        record = client.get_quote("twelvedata", "MSFT")

        assert isinstance(record, QuoteRecord)
        assert stub.calls == [("quote", "MSFT")]

    @patch('apisources.adapters.providers.twelvedata.requests.get')
    def test_twelvedata_price_and_quote_shapes(self, mock_get):
        def fake_get(url, params=None, timeout=None):
            resp = Mock()
            resp.raise_for_status.return_value = None
            if url.endswith("/price"):
                resp.json.return_value = {"price": "187.25"}
            else:
                resp.json.return_value = {"symbol": "AAPL", "name": "Apple Inc", "price": "187.25", "volume": "100"}
            return resp

        mock_get.side_effect = fake_get
        client = SourceClient(twelvedata_api_key="test-key-1234567890")

        price = client.get("twelvedata", "AAPL")
        quote = client.get("twelvedata", "AAPL", quote=True)

        assert isinstance(price, PriceRecord)
        assert set(price.to_dict()) == {"symbol", "price", "timestamp", "source"}
        assert isinstance(quote, QuoteRecord)
        assert quote.name == "Apple Inc"
        assert quote.volume == 100
        assert "previousClose" in quote.to_dict()

    @patch('apisources.adapters.providers.openmeteo.requests.get')
    def test_weather_coordinates_skip_geocoding(self, mock_get):
        mock_response = Mock()
        mock_response.raise_for_status.return_value = None
        mock_response.json.return_value = {"current": {"temperature_2m": 21.0, "weather_code": 0}}
        mock_get.return_value = mock_response

        record = SourceClient().get("openmeteo", {"latitude": 40.7128, "longitude": -74.0060, "name": "New York"})

        assert isinstance(record, WeatherRecord)
        assert record.location == "New York"
        assert record.weather == "clear"
        mock_get.assert_called_once()
        assert "forecast" in mock_get.call_args[0][0]

    @patch('apisources.adapters.providers.googlenews.requests.get')
    def test_news_truncates_to_max(self, mock_get):
        items = "".join(
            f"<item><title>Story {i}</title><link>https://news.example.com/{i}</link></item>" for i in range(5)
        )
        mock_response = Mock()
        mock_response.raise_for_status.return_value = None
        mock_response.content = (
            f'<?xml version="1.0"?><rss version="2.0"><channel><title>News</title>{items}</channel></rss>'
        ).encode("utf-8")
        mock_get.return_value = mock_response

        result = SourceClient().get("googlenews", {"q": "Apple", "max": 2})

        assert isinstance(result, NewsResult)
        assert len(result.items) <= 2
        assert result.total == len(result.items)
        assert result.query == "Apple"

    def test_weather_stub_receives_query(self):
        client = SourceClient()
        stub = StubWeatherSource()
        client.add_source("myweather", stub)

        assert client.get("myweather", "Oslo") == "sunny"
        assert stub.queries == ["Oslo"]


class TestSourceClientErrors:
    def test_adapter_error_is_wrapped_with_context(self):
        client = SourceClient()
        original = UpstreamError("TwelveData API Error: symbol not found", status_code=400)
        client.add_source("twelvedata", StubQuoteSource(error=original))

        with pytest.raises(UpstreamError) as exc_info:
            client.get("twelvedata", "BAD")

        err = exc_info.value
        assert str(err) == (
            "Failed to fetch data from twelvedata for BAD: TwelveData API Error: symbol not found"
        )
        assert err.__cause__ is original
        assert err.source == "twelvedata"
        assert err.query == "BAD"
        assert err.status_code == 400

    def test_foreign_error_becomes_upstream_error(self):
        client = SourceClient()
        client.add_source("twelvedata", StubQuoteSource(error=RuntimeError("socket closed")))

        with pytest.raises(UpstreamError, match="Failed to fetch data from twelvedata for AAPL: socket closed"):
            client.get("twelvedata", "AAPL")

    def test_missing_api_key_is_configuration_error(self):
        client = SourceClient()
        with patch('apisources.adapters.providers.twelvedata.requests.get') as mock_get:
            with pytest.raises(ConfigurationError, match="Failed to fetch data from twelvedata for AAPL"):
                client.get("twelvedata", "AAPL")
            mock_get.assert_not_called()

    def test_bad_coordinates_keep_invalid_argument_kind(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            SourceClient().get("openmeteo", {"latitude": "bad", "longitude": -74})

        message = str(exc_info.value)
        assert "openmeteo" in message
        assert "[coordinates]" in message
        assert "latitude/longitude must be numbers" in message

    @patch('apisources.adapters.providers.openmeteo.requests.get')
    def test_geocode_miss_keeps_not_found_kind(self, mock_get):
        mock_response = Mock()
        mock_response.raise_for_status.return_value = None
        mock_response.json.return_value = {}
        mock_get.return_value = mock_response

        with pytest.raises(NotFoundError, match='openmeteo for Atlantis: Open-Meteo: could not geocode "Atlantis"'):
            SourceClient().get("openmeteo", "Atlantis")

    def test_all_errors_share_base_class(self):
        client = SourceClient()
        client.add_source("twelvedata", StubQuoteSource(error=ValueError("boom")))
        with pytest.raises(SourceError, match="boom"):
            client.get("twelvedata", "AAPL")


class TestAddSource:
    def test_custom_source_dispatch(self):
        client = SourceClient()
        stub = StubCustomSource()

        entry = client.add_source("Custom", stub)

        assert entry.family is SourceFamily.CUSTOM
        assert client.get_available_sources() == BUILT_INS + ["custom"]
        result = client.get("custom", "hello", limit=3)
        assert result == {"echo": "hello", "options": {"limit": 3}}
        assert stub.calls == [("hello", {"limit": 3})]

    def test_overwrite_keeps_position(self):
        client = SourceClient()
        client.add_source("openmeteo", StubWeatherSource())
        assert client.get_available_sources() == BUILT_INS

    @pytest.mark.parametrize("name", ["", None, 7])
    def test_invalid_name(self, name):
        with pytest.raises(InvalidArgumentError, match="Source name must be a non-empty string"):
            SourceClient().add_source(name, StubCustomSource())

    @pytest.mark.parametrize("adapter", [None, "adapter", 42, True])
    def test_adapter_must_be_object(self, adapter):
        with pytest.raises(InvalidArgumentError, match="API instance must be an object"):
            SourceClient().add_source("custom", adapter)

    def test_adapter_without_capability_rejected(self):
        with pytest.raises(InvalidArgumentError, match="must provide"):
            SourceClient().add_source("custom", object())

    def test_explicit_family_is_checked(self):
        with pytest.raises(InvalidArgumentError, match="does not provide the news capability"):
            SourceClient().add_source("custom", StubCustomSource(), family="news")

    def test_explicit_family_accepted(self):
        entry = SourceClient().add_source("sky", StubWeatherSource(), family=SourceFamily.WEATHER)
        assert entry.family is SourceFamily.WEATHER

    def test_unknown_family(self):
        with pytest.raises(InvalidArgumentError, match="Unknown source family"):
            SourceClient().add_source("custom", StubCustomSource(), family="stocks")


class TestSourceRegistry:
    def test_resolve_family_inference(self):
        assert resolve_family(StubQuoteSource()) is SourceFamily.QUOTE
        assert resolve_family(StubWeatherSource()) is SourceFamily.WEATHER
        assert resolve_family(StubCustomSource()) is SourceFamily.CUSTOM

    def test_register_lookup_and_contains(self):
        registry = SourceRegistry()
        registry.register("Alpha", StubCustomSource())
        registry.register("beta", StubWeatherSource())

        assert registry.names() == ["alpha", "beta"]
        assert "ALPHA" in registry
        assert "gamma" not in registry
        assert registry.lookup("Beta").family is SourceFamily.WEATHER
        assert registry.lookup("gamma") is None
        assert len(registry) == 2


class TestBuildClient:
    def test_api_key_injected_from_settings(self):
        settings = Settings(TWELVEDATA_API_KEY="settings-key-123456")
        client = build_client(settings)
        assert client.registry.lookup("twelvedata").adapter.api_key == "settings-key-123456"

    def test_explicit_api_key_wins(self):
        settings = Settings(TWELVEDATA_API_KEY="settings-key-123456")
        client = build_client(settings, api_key="explicit-key-123456")
        assert client.registry.lookup("twelvedata").adapter.api_key == "explicit-key-123456"

    def test_timeouts_from_settings(self):
        settings = Settings(HTTP_TIMEOUT_SECONDS=7, NEWS_TIMEOUT_SECONDS=4)
        client = build_client(settings)
        assert client.registry.lookup("openmeteo").adapter.timeout == 7
        assert client.registry.lookup("googlenews").adapter.timeout == 4
