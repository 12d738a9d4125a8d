# src/apisources/application/source_client.py
"""
Source Client - Single Entry Point for All Data Sources

This module contains the facade callers use. It validates the source name
and query, routes the call to the adapter registered for the source (by
the family it was tagged with at registration), and re-raises adapter
failures with the source and query attached.

Files that USE this module:
- apisources (package exports SourceClient)
- apisources.app (build_client wires it from settings)
- tests.test_source_client (unit tests)

Files that this module USES:
- apisources.adapters.providers.* (the three built-in adapters)
- apisources.application.registry (SourceRegistry, RegisteredSource)
- apisources.domain (error kinds, SourceFamily, records)
- apisources.shared.validators (query shape checks)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
from typing import Any, List, Optional, Union  # Type hints

from apisources.adapters.providers.googlenews import GoogleNewsProvider  # Google News RSS adapter
from apisources.adapters.providers.openmeteo import OpenMeteoProvider  # Open-Meteo adapter
from apisources.adapters.providers.twelvedata import TwelveDataProvider  # Twelve Data adapter
from apisources.application.registry import RegisteredSource, SourceRegistry  # Named adapters
from apisources.domain.errors import (
    ConfigurationError,
    InvalidArgumentError,
    NotFoundError,
    SourceError,
    UnsupportedSourceError,
    UpstreamError,
)
from apisources.domain.models import SourceFamily  # Family tag used for dispatch
from apisources.shared.validators import is_query_shape  # str-or-mapping check

log = logging.getLogger(__name__)

# Error kinds kept as-is when an adapter failure is re-raised with context
_PRESERVED_KINDS = (InvalidArgumentError, ConfigurationError, UnsupportedSourceError, NotFoundError)


class SourceClient:
    """
    Facade over the registered data sources.

    Built-in sources, in order: "twelvedata" (quotes), "openmeteo" (weather)
    and "googlenews" (news). More can be added with add_source().
    """

    def __init__(
        self,
        twelvedata_api_key: Optional[str] = None,
        *,
        http_timeout: Optional[int] = None,
        news_timeout: Optional[int] = None,
    ):
        """
        Create a client with the three built-in sources.

        Args:
            twelvedata_api_key: Twelve Data API key; quote calls fail with
                ConfigurationError without one
            http_timeout: Optional timeout for the JSON APIs (defaults to settings)
            news_timeout: Optional timeout for the news feed (defaults to settings)
        """
        self.registry = SourceRegistry()
        self.registry.register(
            "twelvedata",
            TwelveDataProvider(api_key=twelvedata_api_key, timeout=http_timeout),
            SourceFamily.QUOTE,
        )
        self.registry.register("openmeteo", OpenMeteoProvider(timeout=http_timeout), SourceFamily.WEATHER)
        self.registry.register("googlenews", GoogleNewsProvider(timeout=news_timeout), SourceFamily.NEWS)

    def get(self, source: str, query: Any, **options: Any) -> Any:
        """
        Get data from a source.

        Args:
            source: Source name, case-insensitive (e.g. "twelvedata", "openmeteo")
            query: Ticker symbol, place name or search text; or a mapping such as
                {"latitude", "longitude", "name"} for weather or {"q", "lang", "country", "max"} for news
            **options: quote=True asks a quote source for the detailed quote;
                custom sources receive all options

        Returns:
            The adapter's record (PriceRecord, QuoteRecord, WeatherRecord, NewsResult, ...)

        Raises:
            InvalidArgumentError: If the source name or the query shape is invalid
            UnsupportedSourceError: If no source is registered under the name
            SourceError: Any adapter failure, re-raised with source and query context
        """
        if not source or not isinstance(source, str):
            raise InvalidArgumentError("Source must be a non-empty string")

        entry = self.registry.lookup(source)
        if entry is None:
            raise UnsupportedSourceError(
                f"Unsupported API source: {source}. Available sources: {', '.join(self.registry.names())}",
                source=source,
            )

        _validate_query(entry, query)

        log.debug("Dispatching %s query to %r", entry.family.value, entry.name)
        try:
            return _dispatch(entry, query, options)
        except Exception as e:
            wrapped = _with_context(e, source, query)
            log.error("%s", wrapped)
            raise wrapped from e

    def get_quote(self, source: str, query: str) -> Any:
        """Get the detailed quote from a quote source (get() with quote=True)."""
        return self.get(source, query, quote=True)

    def add_source(
        self,
        name: str,
        adapter: Any,
        family: Union[SourceFamily, str, None] = None,
    ) -> RegisteredSource:
        """
        Add (or replace) a source.

        The adapter does not have to subclass anything; it has to provide the
        methods of its family: get_current_price and get_quote (quote),
        get_current (weather), get_headlines (news) or fetch (custom).

        Args:
            name: Source name (stored lower-cased)
            adapter: Adapter object
            family: Optional explicit family; inferred from the adapter's methods when omitted

        Returns:
            The stored RegisteredSource

        Raises:
            InvalidArgumentError: If the name is empty, the adapter is not an object,
                or it provides none of the required methods
        """
        entry = self.registry.register(name, adapter, family)
        log.info("Source %r added (%s)", entry.name, entry.family.value)
        return entry

    def get_available_sources(self) -> List[str]:
        """Registered source names: built-ins first, then additions in order."""
        return self.registry.names()


def _validate_query(entry: RegisteredSource, query: Any) -> None:
    if entry.family in (SourceFamily.WEATHER, SourceFamily.NEWS):
        if not is_query_shape(query):
            raise InvalidArgumentError(
                f"For {entry.name}, provide a string or options object", source=entry.name, query=query
            )
    elif not query or not isinstance(query, str):
        raise InvalidArgumentError("Symbol must be a non-empty string", source=entry.name, query=query)


def _dispatch(entry: RegisteredSource, query: Any, options: dict) -> Any:
    adapter = entry.adapter
    if entry.family is SourceFamily.QUOTE:
        if options.get("quote"):
            return adapter.get_quote(query)
        return adapter.get_current_price(query)
    if entry.family is SourceFamily.WEATHER:
        return adapter.get_current(query)
    if entry.family is SourceFamily.NEWS:
        return adapter.get_headlines(query)
    return adapter.fetch(query, **options)


def _with_context(error: Exception, source: str, query: Any) -> SourceError:
    """Build the error re-raised by the facade: same kind, message prefixed with source and query."""
    label = query if isinstance(query, str) else "[coordinates]"
    message = f"Failed to fetch data from {source} for {label}: {error}"

    for kind in _PRESERVED_KINDS:
        if isinstance(error, kind):
            return kind(message, source=source, query=query)

    status_code = error.status_code if isinstance(error, UpstreamError) else None
    return UpstreamError(message, status_code=status_code, source=source, query=query)
