# src/apisources/app.py
"""
Application Entry Point - Client Wiring and Example Usage

This module is the composition root. It is the only place that reads the
environment (through settings) for the Twelve Data API key and injects it
into the client. Running it walks through each source once, the same calls
an application would make.

Files that USE this module:
- python -m apisources (module entry point)

Files that this module USES:
- apisources.shared.logging_conf (setup_logging for logging configuration)
- apisources.config (settings for the API key, timeouts and logging)
- apisources.application.source_client (SourceClient facade)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import logging  # Standard library for logging messages and errors
import sys  # System-specific parameters and functions for exit codes
from pprint import pformat  # Readable dumps of records
from typing import Optional  # Type hints for optional values

from apisources.application.source_client import SourceClient  # Facade over all sources
from apisources.config import Settings, settings as default_settings  # Environment-backed settings
from apisources.domain.errors import ConfigurationError, SourceError  # Error kinds
from apisources.shared.logging_conf import setup_logging  # Configure logging with file rotation

log = logging.getLogger(__name__)


def build_client(settings: Optional[Settings] = None, api_key: Optional[str] = None) -> SourceClient:
    """
    Create a SourceClient from settings.

    Args:
        settings: Settings to use (defaults to the global settings instance)
        api_key: Explicit Twelve Data API key; overrides TWELVEDATA_API_KEY

    Returns:
        A SourceClient with the three built-in sources
    """
    settings = settings or default_settings
    key = api_key or settings.twelvedata_api_key or None
    if not key:
        log.warning("TWELVEDATA_API_KEY is not set; twelvedata calls will fail")
    return SourceClient(
        twelvedata_api_key=key,
        http_timeout=settings.http_timeout_seconds,
        news_timeout=settings.news_timeout_seconds,
    )


def _show(title: str, record) -> None:
    data = record.to_dict() if hasattr(record, "to_dict") else record
    log.info("%s:\n%s", title, pformat(data, sort_dicts=False))


def run_examples(client: SourceClient) -> int:
    """
    Exercise every built-in source once.

    Returns:
        Number of calls that failed unexpectedly
    """
    failures = 0
    log.info("Available sources: %s", client.get_available_sources())

    calls = [
        ("Apple (AAPL) current price", lambda: client.get("twelvedata", "AAPL")),
        ("S&P 500 ETF (SPY) current price", lambda: client.get("twelvedata", "SPY")),
        ("Stockholm weather", lambda: client.get("openmeteo", "stockholm")),
        (
            "New York weather (coordinates)",
            lambda: client.get("openmeteo", {"latitude": 40.7128, "longitude": -74.0060, "name": "New York"}),
        ),
        (
            "Google News (Apple)",
            lambda: client.get("googlenews", {"q": "Apple", "lang": "en", "country": "US", "max": 5}),
        ),
    ]
    for title, call in calls:
        try:
            _show(title, call())
        except SourceError as e:
            failures += 1
            log.error("%s failed: %s", title, e)
            if isinstance(e, ConfigurationError):
                log.info("Make sure TWELVEDATA_API_KEY is set in your .env file or as an environment variable.")

    expected_failures = [
        ("invalid symbol", lambda: client.get("twelvedata", "INVALID_SYMBOL_12345")),
        ("unsupported source", lambda: client.get("unsupported", "AAPL")),
    ]
    for title, call in expected_failures:
        try:
            call()
            log.warning("Expected %s to fail, but it succeeded", title)
        except SourceError as e:
            log.info("Expected error caught (%s): %s", title, e)

    return failures


def main() -> None:
    """Configure logging, build the client from settings and run the examples."""
    setup_logging(
        level=default_settings.log_level,
        log_file=default_settings.log_file,
        log_dir=default_settings.log_dir,
        max_bytes=default_settings.log_max_bytes,
        backup_count=default_settings.log_backup_count,
        log_stdout=default_settings.log_stdout,
    )
    client = build_client()
    failures = run_examples(client)
    if failures:
        log.warning("%d example call(s) failed", failures)
        sys.exit(1)


if __name__ == "__main__":
    main()
