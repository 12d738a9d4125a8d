# src/apisources/adapters/providers/twelvedata.py
"""
Twelve Data API Provider for Stock Prices and Quotes

This module implements the Twelve Data REST client. It fetches the latest
price (/price) or a detailed quote (/quote) for a ticker symbol and
normalizes the response into PriceRecord / QuoteRecord.

The API key is injected by the caller; this module never reads the
environment for it.

Files that USE this module:
- apisources.application.source_client (SourceClient registers it as "twelvedata")
- tests.test_providers (unit tests)

Files that this module USES:
- apisources.config (default base URL and HTTP timeout)
- apisources.domain (records and error kinds)
- apisources.shared.validators (lenient number parsing)
"""
import logging
import math
from typing import Any, Dict, Optional

import requests

from apisources.config import settings
from apisources.domain.errors import ConfigurationError, UpstreamError
from apisources.domain.models import PriceRecord, QuoteRecord, utc_now_iso
from apisources.shared.validators import parse_float, parse_int

log = logging.getLogger(__name__)

SOURCE_NAME = "twelvedata"


class TwelveDataProvider:
    """
    Client for the Twelve Data /price and /quote endpoints.

    Twelve Data reports most application errors with HTTP 200 and a body like
      {"code": 400, "message": "...", "status": "error"}
    so both the HTTP status and the payload status are checked.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        """
        Initialize Twelve Data API provider.

        Args:
            api_key: Twelve Data API key; required only when a request is made
            base_url: Optional custom API URL (defaults to settings.twelvedata_base_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
        """
        self.api_key = api_key or None
        self.base_url = (base_url or settings.twelvedata_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds

    def _require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(
                "TwelveData API key is required. Set TWELVEDATA_API_KEY environment variable "
                "or pass it to the constructor."
            )
        return self.api_key

    def _get(self, endpoint: str, symbol: str) -> Dict[str, Any]:
        """
        Call one Twelve Data endpoint for a symbol.

        Args:
            endpoint: Path below the base URL ("price" or "quote")
            symbol: Upper-cased ticker symbol

        Returns:
            Decoded JSON payload

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamError: On non-2xx responses, invalid JSON, or an error payload
            requests.exceptions.RequestException: On connection-level failures
        """
        api_key = self._require_api_key()
        url = f"{self.base_url}/{endpoint}"

        log.info("Fetching Twelve Data /%s for %s", endpoint, symbol)
        try:
            resp = requests.get(url, params={"symbol": symbol, "apikey": api_key}, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            message = _upstream_message(e.response) or str(e)
            log.error("Twelve Data HTTP error %s for %s: %s", status, symbol, message)
            raise UpstreamError(f"TwelveData API Error: {status} - {message}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            log.error("Twelve Data request failed for %s: %s", symbol, e)
            raise

        try:
            data = resp.json()
        except ValueError as e:
            log.error("Twelve Data returned invalid JSON: %s", e)
            raise UpstreamError(f"TwelveData API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            log.error("Twelve Data unexpected response type: %r", type(data))
            raise UpstreamError("TwelveData API returned non-object JSON")

        if data.get("status") == "error":
            log.warning("Twelve Data error payload for %s: %s", symbol, data.get("message"))
            raise UpstreamError(f"TwelveData API Error: {data.get('message')}", status_code=data.get("code"))

        return data

    def get_current_price(self, symbol: str) -> PriceRecord:
        """
        Get the latest price for a symbol.

        Args:
            symbol: Ticker symbol (case-insensitive)

        Returns:
            PriceRecord; price is NaN if upstream sent a non-numeric value

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamError: If Twelve Data reports an error
        """
        symbol = symbol.upper()
        data = self._get("price", symbol)

        price = parse_float(data.get("price"))
        if math.isnan(price):
            log.warning("Twelve Data price for %s is not numeric: %r", symbol, data.get("price"))

        return PriceRecord(
            symbol=symbol,
            price=price,
            timestamp=utc_now_iso(),
            source=SOURCE_NAME,
        )

    def get_quote(self, symbol: str) -> QuoteRecord:
        """
        Get the detailed quote for a symbol.

        Args:
            symbol: Ticker symbol (case-insensitive)

        Returns:
            QuoteRecord with symbol and name as reported upstream

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamError: If Twelve Data reports an error
        """
        data = self._get("quote", symbol.upper())

        return QuoteRecord(
            symbol=data.get("symbol"),
            name=data.get("name"),
            price=parse_float(data.get("price", data.get("close"))),
            change=parse_float(data.get("change")),
            change_percent=parse_float(data.get("percent_change")),
            volume=parse_int(data.get("volume")),
            high=parse_float(data.get("day_high", data.get("high"))),
            low=parse_float(data.get("day_low", data.get("low"))),
            open=parse_float(data.get("open")),
            previous_close=parse_float(data.get("previous_close")),
            timestamp=utc_now_iso(),
            source=SOURCE_NAME,
        )


def _upstream_message(resp: Optional[requests.Response]) -> Optional[str]:
    """Pull the "message" field out of an error response body, if any."""
    if resp is None:
        return None
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None
