# src/apisources/adapters/providers/googlenews.py
"""
Google News RSS Provider for Headline Search

This module implements the Google News RSS search client. It builds a
search feed URL, fetches and parses the RSS feed, keeps the first N items
in feed order and normalizes each into a NewsItem.

No API key is needed. There is no retry: an unreachable or malformed feed
fails the call.

Files that USE this module:
- apisources.application.source_client (SourceClient registers it as "googlenews")
- tests.test_providers (unit tests)

Files that this module USES:
- apisources.config (default base URL and feed timeout)
- apisources.domain (records and error kinds)
"""
import logging
import time
import urllib.parse
from collections.abc import Mapping
from typing import Any, Optional, Union

import feedparser
import requests
from bs4 import BeautifulSoup

from apisources.config import settings
from apisources.domain.errors import InvalidArgumentError, UpstreamError
from apisources.domain.models import NewsItem, NewsQuery, NewsResult

log = logging.getLogger(__name__)

SOURCE_NAME = "googlenews"

# Characters encodeURIComponent leaves alone, besides the unreserved set
_URI_COMPONENT_SAFE = "!*'()"


def _encode(value: str) -> str:
    return urllib.parse.quote(str(value), safe=_URI_COMPONENT_SAFE)


class GoogleNewsProvider:
    """
    Client for the Google News RSS search feed.

    A query is either search text ("apple") or a mapping
    {"q": "apple", "lang": "en", "country": "US", "max": 10}.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Initialize Google News provider.

        Args:
            base_url: Optional feed base URL (defaults to settings.googlenews_base_url)
            timeout: Optional feed fetch timeout in seconds (defaults to settings.news_timeout_seconds)
        """
        self.base_url = (base_url or settings.googlenews_base_url).rstrip("/")
        self.timeout = timeout or settings.news_timeout_seconds

    @staticmethod
    def normalize_query(query: Union[str, Mapping, None]) -> NewsQuery:
        """
        Normalize search text or a query mapping into a NewsQuery.

        Args:
            query: Search text, or mapping with "q" and optional "lang", "country", "max"

        Returns:
            NewsQuery with defaults applied (lang "en", country "US", max 10)

        Raises:
            InvalidArgumentError: If the query has another shape, the search text
                is empty, or max is not a non-negative integer
        """
        if isinstance(query, str):
            q = query.strip()
            if not q:
                raise InvalidArgumentError("GoogleNews: search text must not be empty")
            return NewsQuery(q=q)

        if isinstance(query, Mapping):
            q = str(query.get("q") or "").strip()
            if not q:
                raise InvalidArgumentError("GoogleNews: search text must not be empty")

            max_items = query.get("max")
            if max_items is None:
                max_items = NewsQuery.max
            elif isinstance(max_items, bool):
                raise InvalidArgumentError("GoogleNews: max must be a non-negative integer")
            else:
                try:
                    max_items = int(max_items)
                except (TypeError, ValueError):
                    raise InvalidArgumentError("GoogleNews: max must be a non-negative integer")
            if max_items < 0:
                raise InvalidArgumentError("GoogleNews: max must be a non-negative integer")

            return NewsQuery(
                q=q,
                lang=str(query.get("lang") or NewsQuery.lang),
                country=str(query.get("country") or NewsQuery.country),
                max=max_items,
            )

        raise InvalidArgumentError("GoogleNews: query must be a string or { q, lang?, country?, max? }")

    def build_search_url(self, query: NewsQuery) -> str:
        """Build the RSS search URL; every component is percent-encoded."""
        lang = _encode(query.lang)
        country = _encode(query.country)
        return (
            f"{self.base_url}/search?hl={lang}&gl={country}"
            f"&q={_encode(query.q)}&ceid={country}:{lang}"
        )

    def _fetch_feed(self, url: str) -> "feedparser.FeedParserDict":
        """
        Download and parse the RSS feed.

        Raises:
            UpstreamError: On non-2xx responses or a feed that cannot be parsed
            requests.exceptions.RequestException: On timeouts and connection failures
        """
        try:
            resp = requests.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            log.error("Google News HTTP error %s for %s", status, url)
            raise UpstreamError(f"GoogleNews: feed returned HTTP {status}", status_code=status) from e
        except requests.exceptions.Timeout:
            log.error("Google News feed timeout after %d seconds", self.timeout)
            raise
        except requests.exceptions.RequestException as e:
            log.error("Google News feed request failed: %s", e)
            raise

        feed = feedparser.parse(resp.content)
        if feed.get("bozo") and not feed.get("entries"):
            reason = feed.get("bozo_exception")
            log.error("Google News feed could not be parsed: %s", reason)
            raise UpstreamError(f"GoogleNews: could not parse feed: {reason}")
        return feed

    def get_headlines(self, query: Union[str, Mapping, None]) -> NewsResult:
        """
        Search Google News and return the first headlines.

        Args:
            query: Search text, or mapping with "q" and optional "lang", "country", "max"

        Returns:
            NewsResult with at most max items, in feed order

        Raises:
            InvalidArgumentError: If the query is invalid
            UpstreamError: If the feed returns an HTTP error or cannot be parsed
        """
        news_query = self.normalize_query(query)
        url = self.build_search_url(news_query)

        log.info("Fetching Google News headlines for %r (%s-%s)", news_query.q, news_query.lang, news_query.country)
        feed = self._fetch_feed(url)

        entries = list(feed.get("entries") or [])[: news_query.max]
        items = tuple(_to_news_item(entry) for entry in entries)
        log.debug("Google News returned %d entries, kept %d", len(feed.get("entries") or []), len(items))

        return NewsResult(
            query=news_query.q,
            lang=news_query.lang,
            country=news_query.country,
            items=items,
            source=SOURCE_NAME,
        )


def _to_news_item(entry: Mapping[str, Any]) -> NewsItem:
    return NewsItem(
        title=entry.get("title") or None,
        link=entry.get("link") or None,
        published=_published(entry),
        source=_publisher(entry),
        snippet=_snippet(entry.get("summary")),
    )


def _published(entry: Mapping[str, Any]) -> Optional[str]:
    """Prefer the parsed date (as ISO-8601 UTC), fall back to the raw string."""
    parsed = entry.get("published_parsed")
    if parsed:
        return time.strftime("%Y-%m-%dT%H:%M:%S.000Z", parsed)
    return entry.get("published") or None


def _publisher(entry: Mapping[str, Any]) -> Optional[str]:
    # feedparser maps dc:creator onto "author"
    author = entry.get("author")
    if author:
        return str(author)
    source = entry.get("source")
    if isinstance(source, Mapping) and source.get("title"):
        return str(source["title"])
    return None


def _snippet(summary: Optional[str]) -> Optional[str]:
    if not summary:
        return None
    text = BeautifulSoup(summary, "html.parser").get_text(" ", strip=True)
    return text or None
