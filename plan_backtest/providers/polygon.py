"""Polygon.io aggregates price provider."""

import json
import socket
from datetime import date
from typing import Any, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit
from urllib.request import Request, urlopen

from ..data.parsers import parse_polygon_aggregates
from ..data.models import Bar
from ..errors import ProviderError
from ..utils.time import format_day
from .base import DEFAULT_GRANULARITY, PriceSeriesProvider

INTRADAY = ("minute", "hour")
RESULT_LIMIT = 5000


class PolygonPriceProvider(PriceSeriesProvider):
    """Fetches adjusted aggregate bars from the Polygon REST API."""

    name = "polygon"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.polygon.io",
        timeout_seconds: float = 10.0
    ):
        super().__init__()
        if not api_key:
            raise ValueError("Polygon API key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    def build_url(self, ticker: str, start: date, end: date, granularity: str) -> str:
        """Build the aggregates request URL."""
        path = "/v2/aggs/ticker/{}/range/1/{}/{}/{}".format(
            quote(ticker, safe=""), granularity, format_day(start), format_day(end)
        )
        query = urlencode({
            "adjusted": "true",
            "sort": "asc",
            "limit": RESULT_LIMIT,
            "apiKey": self.api_key,
        })
        return f"{self.base_url}{path}?{query}"

    def get_bars(
        self,
        ticker: str,
        start: date,
        end: date,
        granularity: Optional[str] = None
    ) -> list[Bar]:
        granularity = granularity or DEFAULT_GRANULARITY
        self._record_request()

        rows = []
        pages = 0
        seen = set()
        url: Optional[str] = self.build_url(ticker, start, end, granularity)
        while url and url not in seen:
            seen.add(url)
            payload = self._fetch_json(ticker, url)
            if payload is None:
                break
            if not isinstance(payload, dict):
                raise ProviderError(
                    f"Unexpected aggregates payload for {ticker}: expected an object",
                    ticker=ticker,
                    provider=self.name
                )
            pages += 1
            rows.extend(payload.get("results") or [])
            next_url = payload.get("next_url")
            url = self.with_api_key(next_url) if next_url else None

        bars = parse_polygon_aggregates({"results": rows}, daily=granularity not in INTRADAY)
        self.logger.debug("Fetched %d %s bars for %s in %d pages", len(bars), granularity, ticker, pages)
        return bars

    def with_api_key(self, url: str) -> str:
        """Add the API key to a pagination URL, which Polygon returns without it."""
        parts = urlsplit(url)
        query = parse_qsl(parts.query, keep_blank_values=True)
        if not any(key == "apiKey" for key, _ in query):
            query.append(("apiKey", self.api_key))
        return urlunsplit(parts._replace(query=urlencode(query)))

    def _fetch_json(self, ticker: str, url: str) -> Optional[dict[str, Any]]:
        """GET the URL and decode JSON; None when the ticker is unknown."""
        req = Request(
            url,
            headers={
                "Accept": "application/json",
                "User-Agent": "plan-backtest/1.0",
            },
            method="GET"
        )

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                body = response.read().decode("utf-8")

        except HTTPError as e:
            if e.code == 404:
                return None
            raise ProviderError(
                f"Polygon request failed for {ticker}: HTTP {e.code} {e.reason}",
                ticker=ticker,
                provider=self.name,
                status_code=e.code
            ) from e

        except (URLError, socket.timeout) as e:
            raise ProviderError(
                f"Polygon request failed for {ticker}: {e}",
                ticker=ticker,
                provider=self.name
            ) from e

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise ProviderError(
                f"Polygon returned invalid JSON for {ticker}: {e}",
                ticker=ticker,
                provider=self.name
            ) from e
