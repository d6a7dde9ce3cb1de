"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from plan_backtest.config.defaults import get_default_config
from plan_backtest.data.models import DATE_ONLY_SOURCE, Bar, Leg, PlanItem
from plan_backtest.providers.base import PriceSeriesProvider
from plan_backtest.utils.time import parse_instant


class StubPriceProvider(PriceSeriesProvider):
    """In-memory provider that records calls and can fail per ticker."""

    name = "stub"

    def __init__(self, series: Dict[str, List[Bar]],
                 failures: Optional[Dict[str, Exception]] = None):
        super().__init__()
        self.series = series
        self.failures = failures or {}
        self.calls = []

    def get_bars(self, ticker, start, end, granularity=None):
        self.calls.append((ticker, start, end))
        if ticker in self.failures:
            raise self.failures[ticker]
        return list(self.series.get(ticker, []))


def _make_bar(day: str, open_: float = 100.0, close: float = 101.0, hour: int = 20) -> Bar:
    d = date.fromisoformat(day)
    return Bar(
        ts=datetime(d.year, d.month, d.day, hour, tzinfo=timezone.utc),
        open=open_,
        high=max(open_, close) + 0.5,
        low=min(open_, close) - 0.5,
        close=close,
        volume=1_000_000.0,
    )


def _make_series(start: str, end: str, open_: float = 100.0, close: float = 101.0,
                 overrides: Optional[Dict[str, Dict[str, float]]] = None) -> List[Bar]:
    overrides = overrides or {}
    bars = []
    day = date.fromisoformat(start)
    last = date.fromisoformat(end)
    while day <= last:
        if day.weekday() < 5:
            prices = {"open_": open_, "close": close, **overrides.get(day.isoformat(), {})}
            bars.append(_make_bar(day.isoformat(), **prices))
        day += timedelta(days=1)
    return bars


def _make_item(ticker: str, entry_at: Optional[str], exit_at: Optional[str]) -> PlanItem:
    def leg(at: Optional[str]) -> Leg:
        if at is None:
            return Leg(at=None, source=DATE_ONLY_SOURCE, url="https://example.com/filing")
        return Leg(at=parse_instant(at), source="Official release", url="https://example.com/release")

    return PlanItem(ticker=ticker, entry=leg(entry_at), exit=leg(exit_at))


@pytest.fixture
def make_bar() -> Callable[..., Bar]:
    """Factory for a single daily bar stamped 20:00 UTC."""
    return _make_bar


@pytest.fixture
def make_series() -> Callable[..., List[Bar]]:
    """Factory for a weekday-only daily series with optional per-day prices."""
    return _make_series


@pytest.fixture
def make_item() -> Callable[..., PlanItem]:
    """Factory for plan items from ISO strings (None = date-only leg)."""
    return _make_item


@pytest.fixture
def stub_provider() -> Callable[..., StubPriceProvider]:
    """Factory for an in-memory price provider."""
    return StubPriceProvider


@pytest.fixture
def default_config():
    """Default configuration, independent of files and environment."""
    return get_default_config()


@pytest.fixture
def kdp_series() -> List[Bar]:
    """Daily KDP bars covering June 2024."""
    return _make_series(
        "2024-06-03", "2024-06-28",
        open_=28.00, close=28.20,
        overrides={
            "2024-06-07": {"open_": 28.10, "close": 28.30},
            "2024-06-24": {"open_": 29.20, "close": 29.55},
        },
    )


@pytest.fixture
def kdp_item() -> PlanItem:
    """S&P 500 addition plan item for KDP."""
    return _make_item("KDP", "2024-06-07T17:15:00-04:00", "2024-06-24T16:00:00-04:00")


@pytest.fixture
def sample_plan_payload() -> dict:
    """Raw plan body as received at the boundary."""
    return {
        "plan": [
            {
                "ticker": "KDP",
                "entry": {
                    "at": "2024-06-07T17:15:00-04:00",
                    "source": "S&P DJI press release",
                    "url": "https://press.spglobal.com/2024-06-07-rebalance",
                },
                "exit": {
                    "at": "2024-06-24T16:00:00-04:00",
                    "source": "NYSE closing auction rules",
                    "url": "https://www.nyse.com/auctions",
                },
            },
        ]
    }
