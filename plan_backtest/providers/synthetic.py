"""Deterministic synthetic daily bars for environments without provider credentials."""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ..data.models import Bar
from .base import DEFAULT_GRANULARITY, PriceSeriesProvider

EPOCH = date(1970, 1, 1)
SESSION_CLOSE_HOUR = 20      # Bars are stamped at 20:00 UTC
RANGE_PCT = 0.003            # High/low distance from open/close
VOLUME = 1_000_000.0


class SyntheticPriceProvider(PriceSeriesProvider):
    """
    Weekday-only price walk driven by a sine drift and a calendar shock.

    The same ticker and date range always produce the same series.
    """

    name = "synthetic"

    def get_bars(
        self,
        ticker: str,
        start: date,
        end: date,
        granularity: Optional[str] = None
    ) -> list[Bar]:
        self._record_request()

        if not ticker:
            return []
        if (granularity or DEFAULT_GRANULARITY) != "day":
            return []

        price = 100.0 + (ord(ticker[0]) % 20)
        bars = []

        day = start
        while day <= end:
            if day.weekday() < 5:
                drift = math.sin((day - EPOCH).days) * 0.5
                shock = ((day.day * 13 + (day.month - 1) * 7) % 5) * 0.1 - 0.2
                ret = drift + shock

                open_ = price
                price = max(1.0, price * (1 + ret / 100))
                close = price

                bars.append(Bar(
                    ts=datetime(day.year, day.month, day.day, SESSION_CLOSE_HOUR,
                                tzinfo=timezone.utc),
                    open=open_,
                    high=max(open_, close) * (1 + RANGE_PCT),
                    low=min(open_, close) * (1 - RANGE_PCT),
                    close=close,
                    volume=VOLUME,
                ))
            day += timedelta(days=1)

        return bars
