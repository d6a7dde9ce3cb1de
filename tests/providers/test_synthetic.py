"""Tests for the synthetic price provider."""

import pytest
from datetime import date, datetime, timezone

from plan_backtest.providers.synthetic import SyntheticPriceProvider


class TestSyntheticPriceProvider:
    """Test deterministic synthetic bars."""

    def setup_method(self):
        self.provider = SyntheticPriceProvider()

    def test_weekdays_only(self):
        bars = self.provider.get_bars("KDP", date(2024, 6, 1), date(2024, 6, 30))

        assert len(bars) == 20
        assert all(bar.day.weekday() < 5 for bar in bars)

    def test_strictly_ascending_distinct_days(self):
        bars = self.provider.get_bars("AAPL", date(2024, 1, 1), date(2024, 3, 31))
        days = [bar.day for bar in bars]

        assert days == sorted(set(days))

    def test_bars_stamped_at_session_close(self):
        bars = self.provider.get_bars("KDP", date(2024, 6, 7), date(2024, 6, 7))

        assert len(bars) == 1
        assert bars[0].ts == datetime(2024, 6, 7, 20, tzinfo=timezone.utc)

    def test_starting_price_depends_on_first_letter(self):
        bars = self.provider.get_bars("KDP", date(2024, 6, 3), date(2024, 6, 3))
        # ord("K") == 75, 75 % 20 == 15
        assert bars[0].open == 115.0

    def test_open_is_previous_close(self):
        bars = self.provider.get_bars("MSFT", date(2024, 6, 3), date(2024, 6, 14))

        for previous, current in zip(bars, bars[1:]):
            assert current.open == previous.close

    def test_high_low_envelope(self):
        for bar in self.provider.get_bars("MSFT", date(2024, 6, 3), date(2024, 6, 14)):
            assert bar.high > max(bar.open, bar.close)
            assert bar.low < min(bar.open, bar.close)
            assert bar.volume == 1_000_000.0

    def test_deterministic(self):
        first = self.provider.get_bars("KDP", date(2024, 6, 1), date(2024, 6, 30))
        second = SyntheticPriceProvider().get_bars("KDP", date(2024, 6, 1), date(2024, 6, 30))
        assert first == second

    def test_inverted_range_is_empty(self):
        assert self.provider.get_bars("KDP", date(2024, 6, 30), date(2024, 6, 1)) == []

    def test_only_daily_granularity(self):
        assert self.provider.get_bars("KDP", date(2024, 6, 3), date(2024, 6, 7), "hour") == []
        assert len(self.provider.get_bars("KDP", date(2024, 6, 3), date(2024, 6, 7), "day")) == 5

    def test_counts_requests(self):
        self.provider.get_bars("KDP", date(2024, 6, 3), date(2024, 6, 7))
        assert self.provider.get_stats() == {"name": "synthetic", "request_count": 1}
