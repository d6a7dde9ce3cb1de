"""Unit tests for portfolio aggregation."""

import pytest
from datetime import datetime, timezone

from plan_backtest.data.models import BacktestStats, Execution
from plan_backtest.metrics.aggregation import aggregate, build_equity_curve, calculate_stats


def make_execution(pct_return: float, ticker: str = "XYZ") -> Execution:
    entry_price = 100.0
    return Execution(
        ticker=ticker,
        entry_at=datetime(2024, 6, 3, 20, tzinfo=timezone.utc),
        exit_at=datetime(2024, 6, 10, 20, tzinfo=timezone.utc),
        entry_price=entry_price,
        exit_price=entry_price * (1 + pct_return),
        pct_return=pct_return,
        days=7.0,
    )


class TestCalculateStats:
    """Test summary statistics."""

    def test_no_executions(self) -> None:
        stats = calculate_stats([])
        assert stats == BacktestStats()
        assert stats.hit_rate == 0

    def test_zero_return_counts_as_negative(self) -> None:
        """Only strictly positive returns are hits."""
        stats = calculate_stats([make_execution(r) for r in (0.1, -0.05, 0.0, 0.2)])

        assert stats.pos == 2
        assert stats.neg == 2
        assert stats.hit_rate == 0.5

    def test_mean_and_total_return(self) -> None:
        stats = calculate_stats([make_execution(r) for r in (0.1, -0.05, 0.25)])

        assert stats.mean == pytest.approx(0.1)
        assert stats.total_return == pytest.approx(0.3)

    def test_median_odd_count(self) -> None:
        stats = calculate_stats([make_execution(r) for r in (0.3, -0.1, 0.05)])
        assert stats.median == 0.05

    def test_median_even_count_takes_upper_middle(self) -> None:
        """For even n the median is sorted[n // 2], not the midpoint average."""
        stats = calculate_stats([make_execution(r) for r in (0.2, -0.05, 0.1, 0.0)])
        assert stats.median == 0.1

    @pytest.mark.parametrize("returns", [
        (0.1,),
        (-0.1, -0.2),
        (0.01, 0.02, -0.03, 0.04, -0.05),
    ])
    def test_hit_rate_bounds(self, returns) -> None:
        stats = calculate_stats([make_execution(r) for r in returns])

        assert 0.0 <= stats.hit_rate <= 1.0
        assert stats.hit_rate * stats.total == pytest.approx(stats.pos)
        assert stats.total == len(returns)


class TestEquityCurve:
    """Test the straight-line equity curve."""

    def test_constant_increment_from_one(self) -> None:
        curve = build_equity_curve([make_execution(0.1), make_execution(0.2)], steps=3)

        assert [p.v for p in curve] == pytest.approx([1.1, 1.2, 1.3])
        assert [p.t for p in curve] == ["0", "1", "2"]

    def test_last_point_is_one_plus_total_return(self) -> None:
        executions = [make_execution(r) for r in (0.07, -0.02, 0.05)]
        curve = build_equity_curve(executions, steps=20)

        assert len(curve) == 20
        assert curve[-1].v == pytest.approx(1.10)

    def test_steps_default_to_execution_count(self) -> None:
        curve = build_equity_curve([make_execution(0.1), make_execution(0.1)])
        assert len(curve) == 2

    def test_no_executions_no_steps_is_empty(self) -> None:
        assert build_equity_curve([]) == ()

    def test_no_executions_with_steps_is_flat(self) -> None:
        curve = build_equity_curve([], steps=4)
        assert [p.v for p in curve] == [1.0, 1.0, 1.0, 1.0]

    def test_labels_from_timeline(self, make_series) -> None:
        timeline = make_series("2024-06-03", "2024-06-05")
        curve = build_equity_curve([make_execution(0.03)], steps=4, timeline=timeline)

        assert [p.t for p in curve] == [
            "2024-06-03T20:00:00Z",
            "2024-06-04T20:00:00Z",
            "2024-06-05T20:00:00Z",
            "3",
        ]


class TestAggregate:
    """Test the combined aggregation entry point."""

    def test_aggregate_combines_stats_and_curve(self) -> None:
        executions = [make_execution(0.1), make_execution(-0.02)]
        result = aggregate(executions, steps=5)

        assert result.stats.pos == 1
        assert len(result.equity_curve) == 5
        assert result.equity_curve[-1].v == pytest.approx(1.08)

    def test_aggregate_empty(self) -> None:
        result = aggregate([])

        assert result.stats.hit_rate == 0
        assert result.equity_curve == ()
