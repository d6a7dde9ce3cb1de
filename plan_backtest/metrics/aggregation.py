"""Portfolio statistics and equity curve over realized executions"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..data.models import BacktestStats, Bar, CurvePoint, Execution
from ..utils.time import format_instant


@dataclass(frozen=True)
class AggregationResult:
    """Statistics and equity curve for one set of executions."""
    stats: BacktestStats
    equity_curve: tuple[CurvePoint, ...]


def calculate_stats(executions: Sequence[Execution]) -> BacktestStats:
    """
    Calculate summary statistics over executions

    median is the element at index n // 2 of the ascending returns, i.e. the
    upper of the two middle values when n is even.

    Args:
        executions: Realized executions

    Returns:
        BacktestStats, all zero when there are no executions
    """
    total = len(executions)
    if total == 0:
        return BacktestStats()

    pos = sum(1 for e in executions if e.pct_return > 0)
    returns = sorted(e.pct_return for e in executions)

    return BacktestStats(
        hit_rate=pos / total,
        mean=sum(returns) / total,
        median=returns[total // 2],
        pos=pos,
        neg=total - pos,
        total_return=sum(e.pct_return for e in executions),
    )


def build_equity_curve(
    executions: Sequence[Execution],
    steps: Optional[int] = None,
    timeline: Optional[Sequence[Bar]] = None
) -> tuple[CurvePoint, ...]:
    """
    Build the straight-line equity curve

    The summed return of all executions is spread evenly over ``steps``
    points starting from 1.0, so the last point equals 1 + total return. It
    does not follow individual entry and exit times.

    Args:
        executions: Realized executions
        steps: Number of points, normally the longest bar series length;
            defaults to the number of executions
        timeline: Bars used to label points; labels fall back to the index

    Returns:
        Curve points, empty when steps is 0
    """
    if steps is None:
        steps = len(executions)
    if steps <= 0:
        return ()

    increment = sum(e.pct_return for e in executions) / steps

    points = []
    value = 1.0
    for i in range(steps):
        value += increment
        if timeline is not None and i < len(timeline):
            label = format_instant(timeline[i].ts)
        else:
            label = str(i)
        points.append(CurvePoint(t=label, v=value))
    return tuple(points)


def aggregate(
    executions: Sequence[Execution],
    steps: Optional[int] = None,
    timeline: Optional[Sequence[Bar]] = None
) -> AggregationResult:
    """
    Aggregate executions into statistics and the equity curve

    Args:
        executions: Realized executions
        steps: Length of the longest bar series used in the run, if known
        timeline: That longest series, used for curve labels

    Returns:
        AggregationResult
    """
    return AggregationResult(
        stats=calculate_stats(executions),
        equity_curve=build_equity_curve(executions, steps, timeline),
    )
