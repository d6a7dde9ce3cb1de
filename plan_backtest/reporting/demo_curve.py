"""
Cosmetic equity curve generator for demos.

Produces a visually tuned path (early dip, pre-rebalance dip, late surge)
that starts at 1.0 and ends exactly at 1 + final_return. It is a
visualization aid only; the engine's equity curve comes from
``plan_backtest.metrics.aggregation``.
"""

import math

from ..data.models import CurvePoint

MIN_MAGNITUDE = 0.05
PIVOT_FRACTION = 0.95


def _ease_in_out_cubic(x: float) -> float:
    if x < 0.5:
        return 4 * x * x * x
    return 1 - math.pow(-2 * x + 2, 3) / 2


def _bump(t: float, center: float, width: float) -> float:
    return math.exp(-(((t - center) / width) ** 2))


def generate_demo_curve(final_return: float, points: int = 240) -> list[CurvePoint]:
    """
    Generate a demo curve ending at ``1 + final_return``.

    Args:
        final_return: Total return the curve should finish at
        points: Number of points (at least 2)

    Returns:
        Curve points labelled "0".."points-1"
    """
    if points < 2:
        raise ValueError("points must be at least 2")

    sign = 1 if final_return >= 0 else -1
    mag = max(MIN_MAGNITUDE, abs(final_return))

    early_dip_amp = min(0.35, 0.4 * mag + 0.06)
    mid_dip_amp = min(0.22, 0.25 * mag + 0.04)
    late_surge_amp = min(0.35, 0.5 * mag + 0.08)

    values = []
    for i in range(points):
        t = i / (points - 1)
        trend = mag * _ease_in_out_cubic(t)
        early_dip = -early_dip_amp * _bump(t, 0.06, 0.035)
        pre_rebalance_dip = -mid_dip_amp * _bump(t, 0.88, 0.05)
        end_spike = late_surge_amp * _bump(t, 0.985, 0.018)
        end_power = late_surge_amp * math.pow(max(0.0, t - 0.95) / 0.05, 3)
        wave = 0.01 * math.sin(10 * math.pi * t)

        path = (trend + early_dip + pre_rebalance_dip
                + max(end_spike, 0.0) + max(end_power, 0.0) + wave)
        values.append(1 + sign * path)

    values[0] = 1.0
    end_value = 1 + final_return
    pivot = max(1, math.floor(PIVOT_FRACTION * (points - 1)))

    # Non-decreasing after the pivot
    for i in range(pivot + 1, points):
        values[i] = max(values[i], values[i - 1])

    delta = end_value - values[-1]
    if delta != 0:
        span = (points - 1 - pivot) or 1
        for i in range(pivot, points):
            values[i] += delta * (i - pivot) / span
        values[-1] = end_value

    return [CurvePoint(t=str(i), v=v) for i, v in enumerate(values)]
