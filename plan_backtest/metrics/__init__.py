"""
Portfolio-level aggregation of realized executions.
"""

from .aggregation import AggregationResult, aggregate, build_equity_curve

__all__ = ["AggregationResult", "aggregate", "build_equity_curve"]
