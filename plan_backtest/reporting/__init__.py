"""
Presentation helpers for backtest results.

Nothing here is used by the engine; the demo curve in particular is a
cosmetic visualization aid, not a performance measure.
"""

from .demo_curve import generate_demo_curve
from .formatters import (
    format_currency,
    format_number,
    format_percent,
    format_result_table,
)

__all__ = [
    "format_currency",
    "format_number",
    "format_percent",
    "format_result_table",
    "generate_demo_curve",
]
