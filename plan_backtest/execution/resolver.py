"""Execution resolution: matching plan legs against a ticker's bar series.

Entry fills at the open of the first bar on or after the entry day; exit fills
at the close of the last bar on or before the exit day. Both days are UTC
calendar days. Items whose exit resolves before their entry produce nothing.
"""

from bisect import bisect_left, bisect_right
from collections.abc import Mapping, Sequence
from typing import Optional

from ..data.models import Bar, Execution, PlanItem
from ..logging.config import get_logger, log_execution_dropped
from ..utils.time import elapsed_days, utc_day

logger = get_logger(__name__)


def resolve_entry_index(series: Sequence[Bar], item: PlanItem) -> int:
    """
    Index of the entry bar: first bar whose day is on or after the entry day.

    Falls back to index 0 when every bar precedes the entry day.
    """
    days = [bar.day for bar in series]
    entry_day = utc_day(item.entry.at) if item.entry.at is not None else days[0]

    idx = bisect_left(days, entry_day)
    return idx if idx < len(days) else 0


def resolve_exit_index(series: Sequence[Bar], item: PlanItem) -> int:
    """
    Index of the exit bar: last bar whose day is on or before the exit day.

    Falls back to the last index when every bar follows the exit day.
    """
    days = [bar.day for bar in series]
    exit_day = utc_day(item.exit.at) if item.exit.at is not None else days[-1]

    idx = bisect_right(days, exit_day) - 1
    return idx if idx >= 0 else len(days) - 1


def resolve(item: PlanItem, series: Sequence[Bar]) -> Optional[Execution]:
    """
    Resolve one plan item into a realized execution.

    Args:
        item: Plan item to execute
        series: The ticker's bars, strictly ascending

    Returns:
        The Execution, or None when the series is empty, the exit bar
        precedes the entry bar, or the entry open is not positive
    """
    if not series:
        log_execution_dropped(logger, item.ticker, "no_data")
        return None

    entry_idx = resolve_entry_index(series, item)
    exit_idx = resolve_exit_index(series, item)

    if exit_idx < entry_idx:
        log_execution_dropped(
            logger,
            item.ticker,
            "exit_before_entry",
            context={"entry_index": entry_idx, "exit_index": exit_idx}
        )
        return None

    entry_bar = series[entry_idx]
    exit_bar = series[exit_idx]
    entry_price = entry_bar.open
    exit_price = exit_bar.close

    if entry_price <= 0:
        log_execution_dropped(
            logger,
            item.ticker,
            "non_positive_entry_price",
            context={"entry_index": entry_idx, "entry_price": entry_price}
        )
        return None

    return Execution(
        ticker=item.ticker,
        entry_at=entry_bar.ts,
        exit_at=exit_bar.ts,
        entry_price=entry_price,
        exit_price=exit_price,
        pct_return=(exit_price - entry_price) / entry_price,
        days=elapsed_days(entry_bar.ts, exit_bar.ts),
    )


def resolve_all(plan: Sequence[PlanItem],
                prices: Mapping[str, Sequence[Bar]]) -> list[Execution]:
    """Resolve every plan item in order, keeping only realized executions."""
    executions = []
    for item in plan:
        execution = resolve(item, prices.get(item.ticker, []))
        if execution is not None:
            executions.append(execution)
    return executions
