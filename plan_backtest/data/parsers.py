"""
Provider payload parsers for converting raw aggregate data to Bar series.

This module handles parsing of Polygon-style aggregate payloads into canonical
bar series with proper type conversion, and enforces the series invariant of
strictly ascending, one-bar-per-day ordering.
"""

from datetime import datetime, timezone
from typing import Any

from ..errors import MalformedDataError
from ..logging.config import get_logger
from .models import Bar

logger = get_logger(__name__)

PRICE_KEYS = ("o", "h", "l", "c")


def parse_aggregate_row(row: dict[str, Any]) -> Bar:
    """
    Parse a single aggregate row into a Bar.

    Args:
        row: Aggregate dict with millisecond epoch ``t`` and ``o/h/l/c/v``

    Returns:
        Parsed Bar

    Raises:
        MalformedDataError: If a required field is missing or not numeric
    """
    if not isinstance(row, dict):
        raise MalformedDataError("Aggregate row must be an object", raw_data=repr(row))

    try:
        ts = datetime.fromtimestamp(int(row["t"]) / 1000.0, tz=timezone.utc)
        o, h, l, c = (float(row[key]) for key in PRICE_KEYS)
        volume = float(row.get("v", 0.0) or 0.0)
    except (KeyError, TypeError, ValueError, OverflowError, OSError) as e:
        raise MalformedDataError(
            f"Invalid aggregate row: {e}",
            raw_data=repr(row),
            expected_format="{t: epoch_ms, o, h, l, c, v}"
        ) from e

    if o <= 0 or c <= 0:
        raise MalformedDataError("Non-positive price in aggregate row", raw_data=repr(row))

    return Bar(ts=ts, open=o, high=h, low=l, close=c, volume=volume)


def parse_polygon_aggregates(payload: dict[str, Any], daily: bool = True) -> list[Bar]:
    """
    Parse a Polygon aggregates response body.

    Malformed rows are skipped rather than failing the whole series.

    Args:
        payload: Decoded JSON body with a ``results`` list
        daily: True for day-or-coarser bars, which are deduplicated per UTC day

    Returns:
        Strictly ascending bar series
    """
    if not isinstance(payload, dict):
        raise MalformedDataError("Aggregates payload must be an object",
                                 raw_data=repr(payload)[:200])

    rows = payload.get("results") or []
    bars = []
    skipped = 0
    for row in rows:
        try:
            bars.append(parse_aggregate_row(row))
        except MalformedDataError as e:
            skipped += 1
            logger.debug("Skipping malformed aggregate row", error=str(e))

    if skipped:
        logger.warning("Skipped malformed aggregate rows", skipped=skipped, rows=len(rows))

    return normalize_series(bars, daily=daily)


def normalize_series(bars: list[Bar], daily: bool = True) -> list[Bar]:
    """
    Sort bars ascending and drop duplicate periods, keeping the last one seen.

    Args:
        bars: Bars in any order, possibly with duplicates
        daily: Deduplicate per UTC day rather than per timestamp

    Returns:
        Strictly ascending series with distinct periods
    """
    by_period: dict = {}
    for bar in sorted(bars, key=lambda b: b.ts):
        by_period[bar.day if daily else bar.ts] = bar
    return [by_period[key] for key in sorted(by_period)]
