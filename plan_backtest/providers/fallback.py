"""Granularity fallback strategy for price series providers."""

from datetime import date
from typing import Optional

from ..data.models import Bar
from .base import PriceSeriesProvider


class GranularityFallbackProvider(PriceSeriesProvider):
    """
    Try a list of granularities in order, returning the first non-empty series.

    Granularities are ordered finest first, e.g. ``("hour", "day")``. Errors
    from the wrapped provider are not caught here.
    """

    name = "fallback"

    def __init__(self, provider: PriceSeriesProvider, granularities: tuple[str, ...] = ("day",)):
        super().__init__()
        if not granularities:
            raise ValueError("At least one granularity is required")
        self.provider = provider
        self.granularities = tuple(granularities)

    def get_bars(
        self,
        ticker: str,
        start: date,
        end: date,
        granularity: Optional[str] = None
    ) -> list[Bar]:
        candidates = (granularity,) if granularity is not None else self.granularities

        for candidate in candidates:
            self._record_request()
            bars = self.provider.get_bars(ticker, start, end, candidate)
            if bars:
                if candidate != candidates[0]:
                    self.logger.info(
                        "Fell back to %s bars for %s", candidate, ticker
                    )
                return bars

        return []
