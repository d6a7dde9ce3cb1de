"""Base class for price series providers."""

import logging
import threading
from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from ..data.models import Bar

DEFAULT_GRANULARITY = "day"


class PriceSeriesProvider(ABC):
    """Base class for price series sources."""

    name = "base"

    def __init__(self):
        self.logger = logging.getLogger(f"price.provider.{self.name}")
        self._request_count = 0
        self._stats_lock = threading.Lock()

    @abstractmethod
    def get_bars(
        self,
        ticker: str,
        start: date,
        end: date,
        granularity: Optional[str] = None
    ) -> list[Bar]:
        """
        Retrieve bars for one ticker over an inclusive date range.

        Args:
            ticker: Instrument symbol
            start: First calendar day to include
            end: Last calendar day to include
            granularity: Bar period (minute, hour, day, week); None means day

        Returns:
            Ascending bars without duplicate periods; empty for unknown tickers

        Raises:
            ProviderError: If the backing source fails
        """
        pass

    def _record_request(self) -> None:
        """Count one request; get_bars may run on several worker threads."""
        with self._stats_lock:
            self._request_count += 1

    def get_stats(self) -> dict:
        """Get provider request statistics."""
        with self._stats_lock:
            return {
                "name": self.name,
                "request_count": self._request_count,
            }
