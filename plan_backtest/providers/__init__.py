"""
Price series providers.

Providers return ascending bar series for one ticker over a date range and
return an empty list, rather than raising, for tickers they do not know.
"""

from .base import PriceSeriesProvider
from .factory import create_provider
from .fallback import GranularityFallbackProvider
from .polygon import PolygonPriceProvider
from .synthetic import SyntheticPriceProvider

__all__ = [
    "PriceSeriesProvider",
    "GranularityFallbackProvider",
    "PolygonPriceProvider",
    "SyntheticPriceProvider",
    "create_provider",
]
