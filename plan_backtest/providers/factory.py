"""Provider selection from configuration."""

from typing import Optional

from ..config.defaults import ProviderParams
from ..errors import ConfigurationError
from ..logging.config import get_logger
from .base import PriceSeriesProvider
from .fallback import GranularityFallbackProvider
from .polygon import PolygonPriceProvider
from .synthetic import SyntheticPriceProvider

logger = get_logger(__name__)


def create_provider(params: Optional[ProviderParams] = None) -> PriceSeriesProvider:
    """
    Build the configured price provider.

    ``auto`` selects Polygon when an API key is configured and the synthetic
    generator otherwise (demo mode). The result is wrapped in the granularity
    fallback strategy.

    Raises:
        ConfigurationError: If polygon is requested without an API key
    """
    if params is None:
        params = ProviderParams()

    name = params.name
    if name == "auto":
        name = "polygon" if params.api_key else "synthetic"

    if name == "polygon":
        if not params.api_key:
            raise ConfigurationError("provider.name is polygon but no api_key is configured")
        provider: PriceSeriesProvider = PolygonPriceProvider(
            api_key=params.api_key,
            base_url=params.base_url,
            timeout_seconds=params.timeout_seconds,
        )
    elif name == "synthetic":
        provider = SyntheticPriceProvider()
    else:
        raise ConfigurationError(f"Unknown provider: {name}")

    logger.info(
        "Price provider selected",
        provider=provider.name,
        demo=provider.name == "synthetic",
        granularities=list(params.granularities),
    )
    return GranularityFallbackProvider(provider, params.granularities)
