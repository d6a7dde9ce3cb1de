"""Default configuration parameters for the plan backtester."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BacktestParams:
    """Orchestration parameters."""
    default_from: str = "2019-01-01"       # Range start when no entry has a timestamp
    max_workers: int = 8                   # Concurrent per-ticker retrievals


@dataclass(frozen=True)
class ProviderParams:
    """Price series provider parameters."""
    name: str = "auto"                     # auto | polygon | synthetic
    api_key: Optional[str] = None          # Polygon key; auto mode uses polygon when set
    base_url: str = "https://api.polygon.io"
    timeout_seconds: float = 10.0
    granularities: tuple[str, ...] = ("day",)   # Tried in order, finest first


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class BacktestConfig:
    """Complete configuration."""
    backtest: BacktestParams
    provider: ProviderParams
    logging: LoggingParams


def get_default_config() -> BacktestConfig:
    """Get the default configuration instance."""
    return BacktestConfig(
        backtest=BacktestParams(),
        provider=ProviderParams(),
        logging=LoggingParams(),
    )
