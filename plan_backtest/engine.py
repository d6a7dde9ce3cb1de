"""
Main backtest orchestrator.

Coordinates the backtest pipeline: date-range derivation, concurrent per-ticker
price retrieval, execution resolution and aggregation.

Plan → per-ticker Bar series → Executions → Stats + Equity curve
"""

import concurrent.futures
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any, Optional, Union

import structlog

from .config.defaults import BacktestConfig
from .config.loader import ConfigLoader
from .data.models import BacktestResult, Bar, PlanItem
from .data.plan_normalizer import parse_plan
from .execution.resolver import resolve_all
from .logging.config import get_run_logger, log_provider_failure
from .metrics.aggregation import aggregate
from .providers.base import PriceSeriesProvider
from .providers.factory import create_provider
from .utils.time import today_utc, utc_day

logger = structlog.get_logger(__name__)
run_logger = get_run_logger(__name__)


def unique_tickers(plan: Sequence[PlanItem]) -> list[str]:
    """Distinct tickers of a plan in first-seen order."""
    return list(dict.fromkeys(item.ticker for item in plan))


def derive_date_range(
    plan: Sequence[PlanItem],
    default_from: date,
    now: Optional[datetime] = None
) -> tuple[date, date]:
    """
    Derive the retrieval range for a plan.

    ``from`` is the UTC day of the earliest entry instant, ``to`` the UTC day
    of the latest exit instant. Date-only legs do not contribute.

    Args:
        plan: Plan items
        default_from: Start used when no entry has an instant
        now: Reference time for the default end; wall-clock when None

    Returns:
        (from_day, to_day)
    """
    entries = [item.entry.at for item in plan if item.entry.at is not None]
    exits = [item.exit.at for item in plan if item.exit.at is not None]

    start = utc_day(min(entries)) if entries else default_from
    end = utc_day(max(exits)) if exits else today_utc(now)
    return start, end


class BacktestEngine:
    """
    Coordinator for plan backtests.

    Owns the price provider and the run configuration. Bar series live only
    for the duration of one run.
    """

    def __init__(
        self,
        provider: Optional[PriceSeriesProvider] = None,
        config: Optional[BacktestConfig] = None,
        config_dir: Optional[str] = None
    ) -> None:
        """Initialize the backtest engine."""
        self.logger = logger
        self.run_logger = run_logger

        if config is None:
            config = ConfigLoader.create(config_dir).load()
        self.config = config
        self.provider = provider if provider is not None else create_provider(config.provider)
        self.default_from = date.fromisoformat(config.backtest.default_from)

        self.logger.info(
            "Backtest engine initialized",
            provider=self.provider.name,
            max_workers=config.backtest.max_workers
        )

    def fetch_series(
        self,
        tickers: Sequence[str],
        start: date,
        end: date
    ) -> dict[str, list[Bar]]:
        """
        Retrieve bar series for every ticker concurrently.

        Each ticker is an isolated failure domain: a provider exception is
        logged and the ticker gets an empty series.

        Returns:
            Ticker-keyed mapping of bar series, one slot per ticker
        """
        prices: dict[str, list[Bar]] = {ticker: [] for ticker in tickers}
        if not tickers:
            return prices

        max_workers = min(self.config.backtest.max_workers, len(tickers))
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_ticker = {
                executor.submit(self.provider.get_bars, ticker, start, end): ticker
                for ticker in tickers
            }

            for future in concurrent.futures.as_completed(future_to_ticker):
                ticker = future_to_ticker[future]
                try:
                    prices[ticker] = list(future.result() or [])
                except Exception as e:
                    log_provider_failure(
                        self.run_logger,
                        ticker,
                        e,
                        context={"from": start.isoformat(), "to": end.isoformat()}
                    )

        return prices

    def run_backtest(self, plan: Sequence[PlanItem], now: Optional[datetime] = None) -> BacktestResult:
        """
        Run a backtest over a validated plan.

        Args:
            plan: Plan items, already validated at the boundary
            now: Reference time for the default range end; wall-clock when None

        Returns:
            BacktestResult over the executions that could be realized
        """
        tickers = unique_tickers(plan)
        start, end = derive_date_range(plan, self.default_from, now)

        self.run_logger.info(
            "Backtest run started",
            items=len(plan),
            tickers=len(tickers),
            start=start.isoformat(),
            end=end.isoformat()
        )

        prices = self.fetch_series(tickers, start, end)
        executions = resolve_all(plan, prices)

        timeline: list[Bar] = []
        for ticker in tickers:
            if len(prices[ticker]) > len(timeline):
                timeline = prices[ticker]

        aggregation = aggregate(
            executions,
            steps=len(timeline) or None,
            timeline=timeline or None
        )

        self.run_logger.info(
            "Backtest run completed",
            executions=len(executions),
            dropped=len(plan) - len(executions),
            hit_rate=aggregation.stats.hit_rate,
            total_return=aggregation.stats.total_return
        )

        return BacktestResult(
            per_ticker=tuple(executions),
            stats=aggregation.stats,
            equity_curve=aggregation.equity_curve,
        )

    def run_backtest_payload(self, payload: Union[str, list, dict[str, Any]],
                             now: Optional[datetime] = None) -> dict[str, Any]:
        """
        Validate a raw plan body, run it and render the JSON result.

        Per-ticker rows carry the entry and exit source URLs of their plan item.

        Raises:
            PlanValidationError: If the payload violates the plan contract
        """
        plan = parse_plan(payload)
        return self.run_backtest(plan, now).to_dict(plan)


def run_backtest(
    plan: Sequence[PlanItem],
    provider: Optional[PriceSeriesProvider] = None,
    config: Optional[BacktestConfig] = None
) -> BacktestResult:
    """Run a one-off backtest with a fresh engine."""
    return BacktestEngine(provider=provider, config=config).run_backtest(plan)
