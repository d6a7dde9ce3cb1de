"""
Canonical data models for plans, price bars and realized executions.

This module defines immutable data structures shared by the resolver, the
aggregation engine and the orchestrator. Timestamps are timezone-aware
datetimes; the JSON wire shape is produced by the ``to_dict`` helpers.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Optional

from ..utils.time import format_instant

DATE_ONLY_SOURCE = "date-only"


@dataclass(frozen=True)
class Leg:
    """One side of a trading rule, anchored to a cited event."""
    at: Optional[datetime]   # Event instant, None when only the date is known
    source: str              # Citation, or DATE_ONLY_SOURCE
    url: str                 # Link to the official source

    @property
    def is_date_only(self) -> bool:
        return self.at is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "at": self.at.isoformat() if self.at is not None else None,
            "source": self.source,
            "url": self.url,
        }


@dataclass(frozen=True)
class PlanItem:
    """A single {ticker, entry, exit} rule of a trading plan."""
    ticker: str
    entry: Leg
    exit: Leg

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "entry": self.entry.to_dict(),
            "exit": self.exit.to_dict(),
        }


@dataclass(frozen=True)
class Bar:
    """Normalized OHLCV bar with a UTC timestamp."""
    ts: datetime        # UTC period timestamp
    open: float         # Opening price
    high: float         # High price
    low: float          # Low price
    close: float        # Closing price
    volume: float       # Traded volume

    @property
    def day(self) -> date:
        """UTC calendar day of the bar."""
        return self.ts.astimezone(timezone.utc).date()

    def to_dict(self) -> dict[str, Any]:
        return {
            "t": format_instant(self.ts),
            "o": self.open,
            "h": self.high,
            "l": self.low,
            "c": self.close,
            "v": self.volume,
        }


@dataclass(frozen=True)
class Execution:
    """A realized trade derived from one plan item."""
    ticker: str
    entry_at: datetime
    exit_at: datetime
    entry_price: float
    exit_price: float
    pct_return: float
    days: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "entryAt": format_instant(self.entry_at),
            "exitAt": format_instant(self.exit_at),
            "entryPrice": self.entry_price,
            "exitPrice": self.exit_price,
            "pctReturn": self.pct_return,
            "days": self.days,
        }


@dataclass(frozen=True)
class BacktestStats:
    """Summary statistics over a set of executions."""
    hit_rate: float = 0.0
    mean: float = 0.0
    median: float = 0.0
    pos: int = 0
    neg: int = 0
    total_return: float = 0.0

    @property
    def total(self) -> int:
        return self.pos + self.neg

    def to_dict(self) -> dict[str, Any]:
        return {
            "hitRate": self.hit_rate,
            "mean": self.mean,
            "median": self.median,
            "pos": self.pos,
            "neg": self.neg,
            "totalReturn": self.total_return,
        }


@dataclass(frozen=True)
class CurvePoint:
    """One point of the equity curve (1.0 = flat)."""
    t: str
    v: float

    def to_dict(self) -> dict[str, Any]:
        return {"t": self.t, "v": self.v}


@dataclass(frozen=True)
class BacktestResult:
    """Outcome of one backtest run."""
    per_ticker: tuple[Execution, ...] = ()
    stats: BacktestStats = field(default_factory=BacktestStats)
    equity_curve: tuple[CurvePoint, ...] = ()

    def to_dict(self, plan: Optional[list[PlanItem]] = None) -> dict[str, Any]:
        """
        Render the JSON wire shape.

        Args:
            plan: When given, each per-ticker row is enriched with the entry and
                exit source URLs of the first plan item for that ticker.
        """
        urls: dict[str, PlanItem] = {}
        for item in plan or []:
            urls.setdefault(item.ticker, item)

        rows = []
        for execution in self.per_ticker:
            row = execution.to_dict()
            item = urls.get(execution.ticker)
            if item is not None:
                row["entryUrl"] = item.entry.url
                row["exitUrl"] = item.exit.url
            rows.append(row)

        return {
            "perTicker": rows,
            "stats": self.stats.to_dict(),
            "equityCurve": [point.to_dict() for point in self.equity_curve],
        }
