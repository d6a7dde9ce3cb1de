"""Text formatting for backtest results."""

from ..data.models import BacktestResult
from ..utils.time import format_instant


def format_percent(value: float, decimals: int = 2) -> str:
    """Format a fractional return as a percentage, e.g. 0.0516 -> '5.16%'."""
    return f"{value * 100:.{decimals}f}%"


def format_currency(value: float, decimals: int = 2) -> str:
    return f"${value:.{decimals}f}"


def format_number(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}"


def format_result_table(result: BacktestResult) -> str:
    """
    Render executions and summary statistics as a plain-text table.

    Args:
        result: Backtest result to render

    Returns:
        Multi-line string
    """
    header = ("Ticker", "Entry", "Exit", "Entry Px", "Exit Px", "Return", "Days")
    rows = [header]
    for execution in result.per_ticker:
        rows.append((
            execution.ticker,
            format_instant(execution.entry_at)[:10],
            format_instant(execution.exit_at)[:10],
            format_currency(execution.entry_price),
            format_currency(execution.exit_price),
            format_percent(execution.pct_return),
            format_number(execution.days, 1),
        ))

    widths = [max(len(row[i]) for row in rows) for i in range(len(header))]
    lines = ["  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
             for row in rows]
    lines.insert(1, "  ".join("-" * width for width in widths))

    stats = result.stats
    lines.append("")
    lines.append(
        f"Trades: {stats.total}  Hit rate: {format_percent(stats.hit_rate, 1)}  "
        f"Mean: {format_percent(stats.mean)}  Median: {format_percent(stats.median)}  "
        f"Total: {format_percent(stats.total_return)}"
    )
    return "\n".join(lines)
