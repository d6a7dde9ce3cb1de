"""
Plan Backtest - Event-Anchored Trading Plan Backtester

Turns a symbolic trading plan of {ticker, entry, exit} rules, each anchored to a
real-world event, into realized executions against historical daily bars and
aggregates them into summary statistics and an equity curve.
"""

__version__ = "0.1.0"
__author__ = "Plan Backtest Team"
