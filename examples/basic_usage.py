#!/usr/bin/env python3
"""
Basic Usage Example - Plan Backtester

This script demonstrates the basic usage of the backtest engine with the
deterministic synthetic price provider. It shows how to:
- Validate a raw plan at the boundary
- Run a backtest
- Inspect executions and summary statistics
- Render the JSON result with source URLs

Run: python examples/basic_usage.py
"""

import json
from pathlib import Path

from plan_backtest.config.defaults import get_default_config
from plan_backtest.data.plan_normalizer import parse_plan
from plan_backtest.engine import BacktestEngine
from plan_backtest.logging.config import configure_logging
from plan_backtest.providers import SyntheticPriceProvider
from plan_backtest.reporting import format_result_table

PLAN_FILE = Path(__file__).parent / "sp500_addition.json"


def main() -> None:
    configure_logging(level="INFO")

    plan = parse_plan(PLAN_FILE.read_text())
    print(f"Loaded plan with {len(plan)} items")

    engine = BacktestEngine(
        provider=SyntheticPriceProvider(),
        config=get_default_config(),
    )
    result = engine.run_backtest(plan)

    print()
    print(format_result_table(result))
    print()
    print(json.dumps(result.to_dict(plan)["stats"], indent=2))


if __name__ == "__main__":
    main()
