#!/usr/bin/env python3
"""Run a plan file through the backtester.

Usage:
    python scripts/run_backtest.py examples/sp500_addition.json
    python scripts/run_backtest.py plan.json --json --provider synthetic
"""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from plan_backtest.cli import main


if __name__ == "__main__":
    sys.exit(main())
