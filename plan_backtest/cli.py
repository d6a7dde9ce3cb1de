"""Command-line entry point: run a plan file and print the results."""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .config.loader import ConfigLoader
from .engine import BacktestEngine
from .errors import ConfigurationError, PlanValidationError
from .data.plan_normalizer import parse_plan
from .logging.config import configure_logging, get_logger
from .reporting import format_result_table, generate_demo_curve

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plan-backtest",
        description="Backtest an event-anchored trading plan against historical bars.",
    )
    parser.add_argument("plan", type=Path,
                        help='Plan JSON file: {"plan": [...]} or a bare list of items')
    parser.add_argument("--json", action="store_true", dest="as_json",
                        help="Print the result as JSON instead of a table")
    parser.add_argument("--config-dir", type=Path, default=None,
                        help="Directory containing backtest.yaml")
    parser.add_argument("--provider", choices=("auto", "polygon", "synthetic"),
                        default=None, help="Override the configured price provider")
    parser.add_argument("--log-level", default=None,
                        help="Override the configured log level")
    parser.add_argument("--demo-curve", action="store_true",
                        help="Replace the equity curve with the cosmetic demo curve (JSON output only)")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides: dict = {}
    if args.provider:
        overrides["provider"] = {"name": args.provider}
    if args.log_level:
        overrides["logging"] = {"level": args.log_level}

    try:
        config = ConfigLoader.create(args.config_dir).load(overrides)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    configure_logging(level=config.logging.level, format_json=config.logging.format_json)
    logger = get_logger(__name__)

    try:
        raw_plan = args.plan.read_text()
    except OSError as e:
        print(f"Cannot read plan file: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        plan = parse_plan(raw_plan)
    except PlanValidationError as e:
        logger.error("Plan validation failed", error=str(e), field=e.field, index=e.index)
        print(f"Invalid plan: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        engine = BacktestEngine(config=config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    result = engine.run_backtest(plan)

    if args.as_json:
        payload = result.to_dict(plan)
        if args.demo_curve:
            payload["equityCurve"] = [
                point.to_dict() for point in generate_demo_curve(result.stats.total_return)
            ]
        print(json.dumps(payload, indent=2))
    else:
        print(format_result_table(result))

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
