"""
structlog setup and event helpers for the plan backtester.

Every module obtains its logger through ``get_logger`` so that one call to
``configure_logging`` controls level, rendering and destination for the whole
run. Records go to stderr; stdout is reserved for results.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

_BASE_PROCESSORS = (
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
)


def configure_logging(level: str = "INFO", format_json: bool = False,
                      include_timestamp: bool = True) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Level name, e.g. "DEBUG" or "WARNING"
        format_json: Render JSON lines instead of console key=value output
        include_timestamp: Add an ISO timestamp to every record
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
        format="%(message)s"
    )

    processors = list(_BASE_PROCESSORS)
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors.append(
        structlog.processors.JSONRenderer() if format_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Logger for a module, typically ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def get_run_logger(name: str) -> FilteringBoundLogger:
    """Logger for orchestration events, tagged ``subsystem="backtest"``."""
    return get_logger(name).bind(subsystem="backtest")


def log_execution_dropped(
    logger: FilteringBoundLogger,
    ticker: str,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Record a plan item that yielded no execution.

    This is a normal outcome (no bars, or exit before entry), hence debug level.

    Args:
        logger: Logger to emit on
        ticker: Ticker of the item
        reason: Short tag such as "no_data" or "exit_before_entry"
        context: Extra fields, e.g. the resolved bar indices
    """
    event_logger = logger.bind(ticker=ticker, reason=reason)
    if context:
        event_logger = event_logger.bind(context=context)
    event_logger.debug("Plan item produced no execution")


def log_provider_failure(
    logger: FilteringBoundLogger,
    ticker: str,
    error: Exception,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Record a failed series retrieval; the run continues without the ticker.

    Args:
        logger: Logger to emit on
        ticker: Ticker whose retrieval failed
        error: Exception raised by the provider
        context: Extra fields, e.g. the requested date range
    """
    event_logger = logger.bind(
        ticker=ticker,
        error=str(error),
        error_type=type(error).__name__,
    )
    if context:
        event_logger = event_logger.bind(context=context)
    event_logger.warning("Price series retrieval failed, continuing without ticker")
