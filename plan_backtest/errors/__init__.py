"""
Structured error classification for the plan backtester.

Expected business outcomes (a ticker with no data, an exit resolving before its
entry) are never raised; these exceptions cover contract violations at the
boundary and failures of external collaborators.
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
    PlanValidationError,
)
from .system_failures import (
    SystemFailureError,
    ProviderError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    "PlanValidationError",
    # System Failures
    "SystemFailureError",
    "ProviderError",
    "ConfigurationError",
]
