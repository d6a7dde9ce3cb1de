"""
Failures of collaborators and of runtime setup, as opposed to bad plans.
"""

from typing import Any, Optional


class SystemFailureError(Exception):
    """Something outside the plan went wrong."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ProviderError(SystemFailureError):
    """A price provider could not return a series for a ticker."""

    def __init__(self, message: str, ticker: Optional[str] = None,
                 provider: Optional[str] = None, status_code: Optional[int] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.ticker = ticker
        self.provider = provider
        self.status_code = status_code


class ConfigurationError(SystemFailureError):
    """Configuration failed to load or validate."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
