"""
Data quality errors: bad plans from callers and bad payloads from providers.
"""

from typing import Any, Optional


class DataQualityError(Exception):
    """Input data could not be used as given."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedDataError(DataQualityError):
    """A provider payload or row does not have the expected shape."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class PlanValidationError(DataQualityError):
    """A plan violates the input contract; the whole request is rejected."""

    def __init__(self, message: str, field: Optional[str] = None,
                 index: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.index = index
        self.recoverable = False
