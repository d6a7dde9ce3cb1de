"""
Execution resolution.

Maps plan items onto realized executions against a ticker's bar series.
"""

from .resolver import resolve, resolve_all

__all__ = ["resolve", "resolve_all"]
