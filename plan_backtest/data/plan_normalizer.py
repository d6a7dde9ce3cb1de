"""
Plan data normalization for converting raw plan data to canonical format.

This module is the caller-contract boundary: raw JSON-like plan items are
validated and converted into PlanItem objects before they reach the engine.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import urlparse

from ..errors import PlanValidationError
from ..utils.time import parse_instant
from .models import DATE_ONLY_SOURCE, Leg, PlanItem

logger = logging.getLogger(__name__)

LEG_FIELDS = ("entry", "exit")


@dataclass
class PlanNormalizationResult:
    """Result of plan normalization process."""
    # Normalized items (None if invalid)
    items: Optional[list[PlanItem]] = None
    # Processing metadata
    success: bool = True
    error_msg: Optional[str] = None
    error_field: Optional[str] = None
    error_index: Optional[int] = None

    @classmethod
    def success_with_items(cls, items: list[PlanItem]):
        """Create successful result with normalized items."""
        return cls(items=items, success=True)

    @classmethod
    def error(cls, error_msg: str, field: Optional[str] = None,
              index: Optional[int] = None):
        """Create error result."""
        return cls(
            success=False,
            error_msg=error_msg,
            error_field=field,
            error_index=index
        )


class PlanNormalizer:
    """
    Plan data normalization pipeline.

    Accepts either a bare list of items or a ``{"plan": [...]}`` body, as a
    Python object or a JSON string.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """
        Initialize plan normalizer with configuration.

        Args:
            config: Normalization configuration dict. ``require_url`` (default
                True) enforces absolute http(s) source URLs.
        """
        self.config = config or {}
        self.require_url = self.config.get("require_url", True)
        self.logger = logger

    def normalize_plan(self, plan_data: Union[str, list, dict]) -> PlanNormalizationResult:
        """
        Normalize a trading plan from raw format to canonical format.

        Args:
            plan_data: Raw plan (list of items, ``{"plan": [...]}`` or JSON text)

        Returns:
            PlanNormalizationResult with normalized items or error information
        """
        if isinstance(plan_data, str):
            try:
                plan_data = json.loads(plan_data)
            except json.JSONDecodeError as e:
                return PlanNormalizationResult.error(f"Failed to parse plan JSON: {e}")

        if isinstance(plan_data, dict):
            if "plan" not in plan_data:
                return PlanNormalizationResult.error("Missing required field: plan", field="plan")
            plan_data = plan_data["plan"]

        if not isinstance(plan_data, list):
            return PlanNormalizationResult.error("plan must be a list", field="plan")

        items = []
        for index, raw_item in enumerate(plan_data):
            try:
                items.append(self.normalize_item(raw_item, index))
            except PlanValidationError as e:
                self.logger.debug("Rejected plan item %s: %s", index, e)
                return PlanNormalizationResult.error(str(e), field=e.field, index=index)

        return PlanNormalizationResult.success_with_items(items)

    def normalize_item(self, raw_item: Any, index: int = 0) -> PlanItem:
        """
        Validate and convert one raw plan item.

        Raises:
            PlanValidationError: If the item violates the plan contract
        """
        if not isinstance(raw_item, dict):
            raise PlanValidationError(f"plan[{index}] must be an object", index=index)

        ticker = raw_item.get("ticker")
        if not isinstance(ticker, str) or not ticker.strip():
            raise PlanValidationError(
                f"plan[{index}].ticker must be a non-empty string",
                field="ticker",
                index=index
            )

        legs = {}
        for leg_name in LEG_FIELDS:
            legs[leg_name] = self._normalize_leg(raw_item.get(leg_name), leg_name, index)

        return PlanItem(
            ticker=ticker.strip().upper(),
            entry=legs["entry"],
            exit=legs["exit"],
        )

    def _normalize_leg(self, raw_leg: Any, leg_name: str, index: int) -> Leg:
        """Validate one entry/exit leg."""
        if not isinstance(raw_leg, dict):
            raise PlanValidationError(
                f"plan[{index}].{leg_name} must be an object",
                field=leg_name,
                index=index
            )

        at = raw_leg.get("at")
        if at is not None:
            if not isinstance(at, str):
                raise PlanValidationError(
                    f"plan[{index}].{leg_name}.at must be a string or null",
                    field=f"{leg_name}.at",
                    index=index
                )
            try:
                at = parse_instant(at)
            except ValueError as e:
                raise PlanValidationError(
                    f"Invalid plan[{index}].{leg_name}.at timestamp: {e}",
                    field=f"{leg_name}.at",
                    index=index
                ) from e

        source = raw_leg.get("source")
        if source is None and at is None:
            source = DATE_ONLY_SOURCE
        if not isinstance(source, str):
            raise PlanValidationError(
                f"plan[{index}].{leg_name}.source must be a string",
                field=f"{leg_name}.source",
                index=index
            )

        url = raw_leg.get("url")
        if not isinstance(url, str) or (self.require_url and not _is_absolute_url(url)):
            raise PlanValidationError(
                f"plan[{index}].{leg_name}.url must be an absolute http(s) URL",
                field=f"{leg_name}.url",
                index=index
            )

        return Leg(at=at, source=source, url=url)


def _is_absolute_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_plan(plan_data: Union[str, list, dict],
               config: Optional[dict[str, Any]] = None) -> list[PlanItem]:
    """
    Normalize a raw plan, raising on the first invalid item.

    Raises:
        PlanValidationError: If the plan violates the plan contract
    """
    result = PlanNormalizer(config).normalize_plan(plan_data)
    if not result.success:
        raise PlanValidationError(
            result.error_msg,
            field=result.error_field,
            index=result.error_index
        )
    return result.items
