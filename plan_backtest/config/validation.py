"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from datetime import date
from typing import Any

from .defaults import BacktestParams, LoggingParams, ProviderParams

SECTIONS = {
    "backtest": BacktestParams,
    "provider": ProviderParams,
    "logging": LoggingParams,
}
PROVIDER_NAMES = ("auto", "polygon", "synthetic")
GRANULARITIES = ("minute", "hour", "day", "week")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_backtest_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate orchestration parameters."""
        errors = []

        if "default_from" in params:
            value = params["default_from"]
            try:
                date.fromisoformat(str(value))
            except ValueError:
                errors.append(ValidationError(
                    field="default_from",
                    message="Must be a YYYY-MM-DD date",
                    value=value
                ))

        if "max_workers" in params:
            value = params["max_workers"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="max_workers",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_provider_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate price provider parameters."""
        errors = []

        if "name" in params:
            value = params["name"]
            if value not in PROVIDER_NAMES:
                errors.append(ValidationError(
                    field="provider.name",
                    message=f"Must be one of {', '.join(PROVIDER_NAMES)}",
                    value=value
                ))

        if "api_key" in params:
            value = params["api_key"]
            if value is not None and not isinstance(value, str):
                errors.append(ValidationError(
                    field="provider.api_key",
                    message="Must be a string",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="provider.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "granularities" in params:
            value = params["granularities"]
            if (
                not isinstance(value, (list, tuple))
                or not value
                or any(g not in GRANULARITIES for g in value)
            ):
                errors.append(ValidationError(
                    field="provider.granularities",
                    message=f"Must be a non-empty list drawn from {', '.join(GRANULARITIES)}",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="logging.format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate a complete merged configuration dict."""
        errors = []

        for section, value in config.items():
            if section not in SECTIONS:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=value
                ))
                continue
            if not isinstance(value, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=value
                ))
                continue
            known = {f.name for f in fields(SECTIONS[section])}
            for key in value:
                if key not in known:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown configuration key",
                        value=value[key]
                    ))

        if errors:
            return errors

        if "backtest" in config:
            errors.extend(ConfigValidator.validate_backtest_params(config["backtest"]))

        if "provider" in config:
            errors.extend(ConfigValidator.validate_provider_params(config["provider"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
