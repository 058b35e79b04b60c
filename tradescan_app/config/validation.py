"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import ParserParams, PatternParams, PnLParams


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


SECTIONS = {
    "parser": ParserParams,
    "patterns": PatternParams,
    "pnl": PnLParams,
}


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_parser_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate record parser parameters."""
        errors = []

        if "default_year_token" in params:
            value = params["default_year_token"]
            if not isinstance(value, str) or not value.isdigit():
                errors.append(ValidationError(
                    field="default_year_token",
                    message="Must be a string of digits",
                    value=value
                ))

        if "century_prefix" in params:
            value = params["century_prefix"]
            if not isinstance(value, str) or len(value) != 2 or not value.isdigit():
                errors.append(ValidationError(
                    field="century_prefix",
                    message="Must be a two-digit string",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_pattern_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate pattern miner thresholds."""
        errors = []

        if "min_samples" in params:
            value = params["min_samples"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="min_samples",
                    message="Must be a positive integer",
                    value=value
                ))

        for name in ("min_win_rate_pct", "recommendation_win_rate_pct"):
            if name in params:
                value = params[name]
                if not isinstance(value, (int, float)) or isinstance(value, bool) or not 0 <= value <= 100:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_pnl_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate PnL parameters."""
        errors = []

        if "win_rate_decimals" in params:
            value = params["win_rate_decimals"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="win_rate_decimals",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        for section, params_type in SECTIONS.items():
            params = config.get(section, {})
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue

            known = {f.name for f in fields(params_type)}
            for key in params:
                if key not in known:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown parameter",
                        value=params[key]
                    ))

        for section in config:
            if section not in SECTIONS:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=config[section]
                ))

        if isinstance(config.get("parser"), dict):
            errors.extend(ConfigValidator.validate_parser_params(config["parser"]))
        if isinstance(config.get("patterns"), dict):
            errors.extend(ConfigValidator.validate_pattern_params(config["patterns"]))
        if isinstance(config.get("pnl"), dict):
            errors.extend(ConfigValidator.validate_pnl_params(config["pnl"]))

        return errors
