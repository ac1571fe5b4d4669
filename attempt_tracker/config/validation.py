"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

SUPPORTED_BACKENDS = ("memory", "sqlite")
SECTION_NAMES = ("timer", "storage", "resume", "submission")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_timer_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate timer parameters."""
        errors = []

        if "tick_interval_ms" in params:
            value = params["tick_interval_ms"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="tick_interval_ms",
                    message="Must be a positive integer",
                    value=value
                ))

        if "carry_baseline_on_reload" in params:
            value = params["carry_baseline_on_reload"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="carry_baseline_on_reload",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_storage_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate storage parameters."""
        errors = []

        for name in ("key_prefix", "anonymous_partition", "draft_key_prefix"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-empty string",
                        value=value
                    ))
                elif "_" in value and name != "draft_key_prefix":
                    # Underscore is the key separator
                    errors.append(ValidationError(
                        field=name,
                        message="Must not contain '_'",
                        value=value
                    ))

        if "backend" in params:
            value = params["backend"]
            if value not in SUPPORTED_BACKENDS:
                errors.append(ValidationError(
                    field="backend",
                    message=f"Must be one of {', '.join(SUPPORTED_BACKENDS)}",
                    value=value
                ))

        if "sqlite_path" in params:
            value = params["sqlite_path"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="sqlite_path",
                    message="Must be a non-empty string",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_resume_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate resume parameters."""
        errors = []

        if "challenge_url_template" in params:
            value = params["challenge_url_template"]
            if not isinstance(value, str) or "{slug}" not in value:
                errors.append(ValidationError(
                    field="challenge_url_template",
                    message="Must be a string containing '{slug}'",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_submission_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate grading API parameters."""
        errors = []

        if "base_url" in params:
            value = params["base_url"]
            if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                errors.append(ValidationError(
                    field="base_url",
                    message="Must be an http(s) URL",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "verify_ssl" in params:
            value = params["verify_ssl"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="verify_ssl",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        for section in SECTION_NAMES:
            if section in config and not isinstance(config[section], dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=config[section]
                ))
        if errors:
            return errors

        if "timer" in config:
            errors.extend(cls.validate_timer_params(config["timer"]))

        if "storage" in config:
            errors.extend(cls.validate_storage_params(config["storage"]))

        if "resume" in config:
            errors.extend(cls.validate_resume_params(config["resume"]))

        if "submission" in config:
            errors.extend(cls.validate_submission_params(config["submission"]))

        return errors
