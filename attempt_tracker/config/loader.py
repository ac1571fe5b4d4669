"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    ResumeParams,
    StorageParams,
    SubmissionApiParams,
    TimerParams,
    TrackerConfig,
    get_default_config,
)
from .validation import ConfigValidator

CONFIG_FILE = "tracker.yaml"

_SECTIONS = {
    "timer": TimerParams,
    "storage": StorageParams,
    "resume": ResumeParams,
    "submission": SubmissionApiParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: TrackerConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from tracker.yaml, or nothing if it is absent."""
        config_file = self.config_dir / CONFIG_FILE

        if not config_file.exists():
            return {}

        try:
            with open(config_file) as f:
                file_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse {config_file}: {e}") from e

        if file_config is None:
            return {}
        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"{config_file} must contain a mapping, got {type(file_config).__name__}"
            )

        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. tracker.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_config(self, overrides: Optional[dict[str, Any]] = None) -> TrackerConfig:
        """
        Merge, validate and build a TrackerConfig.

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            raise ConfigurationError(
                "Invalid tracker configuration: " + "; ".join(
                    f"{err.field}: {err.message} (got: {err.value})" for err in errors
                ),
                errors=errors
            )

        sections = {}
        for name, section_cls in _SECTIONS.items():
            known = {f.name for f in fields(section_cls)}
            values = {k: v for k, v in merged.get(name, {}).items() if k in known}
            sections[name] = section_cls(**values)

        return TrackerConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
