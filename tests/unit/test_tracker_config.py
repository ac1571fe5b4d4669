"""Unit tests for configuration management."""

from pathlib import Path

import pytest
import yaml

from attempt_tracker.config.defaults import TrackerConfig, get_default_config
from attempt_tracker.config.loader import ConfigLoader
from attempt_tracker.config.validation import ConfigValidator
from attempt_tracker.errors import ConfigurationError


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration can be created."""
        config = get_default_config()
        assert config.timer.tick_interval_ms == 1000
        assert config.timer.carry_baseline_on_reload is False
        assert config.storage.key_prefix == "challenge"
        assert config.storage.anonymous_partition == "anonymous"
        assert config.resume.challenge_url_template == "/tantangan/{slug}"


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        """Default config dir is the project config/ directory."""
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)
        assert loader.config_dir.name == "config"

    def test_shipped_config_is_valid(self) -> None:
        """The bundled tracker.yaml loads and validates."""
        config = ConfigLoader.create().load_config()
        assert isinstance(config, TrackerConfig)

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        """An empty config dir yields the defaults."""
        config = ConfigLoader.create(tmp_path).load_config()
        assert config == get_default_config()

    def test_precedence(self, tmp_path: Path) -> None:
        """Overrides beat the file, the file beats defaults."""
        (tmp_path / "tracker.yaml").write_text(yaml.safe_dump({
            "timer": {"tick_interval_ms": 500, "carry_baseline_on_reload": True},
            "storage": {"backend": "sqlite", "sqlite_path": "x.db"},
        }))
        loader = ConfigLoader.create(tmp_path)

        config = loader.load_config({"timer": {"tick_interval_ms": 250}})

        assert config.timer.tick_interval_ms == 250
        assert config.timer.carry_baseline_on_reload is True
        assert config.storage.backend == "sqlite"
        assert config.storage.key_prefix == "challenge"

    def test_empty_yaml_file(self, tmp_path: Path) -> None:
        """An empty YAML document is treated as no overrides."""
        (tmp_path / "tracker.yaml").write_text("")
        assert ConfigLoader.create(tmp_path).merge_config() == \
            ConfigLoader.create(tmp_path)._dataclass_to_dict(get_default_config())

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        """Keys that no dataclass knows are dropped when building the config."""
        config = ConfigLoader.create(tmp_path).load_config({"timer": {"colour": "blue"}})
        assert config.timer == get_default_config().timer

    def test_invalid_config_raises(self, tmp_path: Path) -> None:
        """Validation failures raise ConfigurationError listing every problem."""
        loader = ConfigLoader.create(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load_config({
                "timer": {"tick_interval_ms": 0},
                "storage": {"backend": "redis"},
            })

        fields = {err.field for err in exc_info.value.errors}
        assert fields == {"tick_interval_ms", "backend"}

    def test_empty_section_raises(self, tmp_path: Path) -> None:
        """A section left empty in tracker.yaml is reported, not merged as None."""
        (tmp_path / "tracker.yaml").write_text("timer:\nstorage:\n  backend: memory\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(tmp_path).load_config()

        assert [err.field for err in exc_info.value.errors] == ["timer"]

    def test_non_mapping_root_raises(self, tmp_path: Path) -> None:
        """tracker.yaml must hold a mapping at the top level."""
        (tmp_path / "tracker.yaml").write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).load_config()

    def test_unparseable_yaml_raises(self, tmp_path: Path) -> None:
        """YAML syntax errors surface as ConfigurationError."""
        (tmp_path / "tracker.yaml").write_text("timer: [unclosed\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).load_config()


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_defaults(self) -> None:
        """Defaults are valid."""
        loader = ConfigLoader.create()
        assert ConfigValidator.validate_config(loader._dataclass_to_dict(get_default_config())) == []

    @pytest.mark.parametrize("value", [0, -1, 1.5, True, "1000"])
    def test_invalid_tick_interval(self, value) -> None:
        """Tick interval must be a positive integer."""
        errors = ConfigValidator.validate_timer_params({"tick_interval_ms": value})
        assert len(errors) == 1
        assert errors[0].field == "tick_interval_ms"

    def test_key_prefix_cannot_contain_separator(self) -> None:
        """Underscore in key components would break key isolation."""
        errors = ConfigValidator.validate_storage_params({"key_prefix": "my_prefix"})
        assert errors[0].field == "key_prefix"

    def test_url_template_needs_slug(self) -> None:
        """Resume URL must include the slug placeholder."""
        errors = ConfigValidator.validate_resume_params({"challenge_url_template": "/challenge"})
        assert errors[0].field == "challenge_url_template"

    def test_submission_params(self) -> None:
        """Base URL, timeout and verify_ssl are checked."""
        errors = ConfigValidator.validate_submission_params({
            "base_url": "ftp://grader",
            "timeout_seconds": 0,
            "verify_ssl": "yes",
        })
        assert [e.field for e in errors] == ["base_url", "timeout_seconds", "verify_ssl"]

    def test_non_mapping_sections(self) -> None:
        """Sections that are not mappings are reported by name."""
        errors = ConfigValidator.validate_config({"timer": None, "resume": ["x"], "storage": {}})
        assert [(e.field, e.value) for e in errors] == [("timer", None), ("resume", ["x"])]
