"""Unit tests for configuration file parsing and resolution."""

from pathlib import Path

import pytest

from retriable.core.config import RetryConfig
from retriable.core.exceptions import ConfigurationError, ValidationError
from retriable.parsers.config_parser import (
    parse_config,
    parse_config_from_dict,
    read_config_file,
    resolve_config,
)

CONFIGS = Path(__file__).parent.parent / "fixtures" / "configs"


class TestParseConfig:
    """Test YAML configuration parser."""

    def test_parse_full_config(self):
        """Test every recognized key is read."""
        config = parse_config(CONFIGS / "retry.yaml")

        assert isinstance(config, RetryConfig)
        assert config.retries == 4
        assert config.sleep == "250ms"
        assert config.sleep_interval == pytest.approx(0.25)
        assert config.regex == ("not found", "permission denied")
        assert config.min_delay == "1s"
        assert config.max_delay == "30s"

    def test_keys_case_insensitive(self):
        """Test key case is ignored and a lone regex string is accepted."""
        config = parse_config(CONFIGS / "single_regex.yaml")

        assert config.retries == 2
        assert config.sleep_interval == 0.0
        assert config.regex == ("already exists",)

    def test_empty_file_uses_defaults(self):
        """Test an empty file falls back to defaults."""
        config = parse_config(CONFIGS / "empty.yaml")

        assert config == RetryConfig()

    def test_file_not_found(self, tmp_path):
        """Test missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="not found"):
            parse_config(tmp_path / "missing.yaml")

    def test_directory_rejected(self, tmp_path):
        """Test a directory is not accepted as a config file."""
        with pytest.raises(ConfigurationError):
            parse_config(tmp_path)

    def test_invalid_yaml(self):
        """Test malformed YAML raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            parse_config(CONFIGS / "broken.yaml")

    def test_not_a_mapping(self):
        """Test a top-level list raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="expected a mapping"):
            parse_config(CONFIGS / "not_a_mapping.yaml")

    def test_invalid_sleep(self):
        """Test an unparsable duration raises ValidationError."""
        with pytest.raises(ValidationError, match="sleep"):
            parse_config(CONFIGS / "invalid_sleep.yaml")

    def test_hyphenated_keys(self, tmp_path):
        """Test keys may use hyphens."""
        path = tmp_path / "retry.yaml"
        path.write_text("min-delay: 2s\n")

        assert read_config_file(path) == {"min_delay": "2s"}


class TestParseConfigFromDict:
    """Test dictionary configuration parser."""

    def test_valid(self):
        """Test dictionary values are validated."""
        config = parse_config_from_dict({"retries": 3, "sleep": "1ms", "regex": ["x"]})

        assert config.to_policy().max_attempts == 3
        assert config.to_match_rules().patterns == ("x",)

    def test_invalid_regex(self):
        """Test a pattern that does not compile is rejected."""
        with pytest.raises(ValidationError, match="regex"):
            parse_config_from_dict({"regex": ["(oops"]})

    def test_zero_retries(self):
        """Test zero retries is rejected."""
        with pytest.raises(ValidationError):
            parse_config_from_dict({"retries": 0})


class TestResolveConfig:
    """Test precedence between config file and explicit settings."""

    def test_defaults_without_file(self):
        """Test defaults apply with no file and no overrides."""
        assert resolve_config({}) == RetryConfig()

    def test_file_values_used(self):
        """Test file values replace defaults."""
        config = resolve_config({}, CONFIGS / "retry.yaml")

        assert config.retries == 4
        assert config.sleep == "250ms"

    def test_overrides_beat_file(self):
        """Test explicit settings take precedence over file values."""
        config = resolve_config(
            {"retries": "2", "regex": ["timeout"]}, CONFIGS / "retry.yaml"
        )

        assert config.retries == 2
        assert config.regex == ("timeout",)
        # Untouched keys still come from the file
        assert config.sleep == "250ms"
        assert config.max_delay == "30s"

    def test_reserved_keys_by_flag_name(self):
        """Test min and max overrides use their flag names."""
        config = resolve_config({"min": "3s", "max": "9s"})

        assert config.min_interval == 3.0
        assert config.max_interval == 9.0

    def test_missing_file(self, tmp_path):
        """Test an unreadable config path is a configuration error."""
        with pytest.raises(ConfigurationError):
            resolve_config({}, tmp_path / "nope.yaml")

    def test_invalid_override(self):
        """Test an invalid explicit value is a validation error."""
        with pytest.raises(ValidationError):
            resolve_config({"sleep": "five seconds"})
