"""Integration tests for configuration module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from founderflow.config import (
    AppConfig,
    ConfigurationError,
    load_config,
    validate_config_file,
)
from founderflow.config.environment import EnvironmentConfig, load_environment_config
from founderflow.config.loader import apply_environment_overrides
from founderflow.config.models import ChannelConfig, LoggingConfig, NormalizationConfig
from founderflow.config.validators import check_for_warnings

# Test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, clean_env):
        """Test loading a valid configuration file."""
        app_config, env_config = load_config(FIXTURES_DIR / "config_valid.yaml")

        # Verify normalization
        assert app_config.normalization.display_tag_cap == 4
        assert app_config.normalization.index_tag_cap == 10
        assert app_config.normalization.unknown_company_label == "Stealth"

        # Verify channels (lower-cased; unspecified lists keep defaults)
        assert app_config.channels.network_domains == ["linkedin.com"]
        assert app_config.channels.job_board_domains == ["greenhouse.io", "lever.co"]
        assert app_config.channels.careers_path_markers == ["careers", "jobs"]
        assert "gmail.com" in app_config.channels.disqualified_company_domains

        # Verify batch, directory and logging
        assert app_config.batch.max_workers == 2
        assert app_config.directory.default_sort == "company_az"
        assert app_config.directory.require_actionable_link is True
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"

        assert env_config.environment == "production"

    def test_config_file_not_found(self, clean_env):
        """Test error when an explicit config file doesn't exist."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert "not found" in str(exc_info.value)

    def test_defaults_without_config_file(self, clean_env, tmp_path):
        """Test that built-in defaults apply when no config file exists."""
        clean_env.chdir(tmp_path)

        app_config, _ = load_config()

        assert app_config == AppConfig()
        assert app_config.normalization.display_tag_cap == 6
        assert app_config.logging.level == "INFO"
        assert app_config.logging.format == "key-value"

    def test_default_location(self, clean_env, tmp_path):
        """Test that ./config.yaml is picked up automatically."""
        (tmp_path / "config.yaml").write_text("batch:\n  max_workers: 3\n")
        clean_env.chdir(tmp_path)

        app_config, _ = load_config()

        assert app_config.batch.max_workers == 3

    def test_empty_file_means_defaults(self, clean_env, tmp_path):
        """Test that an empty config file is accepted."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        app_config, _ = load_config(config_file)

        assert app_config == AppConfig()

    def test_invalid_yaml_syntax(self, tmp_path, clean_env):
        """Test error on invalid YAML syntax."""
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text("normalization: [unclosed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "Failed to parse YAML" in str(exc_info.value)

    def test_non_mapping_top_level(self, tmp_path, clean_env):
        """Test error when the file holds a list."""
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- normalization\n- channels\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "mapping" in str(exc_info.value)


class TestConfigurationValidation:
    """Test configuration validation rules."""

    def test_invalid_values_are_reported_together(self, clean_env):
        """Test that every invalid field is listed."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "config_invalid.yaml")

        errors = "\n".join(exc_info.value.errors)
        assert len(exc_info.value.errors) == 3
        assert "normalization -> display_tag_cap" in errors
        assert "batch -> max_workers" in errors
        assert "logging -> level" in errors

    def test_empty_network_domains(self):
        """Test that at least one network domain is required."""
        with pytest.raises(ValidationError):
            ChannelConfig(network_domains=["  ", ""])

    def test_channel_entries_normalized(self):
        """Test that list entries are stripped, lower-cased and de-duplicated."""
        config = ChannelConfig(job_board_domains=[" Lever.co", "lever.co", "", "Workable.com"])

        assert config.job_board_domains == ["lever.co", "workable.com"]

    def test_to_rules(self):
        """Test conversion to classifier rules."""
        rules = ChannelConfig(network_domains=["xing.com"]).to_rules()

        assert rules.network_domains == ("xing.com",)
        assert rules.is_network_profile("https://www.xing.com/profile/x")

    def test_blank_unknown_company_label(self):
        """Test that the placeholder label cannot be blank."""
        with pytest.raises(ValidationError):
            NormalizationConfig(unknown_company_label="   ")

    def test_label_is_stripped(self):
        """Test label whitespace handling."""
        assert NormalizationConfig(unknown_company_label=" Stealth ").unknown_company_label == "Stealth"

    def test_tag_cap_bounds(self):
        """Test cap ranges."""
        with pytest.raises(ValidationError):
            NormalizationConfig(index_tag_cap=501)
        assert NormalizationConfig(display_tag_cap=0).display_tag_cap == 0

    def test_enum_defaults_are_plain_values(self):
        """Test that defaults are stored as values, like parsed input."""
        config = LoggingConfig()

        assert config.level == "INFO"
        assert config.format == "key-value"

    def test_unknown_sort_order(self):
        """Test directory sort validation."""
        with pytest.raises(ValidationError):
            AppConfig(directory={"default_sort": "random"})


class TestConfigurationWarnings:
    """Test non-fatal configuration warnings."""

    def test_display_cap_above_index_cap(self):
        """Test the cap ordering warning."""
        warnings = check_for_warnings({"normalization": {"display_tag_cap": 30, "index_tag_cap": 10}})

        assert len(warnings) == 1
        assert "display_tag_cap" in warnings[0]

    def test_duplicates_and_empty_markers(self):
        """Test channel list warnings."""
        warnings = check_for_warnings({
            "channels": {
                "network_domains": ["linkedin.com", "LinkedIn.com"],
                "careers_path_markers": [],
            }
        })

        assert len(warnings) == 2
        assert any("careers_path_markers" in w for w in warnings)
        assert any("linkedin.com" in w for w in warnings)

    def test_large_worker_count(self):
        """Test the worker count warning."""
        assert check_for_warnings({"batch": {"max_workers": 32}})
        assert check_for_warnings({"batch": {"max_workers": 4}}) == []

    def test_clean_config_has_no_warnings(self):
        """Test that an empty config raises no warnings."""
        assert check_for_warnings({}) == []

    def test_warnings_emitted_on_load(self, tmp_path, clean_env):
        """Test that load_config emits UserWarnings."""
        config_file = tmp_path / "caps.yaml"
        config_file.write_text("normalization:\n  display_tag_cap: 30\n  index_tag_cap: 10\n")

        with pytest.warns(UserWarning, match="display_tag_cap"):
            load_config(config_file)


class TestEnvironmentVariables:
    """Test environment variable loading."""

    def test_all_optional(self, clean_env):
        """Test loading with no variables set."""
        env_config = load_environment_config()

        assert env_config.log_level is None
        assert env_config.log_format is None
        assert env_config.max_workers is None
        assert env_config.environment == "production"

    def test_valid_values_normalized(self, clean_env):
        """Test case normalization of valid values."""
        clean_env.setenv("LOG_LEVEL", "warning")
        clean_env.setenv("LOG_FORMAT", "JSON")
        clean_env.setenv("ENVIRONMENT", "staging")
        clean_env.setenv("FOUNDERFLOW_MAX_WORKERS", "8")

        env_config = load_environment_config()

        assert env_config.log_level == "WARNING"
        assert env_config.log_format == "json"
        assert env_config.environment == "staging"
        assert env_config.max_workers == 8

    @pytest.mark.parametrize(
        "name,value",
        [
            ("LOG_LEVEL", "LOUD"),
            ("LOG_FORMAT", "xml"),
            ("FOUNDERFLOW_MAX_WORKERS", "abc"),
            ("FOUNDERFLOW_MAX_WORKERS", "0"),
            ("FOUNDERFLOW_MAX_WORKERS", "65"),
        ],
    )
    def test_invalid_values(self, clean_env, name, value):
        """Test validation errors for bad values."""
        clean_env.setenv(name, value)

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert name in str(exc_info.value)

    def test_environment_overrides_file(self, clean_env):
        """Test that environment values win over the config file."""
        clean_env.setenv("LOG_LEVEL", "ERROR")
        clean_env.setenv("FOUNDERFLOW_MAX_WORKERS", "5")

        app_config, _ = load_config(FIXTURES_DIR / "config_valid.yaml")

        assert app_config.logging.level == "ERROR"
        assert app_config.logging.format == "json"
        assert app_config.batch.max_workers == 5
        assert app_config.normalization.display_tag_cap == 4

    def test_no_overrides_returns_same_config(self):
        """Test apply_environment_overrides without values."""
        app_config = AppConfig()

        assert apply_environment_overrides(app_config, EnvironmentConfig()) is app_config


class TestConfigurationHelpers:
    """Test helper utilities."""

    def test_validate_config_file_utility(self, capsys):
        """Test the validate_config_file helper."""
        assert validate_config_file(FIXTURES_DIR / "config_valid.yaml") is True
        assert "✓" in capsys.readouterr().out

        assert validate_config_file(FIXTURES_DIR / "config_invalid.yaml") is False
        assert "✗" in capsys.readouterr().out
