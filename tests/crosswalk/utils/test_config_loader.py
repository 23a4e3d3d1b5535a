"""Tests for YAML configuration loading."""

import pytest
import yaml

from crosswalk.utils.config_loader import (
    CONFIG_ENV_VAR, ConfigLoader, CrosswalkSettings, load_settings,
)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "crosswalk.yaml"
    path.write_text(yaml.safe_dump({
        "logging": {"level": "DEBUG", "json_files": True},
        "convert": {"fail_on_errors": True},
    }))
    return path


class TestConfigLoader:
    """Reading YAML files."""

    def test_dot_notation(self, config_file):
        """Nested keys are reachable with dots."""
        loader = ConfigLoader(config_file)
        assert loader.get("logging.level") == "DEBUG"
        assert loader.get("logging.missing", "x") == "x"
        assert loader.as_dict()["convert"] == {"fail_on_errors": True}

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ConfigLoader(tmp_path / "absent.yaml")

    def test_non_mapping(self, tmp_path):
        """A YAML list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            ConfigLoader(path)

    def test_malformed_yaml(self, tmp_path):
        """Syntax errors propagate."""
        path = tmp_path / "bad.yaml"
        path.write_text("logging: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            ConfigLoader(path)

    def test_empty_file(self, tmp_path):
        """An empty file is an empty configuration."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        loader = ConfigLoader(path)
        assert loader.as_dict() == {}
        assert loader.section("logging") == {}

    def test_section_must_be_mapping(self, tmp_path):
        """A scalar section is rejected; a null one is empty."""
        path = tmp_path / "sections.yaml"
        path.write_text("logging: verbose\nconvert:\n")
        loader = ConfigLoader(path)
        assert loader.section("convert") == {}
        with pytest.raises(ValueError):
            loader.section("logging")


class TestLoadSettings:
    """Typed settings."""

    def test_defaults(self, monkeypatch):
        """No path gives defaults."""
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        settings = load_settings()
        assert settings == CrosswalkSettings()
        assert settings.logging.level == "INFO"
        assert settings.convert.fail_on_errors is False
        assert settings.convert.include_errors is True

    def test_from_file(self, config_file):
        """Sections override defaults field by field."""
        settings = load_settings(config_file)
        assert settings.logging.level == "DEBUG"
        assert settings.logging.json_files is True
        assert settings.logging.log_dir is None
        assert settings.convert.fail_on_errors is True

    def test_environment_variable(self, config_file, monkeypatch):
        """CROSSWALK_CONFIG is used when no path is given."""
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert load_settings().convert.fail_on_errors is True

    def test_wrong_setting_type(self, tmp_path):
        """Settings of the wrong type are rejected as ValueError."""
        path = tmp_path / "typed.yaml"
        path.write_text("convert:\n  fail_on_errors: [1, 2]\n")
        with pytest.raises(ValueError):
            load_settings(path)
