"""Tests for CLI configuration management."""

import pytest
from unittest.mock import patch

from incident_cli.config import Config, ConfigError


@pytest.fixture(autouse=True)
def clear_api_url_env(monkeypatch):
    monkeypatch.delenv("INCIDENT_API_URL", raising=False)


@pytest.fixture
def temp_config_file(tmp_path):
    """Create temporary config file path."""
    return tmp_path / "config.yaml"


class TestConfig:
    """Tests for Config class."""

    def test_initialization_no_file(self, temp_config_file):
        config = Config(config_file=temp_config_file)

        assert config.config_file == temp_config_file
        assert config._config == {}

    def test_initialization_with_existing_file(self, temp_config_file):
        temp_config_file.write_text("api_url: http://incidents.internal:8080\n")

        config = Config(config_file=temp_config_file)

        assert config.get("api_url") == "http://incidents.internal:8080"

    def test_set_and_get(self, temp_config_file):
        config = Config(config_file=temp_config_file)
        config.set("api_url", "http://localhost:9000")

        reloaded = Config(config_file=temp_config_file)
        assert reloaded.get("api_url") == "http://localhost:9000"

    def test_saved_file_permissions(self, temp_config_file):
        config = Config(config_file=temp_config_file)
        config.set("api_url", "http://localhost:9000")

        assert temp_config_file.stat().st_mode & 0o777 == 0o600

    def test_environment_overrides_file(self, temp_config_file):
        temp_config_file.write_text("api_url: http://from-file\n")

        with patch.dict("os.environ", {"INCIDENT_API_URL": "http://from-env"}):
            config = Config(config_file=temp_config_file)

            assert config.get("api_url") == "http://from-env"
            assert config.get_all()["api_url"] == "http://from-env"

    def test_default_api_url(self, temp_config_file, monkeypatch):
        monkeypatch.delenv("INCIDENT_API_URL", raising=False)
        config = Config(config_file=temp_config_file)

        assert config.get_api_url() == "http://localhost:8080"

    def test_set_unknown_key(self, temp_config_file):
        config = Config(config_file=temp_config_file)

        with pytest.raises(ConfigError, match="Unknown configuration key 'colour'"):
            config.set("colour", "red")

        assert not temp_config_file.exists()

    def test_get_all_lists_only_known_keys(self, temp_config_file):
        temp_config_file.write_text("api_url: http://from-file\nlegacy: value\n")

        config = Config(config_file=temp_config_file)

        assert config.get_all() == {"api_url": "http://from-file"}

    def test_invalid_yaml(self, temp_config_file):
        temp_config_file.write_text("api_url: [unclosed\n")

        with pytest.raises(ConfigError, match="Failed to load config"):
            Config(config_file=temp_config_file)

    def test_non_mapping_yaml(self, temp_config_file):
        temp_config_file.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            Config(config_file=temp_config_file)
