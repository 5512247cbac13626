"""Local settings for the incidents CLI."""

import os
import yaml
from pathlib import Path
from typing import Dict, Optional

CONFIG_FILE = Path.home() / ".incident-cli" / "config.yaml"
DEFAULT_API_URL = "http://localhost:8080"
API_URL_ENV = "INCIDENT_API_URL"
KNOWN_KEYS = ("api_url",)


class ConfigError(Exception):
    """Raised when the settings file cannot be read or written."""


class Config:
    """
    The CLI's API URL setting.

    The value is read from INCIDENT_API_URL when set, otherwise from a YAML
    file (``~/.incident-cli/config.yaml`` by default) that only its owner
    can read.
    """

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = config_file or CONFIG_FILE
        self._config: Dict[str, str] = self._read()

    def _read(self) -> Dict[str, str]:
        if not self.config_file.exists():
            return {}
        try:
            data = yaml.safe_load(self.config_file.read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {self.config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.config_file} must contain a mapping")
        return data

    def _write(self):
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            self.config_file.write_text(yaml.safe_dump(self._config, default_flow_style=False))
            self.config_file.chmod(0o600)
        except OSError as e:
            raise ConfigError(f"Failed to save config to {self.config_file}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        if key == "api_url" and os.environ.get(API_URL_ENV):
            return os.environ[API_URL_ENV]
        return self._config.get(key)

    def get_api_url(self) -> str:
        return self.get("api_url") or DEFAULT_API_URL

    def set(self, key: str, value: str):
        if key not in KNOWN_KEYS:
            raise ConfigError(
                f"Unknown configuration key '{key}' (known keys: {', '.join(KNOWN_KEYS)})"
            )
        self._config[key] = value
        self._write()

    def get_all(self) -> Dict[str, str]:
        """Effective values of the known keys, environment included."""
        values = {}
        for key in KNOWN_KEYS:
            value = self.get(key)
            if value:
                values[key] = value
        return values
