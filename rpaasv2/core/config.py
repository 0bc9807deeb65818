"""
Configuration Management.

Loads the API targets and credentials from the environment and the client
settings from an optional YAML file.

Environment (.env style, read with pydantic-settings):
    RPAAS_URL, RPAAS_USER, RPAAS_PASSWORD   - direct access to the RPaaS API
    TSURU_TARGET, TSURU_TOKEN               - access through the Tsuru service proxy
    RPAASV2_CONFIG                          - path of the settings file

Settings (YAML, default ~/.rpaasv2/config.yaml):
    client:   request timeout, user agent
    logging:  level, format and handlers

Global command-line flags override the environment.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from rpaasv2.core.config_schema import ClientSchema, ConfigSchema, LoggingSchema
from rpaasv2.core.exceptions import ConfigurationError

DEFAULT_CONFIG_PATH = Path("~/.rpaasv2/config.yaml")


class Settings(BaseSettings):
    """Targets and credentials loaded from the environment."""

    rpaas_url: str | None = None
    rpaas_user: str | None = None
    rpaas_password: str | None = None
    tsuru_target: str | None = None
    tsuru_token: str | None = None
    rpaasv2_config: str | None = None

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Return the settings file path: explicit path, then RPAASV2_CONFIG, then the default."""
    if path is None:
        path = get_settings().rpaasv2_config or DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def load_yaml_config(path: Path, required: bool = False) -> dict[str, Any]:
    """
    Load the YAML settings file.

    A missing file yields an empty mapping unless ``required`` is set.

    Raises:
        ConfigurationError: If the file is required but missing, or is not valid YAML
    """
    if not path.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {path}")
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid configuration in {path}: expected a mapping")
    return data


class AppConfig:
    """
    Client settings loaded from the YAML file.

    The file is validated against ConfigSchema at load time. Unknown keys or
    wrong types raise a ConfigurationError naming the file.
    """

    def __init__(self, path: Path, required: bool = False) -> None:
        self.path = path
        raw = load_yaml_config(path, required=required)
        try:
            self._config = ConfigSchema(**raw)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration in {path}:\n{e}"
            ) from e

    @property
    def client(self) -> ClientSchema:
        """HTTP client settings."""
        return self._config.client

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._config.logging


@lru_cache
def get_settings() -> Settings:
    """Get cached environment settings."""
    return Settings()


@lru_cache
def get_app_config(path: str | None = None) -> AppConfig:
    """Get cached settings from ``path`` (or the default location)."""
    return AppConfig(resolve_config_path(path), required=path is not None)
