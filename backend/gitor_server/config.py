"""
Server configuration.

The configuration is read once at startup from a YAML file:

    paths:
      repositories: /srv/git
    server:
      host: 0.0.0.0
      port: "8080"
      tokenWhitelist:
        - my-secret
      address: git.example.com
      sshPort: "22"
      user: git
      owner: git          # optional, defaults to user
      fixOwnership: true  # optional
    logging:
      level: INFO

The file location is taken from the explicit path, then the
GITOR_SERVER_CONFIG environment variable, then ~/.config/gitor/server-config.yml.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from gitor_server.exceptions import ConfigError

CONFIG_PATH_ENV = "GITOR_SERVER_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "gitor" / "server-config.yml"


class ServerConfig(BaseModel):
    """Immutable server settings, shared read-only for the process lifetime."""

    model_config = ConfigDict(frozen=True)

    app_name: str = "Gitor"
    repositories_path: Path
    host: str = "0.0.0.0"
    port: int = 8080
    token_whitelist: frozenset[str] = frozenset()
    ssh_address: str
    ssh_port: int = 22
    ssh_user: str
    repo_owner: str | None = None
    fix_ownership: bool = True
    log_level: str = "INFO"

    @field_validator("repositories_path")
    @classmethod
    def _repositories_path_is_dir(cls, value: Path) -> Path:
        if not value.is_dir():
            raise ValueError(f"{value} does not exist or is not a directory")
        return value.resolve()

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def owner(self) -> str:
        """User that created repositories are handed to."""
        return self.repo_owner or self.ssh_user

    @classmethod
    def from_yaml_data(cls, data: dict[str, Any]) -> "ServerConfig":
        """Build a config from the nested layout of the YAML file."""
        paths = data.get("paths") or {}
        server = data.get("server") or {}
        logging_section = data.get("logging") or {}

        fields = {
            "repositories_path": paths.get("repositories"),
            "host": server.get("host"),
            "port": server.get("port"),
            "token_whitelist": server.get("tokenWhitelist"),
            "ssh_address": server.get("address"),
            "ssh_port": server.get("sshPort"),
            "ssh_user": server.get("user"),
            "repo_owner": server.get("owner"),
            "fix_ownership": server.get("fixOwnership"),
            "log_level": logging_section.get("level"),
        }
        # Absent keys fall back to the model defaults
        return cls(**{key: value for key, value in fields.items() if value is not None})


def get_config_path(path: str | Path | None = None) -> Path:
    """Resolve which configuration file to read."""
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(path: str | Path | None = None) -> ServerConfig:
    """
    Load and validate the server configuration.

    Raises:
        ConfigError: if the file is missing, unparsable or invalid, or if the
            repositories path is not an existing directory.
    """
    config_path = get_config_path(path)

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid configuration in {config_path}: expected a mapping")

    try:
        return ServerConfig.from_yaml_data(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e
