"""
Client configuration.

Read from ~/.config/gitor/client-config.yml unless another file is given
with --config or the GITOR_CLIENT_CONFIG environment variable:

    remoteServer:
      address: git.example.com
      port: "8080"
      token: my-secret
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

CONFIG_PATH_ENV = "GITOR_CLIENT_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "gitor" / "client-config.yml"


class ClientConfigError(Exception):
    """Raised when the client configuration is missing or invalid."""


class ClientConfig(BaseModel):
    address: str
    port: int = 8080
    token: str

    @property
    def server_url(self) -> str:
        return f"http://{self.address}:{self.port}"


def load_client_config(path: str | Path | None = None) -> ClientConfig:
    """Load the client configuration, raising ClientConfigError on any problem."""
    config_path = Path(path or os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise ClientConfigError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ClientConfigError(f"Invalid YAML in {config_path}: {e}") from e

    remote = data.get("remoteServer") if isinstance(data, dict) else None
    if not isinstance(remote, dict):
        raise ClientConfigError(f"Missing 'remoteServer' section in {config_path}")

    try:
        return ClientConfig(**{key: value for key, value in remote.items() if value is not None})
    except ValidationError as e:
        raise ClientConfigError(f"Invalid configuration in {config_path}: {e}") from e
