"""Client configuration.

Settings come from a YAML file, the environment, or plain keyword
arguments. A config file may hold the settings at the top level or under a
``kirimemail:`` section:

    kirimemail:
      username: my-user
      token: my-token
      timeout: 15
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .transport.http_client import (
    DEFAULT_BASE_URL,
    DEFAULT_STREAM_TIMEOUT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    SmtpClient,
)

USERNAME_ENV = "KIRIMEMAIL_USERNAME"
TOKEN_ENV = "KIRIMEMAIL_TOKEN"
BASE_URL_ENV = "KIRIMEMAIL_BASE_URL"
CONFIG_SECTION = "kirimemail"


@dataclass
class ClientConfig:
    """Settings for an SmtpClient."""
    username: Optional[str] = None
    token: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    stream_timeout: float = DEFAULT_STREAM_TIMEOUT
    max_retries: int = 2
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.token)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConfig":
        """Build a config from a mapping; unknown keys are ignored."""
        return cls(**{
            k: v for k, v in data.items()
            if k in cls.__dataclass_fields__
        })

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "ClientConfig":
        """Build a config from the environment.

        Credentials are resolved by ``load_credentials``; the base URL may be
        overridden with KIRIMEMAIL_BASE_URL.
        """
        username, token = load_credentials(env_path)
        base_url = os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL
        return cls(username=username, token=token, base_url=base_url)

    def to_client(self, **kwargs) -> SmtpClient:
        return SmtpClient.from_config(self, **kwargs)


def load_config(file_path: Union[str, Path]) -> ClientConfig:
    """Load a ClientConfig from a YAML file.

    Args:
        file_path: Path to the YAML config file.

    Returns:
        Parsed ClientConfig.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the YAML is empty or not a mapping.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        raise ValueError(f"Empty config file: {file_path}")
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}")

    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ValueError(f"'{CONFIG_SECTION}' must be a mapping in {file_path}")

    return ClientConfig.from_dict(section)


def load_credentials(env_path: Optional[Path] = None) -> tuple[Optional[str], Optional[str]]:
    """Load API credentials from the environment or a ``KEY=value`` file.

    Environment variables win. Otherwise ``~/.kirimemail/env`` (or
    ``env_path``) is read. Missing credentials are not an error: the client
    then sends anonymous requests.

    Returns:
        (username, token); either may be None.
    """
    username = os.environ.get(USERNAME_ENV)
    token = os.environ.get(TOKEN_ENV)
    if username and token:
        return username.strip(), token.strip()

    if env_path is None:
        env_path = Path.home() / ".kirimemail" / "env"

    if not env_path.exists():
        return username, token

    values: dict[str, str] = {}
    with open(env_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line.startswith("#") or not line or "=" not in line:
                continue
            key, value = line.split("=", 1)
            values[key.strip()] = value.strip().strip('"').strip("'")

    return username or values.get(USERNAME_ENV), token or values.get(TOKEN_ENV)
