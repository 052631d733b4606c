"""Configuration management for hvcli.

Settings are read from ``~/.hyperview/hyperview.toml`` (or the file named by
``HYPERVIEW_CONFIG``)::

    client_id = "..."
    client_secret = "..."
    scope = "HyperviewManagerApi"
    token_url = "https://example.hyperviewhq.com/connect/token"
    instance_url = "https://example.hyperviewhq.com"

    [api]
    path_delimiter = "~"
    batch_size = 100

Any top-level key can be overridden with a ``HYPERVIEW_<KEY>`` environment
variable. When no client secret is configured, the one stored by
``hvcli login`` in the system keyring is used.
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import keyring
from keyring.errors import PasswordDeleteError

from .api_constants import BULK_ACTION_BATCH_SIZE, PATH_DELIMITER, SEARCH_ATTRIBUTES
from .utils import ConfigurationError

KEYRING_SERVICE = "hyperview-cli"
KEYRING_SECRET_KEY = "HYPERVIEW_CLIENT_SECRET"

CONFIG_KEYS = ["client_id", "client_secret", "scope", "token_url", "instance_url"]
REQUIRED_KEYS = ["client_id", "client_secret", "token_url", "instance_url"]


@dataclass
class ApiSettings:
    """Service constants the query compiler and bulk runners depend on."""

    path_delimiter: str = PATH_DELIMITER
    batch_size: int = BULK_ACTION_BATCH_SIZE
    search_attributes: List[str] = field(default_factory=lambda: list(SEARCH_ATTRIBUTES))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApiSettings":
        """Create settings from the ``[api]`` table of the config file."""
        settings = cls()
        if "path_delimiter" in data:
            settings.path_delimiter = str(data["path_delimiter"])
            if not settings.path_delimiter:
                raise ConfigurationError("api.path_delimiter must not be empty")
        if "batch_size" in data:
            try:
                batch_size = int(data["batch_size"])
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(
                    f"api.batch_size must be an integer: {data['batch_size']!r}"
                ) from exc
            if batch_size < 1:
                raise ConfigurationError("api.batch_size must be at least 1")
            settings.batch_size = batch_size
        return settings


@dataclass
class AppConfig:
    """Connection settings for one Hyperview instance."""

    client_id: str = ""
    client_secret: str = ""
    scope: str = ""
    token_url: str = ""
    instance_url: str = ""
    api: ApiSettings = field(default_factory=ApiSettings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create a config from parsed TOML data."""
        values = {key: str(data.get(key, "")) for key in CONFIG_KEYS}
        api_data = data.get("api", {})
        if not isinstance(api_data, dict):
            api_data = {}
        return cls(api=ApiSettings.from_dict(api_data), **values)

    def missing_keys(self) -> List[str]:
        """Return the required keys that have no value."""
        return [key for key in REQUIRED_KEYS if not getattr(self, key)]


def get_config_file_path() -> Path:
    """Get the path to the hvcli configuration file."""
    if "HYPERVIEW_CONFIG" in os.environ:
        return Path(os.environ["HYPERVIEW_CONFIG"])
    return Path.home() / ".hyperview" / "hyperview.toml"


def load_config_file(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load raw settings from the TOML config file.

    Returns:
        Parsed TOML data, or an empty dict if the file does not exist

    Raises:
        ConfigurationError: If the file exists but is not valid TOML
    """
    config_file = path or get_config_file_path()
    if not config_file.exists():
        return {}

    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid configuration file {config_file}: {exc}") from exc


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Build the effective configuration.

    Precedence is environment variable, then config file, then keyring (client
    secret only).
    """
    config = AppConfig.from_dict(load_config_file(path))

    for key in CONFIG_KEYS:
        env_value = os.environ.get(f"HYPERVIEW_{key.upper()}")
        if env_value:
            setattr(config, key, env_value)

    if not config.client_secret:
        config.client_secret = keyring.get_password(KEYRING_SERVICE, KEYRING_SECRET_KEY) or ""

    config.instance_url = config.instance_url.rstrip("/")
    return config


def store_client_secret(secret: str) -> None:
    """Save the client secret in the system keyring."""
    keyring.set_password(KEYRING_SERVICE, KEYRING_SECRET_KEY, secret)


def remove_client_secret() -> None:
    """Remove the client secret from the system keyring."""
    try:
        keyring.delete_password(KEYRING_SERVICE, KEYRING_SECRET_KEY)
    except PasswordDeleteError:
        pass
