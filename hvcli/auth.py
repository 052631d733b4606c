"""OAuth2 client-credentials authentication for the Hyperview API."""

import logging
from typing import Tuple

import requests

from .config import AppConfig, load_config
from .utils import ConfigurationError, MalformedResponseError, get_ssl_verify

logger = logging.getLogger(__name__)


def get_access_token(config: AppConfig) -> str:
    """Request an access token using the client-credentials grant.

    Args:
        config: Connection settings holding the client id, secret and token URL

    Returns:
        The raw access token

    Raises:
        ConfigurationError: If required settings are missing
        requests.HTTPError: If the token endpoint rejects the request
    """
    missing = config.missing_keys()
    if missing:
        raise ConfigurationError(
            f"Configuration is missing: {', '.join(missing)}. "
            "Edit the config file or run 'hvcli login'."
        )

    data = {"grant_type": "client_credentials"}
    if config.scope:
        data["scope"] = config.scope

    logger.debug("Requesting access token from %s", config.token_url)
    resp = requests.post(
        config.token_url,
        data=data,
        auth=(config.client_id, config.client_secret),
        headers={"Accept": "application/json"},
        verify=get_ssl_verify(),
    )
    resp.raise_for_status()

    token = resp.json().get("access_token")
    if not token:
        raise MalformedResponseError("Token response did not contain an access_token")
    return token


def create_session(config: AppConfig) -> requests.Session:
    """Return a session with the bearer token and JSON headers attached."""
    session = requests.Session()
    session.headers.update(
        {
            "Authorization": f"Bearer {get_access_token(config)}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
    )
    session.verify = get_ssl_verify()
    return session


def get_client() -> Tuple[AppConfig, requests.Session]:
    """Load the configuration and open an authenticated session."""
    config = load_config()
    return config, create_session(config)
