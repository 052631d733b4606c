"""Shared utility functions for the Hyperview CLI."""

import json
import logging
import os
import sys
from typing import Any, Dict, Optional

import click
import requests

logger = logging.getLogger(__name__)

# Below DEBUG; used for full request and response payload dumps
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class ExitCodes:
    """Standard exit codes for CLI operations."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_INPUT = 2
    NOT_FOUND = 3
    PERMISSION_DENIED = 4
    NETWORK_ERROR = 5


class HyperviewError(Exception):
    """Base class for errors raised by hvcli itself."""

    exit_code = ExitCodes.GENERAL_ERROR


class ConfigurationError(HyperviewError):
    """The configuration is missing values needed to reach the service."""

    exit_code = ExitCodes.INVALID_INPUT


class MalformedResponseError(HyperviewError):
    """A response body is missing a field the CLI depends on."""


class OutputFileExistsError(HyperviewError):
    """Refuse to overwrite an existing output file."""

    exit_code = ExitCodes.INVALID_INPUT

    def __init__(self, filename: str):
        super().__init__(f"File already exists, can't over write: {filename}")
        self.filename = filename


class NoOutputFilenameError(HyperviewError):
    """An output type that writes a file was chosen without a filename."""

    exit_code = ExitCodes.INVALID_INPUT

    def __init__(self) -> None:
        super().__init__("Must provide an output filename")


class RecordError(HyperviewError):
    """A failure confined to a single record or entity.

    Bulk runs log these and move on to the next record; single-entity
    commands let them end the invocation.
    """


class RecordSkipped(RecordError):
    """A bulk record failed validation and was not applied."""

    exit_code = ExitCodes.INVALID_INPUT


class AssetNotFoundError(RecordError):
    """Asset lookup returned no usable asset."""

    exit_code = ExitCodes.NOT_FOUND

    def __init__(self, asset_id: str):
        super().__init__(f"Asset not found: {asset_id}")
        self.asset_id = asset_id


class MultiplePropertyValuesError(RecordError):
    """More than one value exists for a property that is updated in place."""

    def __init__(self, asset_id: str, property_type: str):
        super().__init__(
            "Unable to continue with operation; multiple values detected for "
            f"property '{property_type}' on asset {asset_id}"
        )


class PropertyNotFoundError(RecordError):
    """The asset has no custom property with the requested name."""

    exit_code = ExitCodes.NOT_FOUND

    def __init__(self, asset_id: str, name: str):
        super().__init__(
            f"Unable to continue with operation; asset {asset_id} does not have "
            f"a property named {name}"
        )
        self.name = name


def handle_api_error(exc: Exception) -> None:
    """Handle errors with appropriate exit codes and consistent formatting.

    Args:
        exc: The exception to handle
    """
    if isinstance(exc, HyperviewError):
        click.echo(f"✗ {exc}", err=True)
        sys.exit(exc.exit_code)

    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        status = exc.response.status_code
        if status == 404:
            click.echo(f"✗ Resource not found: {exc}", err=True)
            sys.exit(ExitCodes.NOT_FOUND)
        if status in (401, 403):
            click.echo(f"✗ Permission denied: {exc}", err=True)
            sys.exit(ExitCodes.PERMISSION_DENIED)

    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        click.echo(f"✗ Network error: {exc}", err=True)
        sys.exit(ExitCodes.NETWORK_ERROR)

    if isinstance(exc, FileNotFoundError):
        click.echo(f"✗ File not found: {exc.filename}", err=True)
        sys.exit(ExitCodes.NOT_FOUND)

    click.echo(f"✗ Error: {exc}", err=True)
    sys.exit(ExitCodes.GENERAL_ERROR)


def format_success(message: str, data: Optional[Dict[str, Any]] = None) -> None:
    """Format success messages consistently.

    Args:
        message: Success message to display
        data: Optional data to display with the message
    """
    click.echo(f"✓ {message}")
    if data:
        for key, value in data.items():
            click.echo(f"  {key}: {value}")


def get_ssl_verify() -> bool:
    """Return SSL verification setting from environment variable. Defaults to True."""
    env = os.environ.get("HVCLI_SSL_VERIFY")
    if env is not None:
        return env.lower() not in ("0", "false", "no")
    return True


def to_pretty_json(data: Any) -> str:
    """Render data for log output."""
    return json.dumps(data, indent=2, default=str)


# --- API Request Utilities ---
def make_api_request(
    session: requests.Session,
    method: str,
    url: str,
    payload: Optional[Any] = None,
    params: Optional[Dict[str, Any]] = None,
) -> requests.Response:
    """Make an API request on an authenticated session.

    Errors are not handled here; callers decide whether a failure ends the
    command or only the current record.

    Args:
        session: Session carrying the bearer token
        method: HTTP method (GET, POST, PUT)
        url: API endpoint URL
        payload: JSON body for POST/PUT requests
        params: Query string parameters

    Returns:
        Response object

    Raises:
        requests.HTTPError: If the server answers with an error status
        ValueError: If the method is not supported
    """
    method = method.upper()
    logger.debug("Request URL: %s %s", method, url)
    if params:
        logger.debug("Query parameters: %s", params)
    if payload is not None:
        logger.log(TRACE, "Payload: %s", to_pretty_json(payload))

    if method == "GET":
        resp = session.get(url, params=params)
    elif method == "POST":
        resp = session.post(url, json=payload, params=params)
    elif method == "PUT":
        resp = session.put(url, json=payload, params=params)
    else:
        raise ValueError(f"Unsupported HTTP method: {method}")

    logger.log(TRACE, "Server response: %s", resp.status_code)
    resp.raise_for_status()
    return resp
