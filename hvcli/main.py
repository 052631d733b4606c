"""hvcli entry points."""

import getpass
import logging
from pathlib import Path
from typing import Optional

import click
import tomllib

from .alarm_click import register_alarm_commands
from .asset_click import register_asset_commands
from .config import get_config_file_path, remove_client_secret, store_client_secret
from .port_click import register_port_commands
from .power_click import register_power_commands
from .property_click import register_custom_property_commands, register_property_commands
from .rack_click import register_rack_commands
from .sensor_click import register_sensor_commands
from .ssl_trust import describe_ca_source
from .utils import TRACE

DEBUG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}


def get_version() -> str:
    """Get version from pyproject.toml."""
    try:
        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            pyproject_data = tomllib.load(f)
        return pyproject_data["tool"]["poetry"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return "unknown"


def setup_logging(debug_level: str) -> None:
    """Configure root logging on stderr.

    Args:
        debug_level: One of error, warn, info, debug or trace
    """
    logging.basicConfig(
        level=DEBUG_LEVELS[debug_level],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )
    # Keep transport chatter out of debug output
    logging.getLogger("urllib3").setLevel(max(DEBUG_LEVELS[debug_level], logging.INFO))


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version and exit")
@click.option(
    "--debug-level",
    "-d",
    type=click.Choice(list(DEBUG_LEVELS), case_sensitive=False),
    default="error",
    show_default=True,
    help="Log verbosity on stderr",
)
@click.pass_context
def cli(ctx: click.Context, version: bool, debug_level: str) -> None:
    """Hyperview CLI (hvcli) - search and bulk-manage Hyperview assets."""  # noqa: D403
    setup_logging(debug_level.lower())
    if version:
        click.echo(f"hvcli version {get_version()}")
        ctx.exit()
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(hidden=True, name="_ca-info")
def ca_info() -> None:
    """Show TLS CA trust source (hidden diagnostic)."""
    click.echo(describe_ca_source())


@cli.command()
@click.option("--client-secret", help="OAuth client secret (prompted when omitted)")
def login(client_secret: Optional[str]) -> None:
    """Store the OAuth client secret in the system keyring.

    The secret is used whenever the config file does not set client_secret.
    """
    if not client_secret:
        client_secret = getpass.getpass("Enter your Hyperview client secret: ")
    if not client_secret.strip():
        raise click.ClickException("Client secret cannot be empty.")

    store_client_secret(client_secret.strip())
    click.echo("✓ Client secret stored in system keyring.")


@cli.command()
def logout() -> None:
    """Remove the stored client secret from the system keyring."""
    remove_client_secret()
    click.echo("Client secret removed from system keyring.")


@cli.command(name="config-path")
def config_path() -> None:
    """Show where the configuration file is read from."""
    path = get_config_file_path()
    status = "exists" if path.exists() else "not found"
    click.echo(f"{path} ({status})")


register_asset_commands(cli)
register_property_commands(cli)
register_custom_property_commands(cli)
register_port_commands(cli)
register_rack_commands(cli)
register_alarm_commands(cli)
register_sensor_commands(cli)
register_power_commands(cli)
