"""CLI commands for physical ports."""

from typing import Optional

import click

from .asset_api import bulk_update_ports, list_asset_ports
from .auth import get_client
from .cli_utils import output_options, validate_uuid
from .output import handle_output_choice
from .utils import handle_api_error


def register_port_commands(cli: click.Group) -> None:
    """Register the 'port' command group and its subcommands."""

    @cli.group()
    def port() -> None:
        """List and update asset and patch panel ports."""

    @port.command(name="list")
    @click.argument("asset_id", callback=validate_uuid)
    @output_options
    def list_ports(asset_id: str, output_type: str, filename: Optional[str]) -> None:
        """List the ports of an asset.

        The csv-file output can be edited and fed back to 'port bulk-update'.
        """
        try:
            config, session = get_client()
            ports = list_asset_ports(config, session, asset_id)
            handle_output_choice(ports, output_type, filename, total_label="port(s)")
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @port.command(name="bulk-update")
    @click.argument("filename", type=click.Path(exists=True, dir_okay=False))
    @click.option("--patch-panel", is_flag=True, help="The ports belong to patch panels")
    def bulk_update(filename: str, patch_panel: bool) -> None:
        """Update ports from a CSV file in the 'port list' layout."""
        try:
            config, session = get_client()
            bulk_update_ports(config, session, filename, patch_panel).report_results()
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)
