"""CLI commands for rack accessories."""

import click

from .api_constants import RACK_PANEL_TYPES, RACK_SIDES
from .asset_api import add_rack_accessory, bulk_add_rack_accessory
from .auth import get_client
from .cli_utils import validate_uuid
from .utils import format_success, handle_api_error


def register_rack_commands(cli: click.Group) -> None:
    """Register the 'rack' command group and its subcommands."""

    @cli.group()
    def rack() -> None:
        """Add blanking panels and cable management to racks."""

    @rack.command(name="add-accessory")
    @click.argument("rack_id", callback=validate_uuid)
    @click.option(
        "--panel-type", "-p", type=click.Choice(RACK_PANEL_TYPES), required=True
    )
    @click.option("--side", "-s", type=click.Choice(RACK_SIDES), default="Front", show_default=True)
    @click.option("--u-location", "-u", type=click.IntRange(min=1), required=True)
    def add_accessory(rack_id: str, panel_type: str, side: str, u_location: int) -> None:
        """Add one accessory to a rack at a U position."""
        try:
            config, session = get_client()
            add_rack_accessory(config, session, rack_id, panel_type, side, u_location)
            format_success(
                "Rack accessory added", {"Rack": rack_id, "Type": panel_type, "U": u_location}
            )
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @rack.command(name="bulk-add-accessory")
    @click.argument("filename", type=click.Path(exists=True, dir_okay=False))
    def bulk_add_accessory(filename: str) -> None:
        """Add accessories from a CSV file with id,panel_type,side,u_location columns."""
        try:
            config, session = get_client()
            bulk_add_rack_accessory(config, session, filename).report_results()
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)
