"""CLI commands for asset sensors."""

from typing import Optional

import click

from .auth import get_client
from .cli_utils import output_options, validate_uuid
from .output import handle_output_choice
from .sensor_api import bulk_update_asset_sensor, get_asset_sensor_list
from .utils import handle_api_error


def register_sensor_commands(cli: click.Group) -> None:
    """Register the 'sensor' command group and its subcommands."""

    @cli.group()
    def sensor() -> None:
        """List and update asset sensors."""

    @sensor.command(name="list")
    @click.argument("asset_id", callback=validate_uuid)
    @output_options
    def list_sensors(asset_id: str, output_type: str, filename: Optional[str]) -> None:
        """List the sensors of an asset."""
        try:
            config, session = get_client()
            sensors = get_asset_sensor_list(config, session, asset_id)
            handle_output_choice(sensors, output_type, filename, total_label="sensor(s)")
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @sensor.command(name="bulk-update")
    @click.argument("filename", type=click.Path(exists=True, dir_okay=False))
    def bulk_update(filename: str) -> None:
        """Rename sensors and set access policies from a CSV file.

        Columns: asset_id, sensor_id, name, access_policy_id. Leave
        access_policy_id empty to keep the current policy, or use
        00000000-0000-0000-0000-000000000000 to reset it to inherited.
        """
        try:
            config, session = get_client()
            bulk_update_asset_sensor(config, session, filename).report_results()
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)
