"""CLI commands for power components and associations."""

from typing import Optional

import click

from .api_constants import POWER_PROVIDER_COMPONENT_PATHS
from .auth import get_client
from .cli_utils import output_options, validate_uuid
from .output import handle_output_choice
from .power_api import (
    add_power_association,
    bulk_add_power_association,
    get_power_provider_components,
)
from .utils import format_success, handle_api_error


def register_power_commands(cli: click.Group) -> None:
    """Register the 'power' command group and its subcommands."""

    @cli.group()
    def power() -> None:
        """List power components and create power associations."""

    @power.command(name="list-components")
    @click.argument("provider_id", callback=validate_uuid)
    @click.option(
        "--provider-type",
        "-t",
        type=click.Choice(list(POWER_PROVIDER_COMPONENT_PATHS)),
        required=True,
        help="RackPdu lists outlets, Busway tap-offs, PduAndRpp breakers",
    )
    @output_options
    def list_components(
        provider_id: str, provider_type: str, output_type: str, filename: Optional[str]
    ) -> None:
        """List the numbered components of a power provider."""
        try:
            config, session = get_client()
            components = get_power_provider_components(
                config, session, POWER_PROVIDER_COMPONENT_PATHS[provider_type], provider_id
            )
            handle_output_choice(components, output_type, filename, total_label="component(s)")
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @power.command(name="associate")
    @click.argument("asset_id", callback=validate_uuid)
    @click.argument("provider_id", callback=validate_uuid)
    def associate(asset_id: str, provider_id: str) -> None:
        """Associate ASSET_ID with a providing asset or component PROVIDER_ID."""
        try:
            config, session = get_client()
            add_power_association(config, session, asset_id, provider_id)
            format_success("Power association added", {"Asset": asset_id, "Provider": provider_id})
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @power.command(name="bulk-associate")
    @click.argument("filename", type=click.Path(exists=True, dir_okay=False))
    def bulk_associate(filename: str) -> None:
        """Create power associations from a CSV file.

        Columns: asset_id, provider_asset_id, provider_asset_type,
        provider_component_number, provider_panel_number. Leave the component
        number empty to associate with the provider asset itself.
        """
        try:
            config, session = get_client()
            bulk_add_power_association(config, session, filename).report_results()
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)
