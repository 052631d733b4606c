"""CLI commands for typed and custom asset properties."""

from typing import Optional

import click

from .api_constants import EDITABLE_ASSET_PROPERTIES
from .auth import get_client
from .cli_utils import output_options, validate_uuid
from .custom_property_api import (
    bulk_update_custom_asset_property,
    get_custom_asset_property_list,
    update_custom_asset_property,
)
from .output import handle_output_choice
from .property_api import (
    bulk_update_asset_property,
    get_asset_property_list,
    get_named_asset_property,
    update_asset_property,
)
from .utils import format_success, handle_api_error


def register_property_commands(cli: click.Group) -> None:
    """Register the 'property' command group and its subcommands."""

    @cli.group(name="property")
    def property_group() -> None:
        """List and update typed asset properties."""

    @property_group.command(name="list")
    @click.argument("asset_id", callback=validate_uuid)
    @click.option("--type", "-t", "property_type", help="Only show this property type")
    @output_options
    def list_properties(
        asset_id: str,
        property_type: Optional[str],
        output_type: str,
        filename: Optional[str],
    ) -> None:
        """List the properties of an asset."""
        try:
            config, session = get_client()
            if property_type:
                properties = get_named_asset_property(config, session, asset_id, property_type)
            else:
                properties = get_asset_property_list(config, session, asset_id)
            handle_output_choice(properties, output_type, filename, total_label="property(ies)")
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @property_group.command(name="update")
    @click.argument("asset_id", callback=validate_uuid)
    @click.argument("new_value")
    @click.option(
        "--type",
        "-t",
        "property_type",
        type=click.Choice(EDITABLE_ASSET_PROPERTIES),
        required=True,
        help="Property type to set",
    )
    def update_property(asset_id: str, new_value: str, property_type: str) -> None:
        """Set a single-valued property on an asset."""
        try:
            config, session = get_client()
            update_asset_property(config, session, asset_id, new_value, property_type)
            format_success("Property updated", {"ID": asset_id, property_type: new_value})
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @property_group.command(name="bulk-update")
    @click.argument("filename", type=click.Path(exists=True, dir_okay=False))
    @click.option(
        "--type",
        "-t",
        "property_type",
        type=click.Choice(EDITABLE_ASSET_PROPERTIES),
        required=True,
        help="Property type to set",
    )
    def bulk_update_property(filename: str, property_type: str) -> None:
        """Set a property from a CSV file with asset_id,new_value columns."""
        try:
            config, session = get_client()
            bulk_update_asset_property(config, session, filename, property_type).report_results()
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)


def register_custom_property_commands(cli: click.Group) -> None:
    """Register the 'custom-property' command group and its subcommands."""

    @cli.group(name="custom-property")
    def custom_property() -> None:
        """List and update custom asset properties."""

    @custom_property.command(name="list")
    @click.argument("asset_id", callback=validate_uuid)
    @output_options
    def list_custom_properties(asset_id: str, output_type: str, filename: Optional[str]) -> None:
        """List the custom properties of an asset."""
        try:
            config, session = get_client()
            properties = get_custom_asset_property_list(config, session, asset_id)
            handle_output_choice(properties, output_type, filename, total_label="property(ies)")
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @custom_property.command(name="update")
    @click.argument("asset_id", callback=validate_uuid)
    @click.argument("name")
    @click.argument("new_value")
    def update_custom_property(asset_id: str, name: str, new_value: str) -> None:
        """Set the value of the custom property NAME on an asset."""
        try:
            config, session = get_client()
            update_custom_asset_property(config, session, asset_id, name, new_value)
            format_success("Custom property updated", {"ID": asset_id, name: new_value})
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @custom_property.command(name="bulk-update")
    @click.argument("filename", type=click.Path(exists=True, dir_okay=False))
    def bulk_update_custom_property(filename: str) -> None:
        """Set custom properties from a CSV file.

        Columns: asset_id, custom_asset_property_name, new_custom_property_value.
        """
        try:
            config, session = get_client()
            bulk_update_custom_asset_property(config, session, filename).report_results()
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)
