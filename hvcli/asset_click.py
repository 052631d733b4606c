"""CLI commands for searching and updating Hyperview assets.

Search criteria given as options are compiled into one search filter; every
option narrows the result and they are joined with AND.
"""

from typing import Optional, Tuple

import click

from .api_constants import ASSET_TYPES, RACK_POSITIONS, RACK_SIDES
from .asset_api import (
    bulk_update_asset_location,
    bulk_update_asset_name,
    update_asset_location,
    update_asset_name,
)
from .asset_search import list_any_of, search_assets
from .auth import get_client
from .cli_utils import output_options, validate_uuid
from .output import handle_output_choice
from .query_builder import SearchCriteria
from .utils import format_success, handle_api_error


def register_asset_commands(cli: click.Group) -> None:
    """Register the 'asset' command group and its subcommands."""

    @cli.group()
    def asset() -> None:
        """Search assets and update names and locations."""

    @asset.command(name="search")
    @click.argument("search_pattern", required=False)
    @click.option(
        "--asset-type", "-t", type=click.Choice(ASSET_TYPES), help="Filter by asset type"
    )
    @click.option(
        "--location-path",
        "-l",
        help="Only assets under this location path, e.g. 'All/Site A/'",
    )
    @click.option(
        "--property",
        "-p",
        "properties",
        multiple=True,
        help="Asset property filter as key=value (repeatable)",
    )
    @click.option(
        "--custom-property",
        "-c",
        "custom_properties",
        multiple=True,
        help="Custom property filter as key=value (repeatable)",
    )
    @click.option("--id", "asset_id", callback=validate_uuid, help="Filter by asset id")
    @click.option("--manufacturer", "-m", help="Filter by manufacturer name (exact match)")
    @click.option("--product", "-r", help="Filter by product name (contains match)")
    @click.option("--show-property", "-s", help="Add this property's values to each asset")
    @click.option("--skip", "-k", type=click.IntRange(min=0), default=0, show_default=True)
    @click.option("--limit", "-L", type=click.IntRange(min=1), default=100, show_default=True)
    @output_options
    def search(
        search_pattern: Optional[str],
        asset_type: Optional[str],
        location_path: Optional[str],
        properties: Tuple[str, ...],
        custom_properties: Tuple[str, ...],
        asset_id: Optional[str],
        manufacturer: Optional[str],
        product: Optional[str],
        show_property: Optional[str],
        skip: int,
        limit: int,
        output_type: str,
        filename: Optional[str],
    ) -> None:
        """Search assets by free text and filters.

        SEARCH_PATTERN is an optional free-text term. Without --location-path
        the search is scoped to everything under the root location.
        """
        criteria = SearchCriteria(
            search_pattern=search_pattern,
            asset_type=asset_type,
            location_path=location_path,
            properties=list(properties),
            custom_properties=list(custom_properties),
            id=asset_id,
            manufacturer=manufacturer,
            product=product,
            skip=skip,
            limit=limit,
            show_property=show_property,
        )
        try:
            config, session = get_client()
            assets = search_assets(config, session, criteria)
            handle_output_choice(assets, output_type, filename, total_label="asset(s)")
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @asset.command(name="list-any-of")
    @click.option("--key", "-k", "any_of_key", required=True, help="Asset property type")
    @click.option(
        "--value",
        "-V",
        "any_of_values",
        multiple=True,
        required=True,
        help="Accepted property value (repeatable)",
    )
    @click.option(
        "--asset-type", "-t", type=click.Choice(ASSET_TYPES), help="Filter by asset type"
    )
    @click.option("--location-path", "-l", help="Only assets under this location path")
    @click.option(
        "--custom-property",
        "-c",
        "custom_properties",
        multiple=True,
        help="Custom property filter as key=value (repeatable)",
    )
    @click.option("--id", "asset_id", callback=validate_uuid, help="Filter by asset id")
    @click.option("--manufacturer", "-m", help="Filter by manufacturer name (exact match)")
    @click.option("--product", "-r", help="Filter by product name (contains match)")
    @click.option("--show-property", "-s", help="Add this property's values to each asset")
    @click.option("--skip", type=click.IntRange(min=0), default=0, show_default=True)
    @click.option("--limit", "-L", type=click.IntRange(min=1), default=100, show_default=True)
    @output_options
    def list_any_of_cmd(
        any_of_key: str,
        any_of_values: Tuple[str, ...],
        asset_type: Optional[str],
        location_path: Optional[str],
        custom_properties: Tuple[str, ...],
        asset_id: Optional[str],
        manufacturer: Optional[str],
        product: Optional[str],
        show_property: Optional[str],
        skip: int,
        limit: int,
        output_type: str,
        filename: Optional[str],
    ) -> None:
        """List assets whose property has any of the given values."""
        criteria = SearchCriteria(
            any_of_key=any_of_key,
            any_of_values=list(any_of_values),
            asset_type=asset_type,
            location_path=location_path,
            custom_properties=list(custom_properties),
            id=asset_id,
            manufacturer=manufacturer,
            product=product,
            skip=skip,
            limit=limit,
            show_property=show_property,
        )
        try:
            config, session = get_client()
            assets = list_any_of(config, session, criteria)
            handle_output_choice(assets, output_type, filename, total_label="asset(s)")
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @asset.command(name="update-name")
    @click.argument("asset_id", callback=validate_uuid)
    @click.argument("new_name")
    def update_name(asset_id: str, new_name: str) -> None:
        """Rename an asset."""
        try:
            config, session = get_client()
            update_asset_name(config, session, asset_id, new_name)
            format_success("Asset renamed", {"ID": asset_id, "Name": new_name})
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @asset.command(name="bulk-update-name")
    @click.argument("filename", type=click.Path(exists=True, dir_okay=False))
    def bulk_update_name(filename: str) -> None:
        """Rename assets from a CSV file with asset_id,new_name columns."""
        try:
            config, session = get_client()
            bulk_update_asset_name(config, session, filename).report_results()
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @asset.command(name="update-location")
    @click.argument("asset_id", callback=validate_uuid)
    @click.argument("new_location_id", callback=validate_uuid)
    @click.option("--rack-position", type=click.Choice(RACK_POSITIONS), help="Zero-U position")
    @click.option("--rack-side", type=click.Choice(RACK_SIDES), help="Rack side")
    @click.option("--rack-u-location", type=click.IntRange(min=1), help="Rack U position")
    def update_location(
        asset_id: str,
        new_location_id: str,
        rack_position: Optional[str],
        rack_side: Optional[str],
        rack_u_location: Optional[int],
    ) -> None:
        """Move an asset to a new parent location."""
        try:
            config, session = get_client()
            update_asset_location(
                config,
                session,
                asset_id,
                new_location_id,
                rack_position,
                rack_side,
                rack_u_location,
            )
            format_success("Asset moved", {"ID": asset_id, "Location": new_location_id})
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)

    @asset.command(name="bulk-update-location")
    @click.argument("filename", type=click.Path(exists=True, dir_okay=False))
    def bulk_update_location(filename: str) -> None:
        """Move assets from a CSV file.

        Columns: asset_id, new_location_id, rack_position, rack_side,
        rack_u_location. The rack columns may be empty.
        """
        try:
            config, session = get_client()
            bulk_update_asset_location(config, session, filename).report_results()
        except Exception as exc:  # noqa: BLE001
            handle_api_error(exc)
