"""Asset mutations: names, locations, ports and rack accessories."""

import logging
from typing import Any, Dict, List, Optional

import requests

from .api_constants import (
    ASSET_ASSETS_API_PREFIX,
    ASSET_LOCATION_API_PREFIX,
    ASSET_PORTS_API_PREFIX,
    RACK_PANEL_API_PREFIX,
)
from .asset_search import get_raw_asset
from .bulk import BulkRunResult, process_records, read_csv_records
from .config import AppConfig
from .models import (
    AddRackAccessoryRecord,
    AssetPort,
    UpdateAssetLocationRecord,
    UpdateAssetNameRecord,
)
from .utils import AssetNotFoundError, RecordSkipped, TRACE, make_api_request, to_pretty_json

logger = logging.getLogger(__name__)


# --- Names ---


def update_asset_name(
    config: AppConfig, session: requests.Session, asset_id: str, new_name: str
) -> None:
    """Rename an asset by writing back its full document with a new name.

    Raises:
        AssetNotFoundError: If the fetched asset has no name field
    """
    asset = get_raw_asset(config, session, asset_id)
    logger.log(TRACE, "Returned asset value: %s", to_pretty_json(asset))

    if not isinstance(asset, dict) or "name" not in asset:
        raise AssetNotFoundError(asset_id)

    logger.debug("Old name: %s, new name: %s", asset["name"], new_name)
    asset["name"] = new_name

    url = f"{config.instance_url}{ASSET_ASSETS_API_PREFIX}/{asset_id}"
    make_api_request(session, "PUT", url, payload=asset)


def _clean_asset_name(record: UpdateAssetNameRecord) -> str:
    new_name = record.new_name.strip().replace('"', "")
    if not new_name:
        raise RecordSkipped(f"New name can't be empty for asset id: {record.asset_id}")
    return new_name


def bulk_update_asset_name(
    config: AppConfig, session: requests.Session, filename: str
) -> BulkRunResult:
    """Rename assets from ``asset_id,new_name`` rows.

    Names are trimmed and stripped of double quotes; rows left with an empty
    name are skipped.
    """
    return process_records(
        read_csv_records(filename, UpdateAssetNameRecord),
        lambda record: update_asset_name(
            config, session, record.asset_id, _clean_asset_name(record)
        ),
        operation_name="renamed",
        identify=lambda record: record.asset_id,
    )


# --- Locations ---


def update_asset_location(
    config: AppConfig,
    session: requests.Session,
    asset_id: str,
    new_location_id: str,
    rack_position: Optional[str] = None,
    rack_side: Optional[str] = None,
    rack_u_location: Optional[int] = None,
) -> None:
    """Move an asset under a new parent location, optionally at a rack position.

    Args:
        config: Connection settings
        session: Authenticated session
        asset_id: Asset to move
        new_location_id: Id of the new parent asset
        rack_position: Zero-U position in the rack (Left, Right, ...)
        rack_side: Rack side (Front, Rear, Unknown)
        rack_u_location: U position in the rack
    """
    payload = {
        "parentId": new_location_id,
        "rackPosition": rack_position,
        "rackSide": rack_side,
        "rackULocation": rack_u_location,
    }
    logger.debug("New location payload: %s", payload)

    url = f"{config.instance_url}{ASSET_LOCATION_API_PREFIX}/{asset_id}"
    make_api_request(session, "PUT", url, payload=payload, params={"id": asset_id})


def bulk_update_asset_location(
    config: AppConfig, session: requests.Session, filename: str
) -> BulkRunResult:
    def handle(record: UpdateAssetLocationRecord) -> None:
        logger.debug(
            "Updating asset id: %s with new location: %s",
            record.asset_id,
            record.new_location_id,
        )
        update_asset_location(
            config,
            session,
            record.asset_id,
            record.new_location_id,
            record.rack_position,
            record.rack_side,
            record.rack_u_location,
        )

    return process_records(
        read_csv_records(filename, UpdateAssetLocationRecord),
        handle,
        operation_name="moved",
        identify=lambda record: record.asset_id,
    )


# --- Ports ---


def list_asset_ports(
    config: AppConfig, session: requests.Session, asset_id: str
) -> List[AssetPort]:
    """Return the detailed physical ports of an asset."""
    url = f"{config.instance_url}{ASSET_PORTS_API_PREFIX}/detailed/{asset_id}"
    resp = make_api_request(session, "GET", url)
    return [AssetPort.from_dict(item) for item in resp.json()]


def _port_update_request(config: AppConfig, port: AssetPort, is_patch_panel: bool):
    payload: Dict[str, Any] = {
        "id": port.id,
        "name": port.name,
        "parentId": port.parent_id,
        "portNumber": port.port_number,
    }
    if is_patch_panel:
        url = f"{config.instance_url}{ASSET_PORTS_API_PREFIX}/patchPanel/{port.id}"
        payload["connectorTypeValueId"] = port.connector_type_value_id
        payload["portSideValueId"] = port.port_side_value_id
    else:
        url = f"{config.instance_url}{ASSET_PORTS_API_PREFIX}/{port.id}"
        payload["portSideValueId"] = port.port_side_value_id
        payload["portTypeValueId"] = port.port_type_value_id
    return url, payload


def update_port(
    config: AppConfig, session: requests.Session, port: AssetPort, is_patch_panel: bool = False
) -> None:
    """Write one port's name, number and value ids back to the service."""
    url, payload = _port_update_request(config, port, is_patch_panel)
    logger.debug("Updating %s port %s", "patch panel" if is_patch_panel else "asset", port.id)
    make_api_request(session, "PUT", url, payload=payload)


def bulk_update_ports(
    config: AppConfig, session: requests.Session, filename: str, is_patch_panel: bool = False
) -> BulkRunResult:
    """Update ports from a CSV file in the shape produced by ``port list``."""
    return process_records(
        read_csv_records(filename, AssetPort),
        lambda port: update_port(config, session, port, is_patch_panel),
        operation_name="updated",
        identify=lambda port: port.id,
    )


# --- Rack accessories ---


def add_rack_accessory(
    config: AppConfig,
    session: requests.Session,
    rack_id: str,
    panel_type: str,
    side: str,
    u_location: int,
) -> None:
    """Add a blanking panel or cable management accessory to a rack.

    Args:
        config: Connection settings
        session: Authenticated session
        rack_id: The rack to add to
        panel_type: ``BlankingPanel`` or ``CableManagement``
        side: ``Front``, ``Rear`` or ``Unknown``
        u_location: Rack unit the accessory occupies
    """
    annotation = "(R)" if side == "Rear" else ""
    if panel_type == "BlankingPanel":
        display_name = f"Blanking Panel at {u_location}U{annotation}"
        panel = "blankingPanel"
    else:
        display_name = f"Cable Management at {u_location}U{annotation}"
        panel = "cableManagement"

    payload = {
        "panelType": panel,
        "rackId": rack_id,
        "rackSide": {"Front": "front", "Rear": "rear"}.get(side, ""),
        "rackPanelDataCollection": [
            {
                "rackUnit": u_location,
                "displayName": display_name,
            }
        ],
    }
    logger.log(TRACE, "Add rack accessory payload: %s", to_pretty_json(payload))

    url = f"{config.instance_url}{RACK_PANEL_API_PREFIX}"
    make_api_request(session, "POST", url, payload=payload)


def bulk_add_rack_accessory(
    config: AppConfig, session: requests.Session, filename: str
) -> BulkRunResult:
    return process_records(
        read_csv_records(filename, AddRackAccessoryRecord),
        lambda record: add_rack_accessory(
            config, session, record.id, record.panel_type, record.side, record.u_location
        ),
        operation_name="added accessories for",
        identify=lambda record: f"{record.id} at {record.u_location}U",
    )
