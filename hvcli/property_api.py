"""Typed asset property lookups and updates."""

import logging
from typing import List

import requests

from .api_constants import ASSET_PROPERTIES_API_PREFIX
from .bulk import BulkRunResult, process_records, read_csv_records
from .config import AppConfig
from .models import AssetProperty, AssetPropertyImportRecord
from .utils import MultiplePropertyValuesError, TRACE, make_api_request, to_pretty_json

logger = logging.getLogger(__name__)


def get_asset_property_list(
    config: AppConfig, session: requests.Session, asset_id: str
) -> List[AssetProperty]:
    """Return every typed property of an asset."""
    url = f"{config.instance_url}{ASSET_PROPERTIES_API_PREFIX}/{asset_id}"
    resp = make_api_request(session, "GET", url)
    return [AssetProperty.from_dict(item) for item in resp.json()]


def get_named_asset_property(
    config: AppConfig, session: requests.Session, asset_id: str, property_type: str
) -> List[AssetProperty]:
    """Return the asset's values for one property type (possibly several)."""
    return [
        prop
        for prop in get_asset_property_list(config, session, asset_id)
        if prop.property_type == property_type
    ]


def update_asset_property(
    config: AppConfig,
    session: requests.Session,
    asset_id: str,
    new_value: str,
    property_type: str,
) -> None:
    """Set a single-valued property on an asset.

    An existing value is replaced in place; otherwise a new value is created.

    Args:
        config: Connection settings
        session: Authenticated session
        asset_id: Asset to update
        new_value: The value to store
        property_type: Property type, e.g. ``serialNumber``

    Raises:
        MultiplePropertyValuesError: If the asset already holds more than one
            value for the property
    """
    current_values = get_named_asset_property(config, session, asset_id, property_type)
    logger.debug("Current property values: %s", current_values)

    if len(current_values) > 1:
        raise MultiplePropertyValuesError(asset_id, property_type)

    if current_values:
        prop = current_values[0]
        prop.value = new_value
        payload = prop.to_payload()
    else:
        prop = None
        payload = {"type": property_type, "value": new_value}
    logger.log(TRACE, "Payload: %s", to_pretty_json(payload))

    if prop is not None and prop.id:
        url = f"{config.instance_url}{ASSET_PROPERTIES_API_PREFIX}/{prop.id}"
        resp = make_api_request(session, "PUT", url, payload=payload)
    else:
        url = f"{config.instance_url}{ASSET_PROPERTIES_API_PREFIX}/"
        resp = make_api_request(session, "POST", url, payload=payload, params={"assetId": asset_id})
    logger.debug("Updated %s on %s: HTTP %s", property_type, asset_id, resp.status_code)


def bulk_update_asset_property(
    config: AppConfig, session: requests.Session, filename: str, property_type: str
) -> BulkRunResult:
    """Apply ``asset_id,new_value`` rows from a CSV file to one property type."""
    return process_records(
        read_csv_records(filename, AssetPropertyImportRecord),
        lambda record: update_asset_property(
            config, session, record.asset_id, record.new_value, property_type
        ),
        operation_name=f"updated {property_type} for",
        identify=lambda record: record.asset_id,
    )
