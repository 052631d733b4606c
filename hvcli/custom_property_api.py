"""Custom (user-defined) asset property lookups and updates."""

import logging
from typing import List

import requests

from .api_constants import CUSTOM_ASSET_PROPERTIES_API_PREFIX
from .bulk import BulkRunResult, process_records, read_csv_records
from .config import AppConfig
from .models import CustomAssetProperty, CustomAssetPropertyImportRecord
from .utils import PropertyNotFoundError, TRACE, make_api_request, to_pretty_json

logger = logging.getLogger(__name__)


def get_custom_asset_property_list(
    config: AppConfig, session: requests.Session, asset_id: str
) -> List[CustomAssetProperty]:
    """Return every custom property of an asset."""
    url = f"{config.instance_url}{CUSTOM_ASSET_PROPERTIES_API_PREFIX}/{asset_id}"
    resp = make_api_request(session, "GET", url)
    return [CustomAssetProperty.from_dict(item) for item in resp.json()]


def update_custom_asset_property(
    config: AppConfig,
    session: requests.Session,
    asset_id: str,
    name: str,
    new_value: str,
) -> None:
    """Set the value of a custom property, found by name.

    Raises:
        PropertyNotFoundError: If the asset has no custom property by that name
    """
    matches = [
        prop
        for prop in get_custom_asset_property_list(config, session, asset_id)
        if prop.name == name
    ]
    if not matches:
        raise PropertyNotFoundError(asset_id, name)

    prop = matches[0]
    logger.debug("Custom property to update: %s", prop)

    payload = {
        "id": prop.id,
        "customAssetPropertyKeyId": prop.custom_asset_property_key_id,
        "dataType": prop.data_type,
        "value": new_value,
        "groupName": prop.group_name,
    }
    logger.log(TRACE, "New custom property update: %s", to_pretty_json(payload))

    url = f"{config.instance_url}{CUSTOM_ASSET_PROPERTIES_API_PREFIX}/{prop.id}"
    make_api_request(session, "PUT", url, payload=payload)


def bulk_update_custom_asset_property(
    config: AppConfig, session: requests.Session, filename: str
) -> BulkRunResult:
    return process_records(
        read_csv_records(filename, CustomAssetPropertyImportRecord),
        lambda record: update_custom_asset_property(
            config,
            session,
            record.asset_id,
            record.custom_asset_property_name,
            record.new_custom_property_value,
        ),
        operation_name="updated custom properties for",
        identify=lambda record: f"{record.asset_id} ({record.custom_asset_property_name})",
    )
