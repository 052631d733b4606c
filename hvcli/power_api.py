"""Power provider components and power source associations."""

import logging
from typing import Dict, List, Optional, Tuple

import requests

from .api_constants import (
    PDU_RPP_BREAKERS_API_PREFIX,
    POWER_ASSOCIATION_API_PREFIX,
    POWER_PROVIDER_COMPONENT_PATHS,
)
from .bulk import BulkRunResult, process_records, read_csv_records
from .config import AppConfig
from .models import BulkPowerAssociationRecord, PowerProviderComponent
from .utils import RecordSkipped, make_api_request

logger = logging.getLogger(__name__)

# (component number, panel number) -> component id
ComponentMap = Dict[Tuple[int, Optional[int]], str]
# provider asset id -> that provider's component map
ProviderComponentMap = Dict[str, ComponentMap]


def get_power_provider_components(
    config: AppConfig, session: requests.Session, api_path: str, provider_id: str
) -> List[PowerProviderComponent]:
    """List the numbered components (outlets, tap-offs, breakers) of a provider.

    Breakers are looked up by query parameter; the other kinds by path.
    """
    if api_path == PDU_RPP_BREAKERS_API_PREFIX:
        url = f"{config.instance_url}{api_path}"
        params = {"assetId": provider_id}
    else:
        url = f"{config.instance_url}{api_path}/{provider_id}"
        params = None
    resp = make_api_request(session, "GET", url, params=params)
    return [PowerProviderComponent.from_dict(item) for item in resp.json()]


def add_power_association(
    config: AppConfig, session: requests.Session, consuming_asset_id: str, providing_id: str
) -> None:
    """Associate a power-consuming asset with a providing asset or component."""
    url = f"{config.instance_url}{POWER_ASSOCIATION_API_PREFIX}"
    payload = {
        "consumingDestinationAssetId": consuming_asset_id,
        "providingSourceAssetId": providing_id,
    }
    make_api_request(session, "POST", url, payload=payload)


def resolve_provider_component(
    config: AppConfig,
    session: requests.Session,
    record: BulkPowerAssociationRecord,
    component_map: ProviderComponentMap,
) -> str:
    """Return the id the consumer should be associated with.

    With no component number the provider asset itself is used. Otherwise the
    provider's components are listed on first reference and cached in
    ``component_map`` for the rest of the run.

    Args:
        config: Connection settings
        session: Authenticated session
        record: The association to resolve
        component_map: Per-run cache, updated in place

    Returns:
        The provider asset id or the matching component id

    Raises:
        RecordSkipped: If the provider type has no numbered components or no
            component matches the number and panel
    """
    if record.provider_component_number is None:
        logger.debug("No component number, assuming direct asset to asset association")
        return record.provider_asset_id

    if record.provider_asset_id not in component_map:
        api_path = POWER_PROVIDER_COMPONENT_PATHS.get(record.provider_asset_type or "")
        if api_path is None:
            raise RecordSkipped(
                f"Provider type '{record.provider_asset_type}' has no numbered components"
            )
        components = get_power_provider_components(
            config, session, api_path, record.provider_asset_id
        )
        component_map[record.provider_asset_id] = {
            (component.number, component.panel_number): component.id for component in components
        }
        logger.debug(
            "Cached %d components for provider %s", len(components), record.provider_asset_id
        )

    key = (record.provider_component_number, record.provider_panel_number)
    component_id = component_map[record.provider_asset_id].get(key)
    if component_id is None:
        panel = f" panel {record.provider_panel_number}" if record.provider_panel_number else ""
        logger.warning(
            "Provider %s has no component %d%s; skipping asset %s",
            record.provider_asset_id,
            record.provider_component_number,
            panel,
            record.asset_id,
        )
        raise RecordSkipped(
            f"No component {record.provider_component_number}{panel} on provider "
            f"{record.provider_asset_id}"
        )
    return component_id


def bulk_add_power_association(
    config: AppConfig, session: requests.Session, filename: str
) -> BulkRunResult:
    """Create power associations from a CSV file.

    Each provider's component list is fetched at most once per run.
    """
    component_map: ProviderComponentMap = {}

    def handle(record: BulkPowerAssociationRecord) -> None:
        logger.debug("Updating asset id %s", record.asset_id)
        providing_id = resolve_provider_component(config, session, record, component_map)
        add_power_association(config, session, record.asset_id, providing_id)

    return process_records(
        read_csv_records(filename, BulkPowerAssociationRecord),
        handle,
        operation_name="associated",
        identify=lambda record: record.asset_id,
    )
