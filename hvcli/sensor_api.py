"""Asset sensor listing and bulk sensor updates."""

import logging
from typing import Dict, List, Optional

import requests

from .api_constants import SENSOR_API_PREFIX, SENTINEL_ID
from .bulk import BulkRunResult, process_records, read_csv_records
from .config import AppConfig
from .models import AssetSensor, AssetSensorUpdateRecord, parse_uuid
from .utils import (
    MalformedResponseError,
    RecordSkipped,
    TRACE,
    make_api_request,
    to_pretty_json,
)

logger = logging.getLogger(__name__)

# asset id -> sensor id -> sensor, filled lazily during one bulk run
SensorSnapshot = Dict[str, Dict[str, AssetSensor]]


def get_asset_sensor_list(
    config: AppConfig, session: requests.Session, asset_id: str
) -> List[AssetSensor]:
    """Return the sensors attached to an asset."""
    url = f"{config.instance_url}{SENSOR_API_PREFIX}/{asset_id}"
    resp = make_api_request(session, "GET", url)
    return [AssetSensor.from_dict(item) for item in resp.json()]


def get_cached_sensors(
    config: AppConfig, session: requests.Session, asset_id: str, snapshot: SensorSnapshot
) -> Dict[str, AssetSensor]:
    """Return an asset's sensors by canonical id, listing them only on first use.

    Raises:
        MalformedResponseError: If a listed sensor id is not a UUID
    """
    if asset_id not in snapshot:
        sensors = get_asset_sensor_list(config, session, asset_id)
        try:
            snapshot[asset_id] = {parse_uuid(sensor.id, "id"): sensor for sensor in sensors}
        except ValueError as exc:
            raise MalformedResponseError(f"Sensor listing has an invalid id: {exc}") from exc
        logger.debug("Cached %d sensors for asset %s", len(sensors), asset_id)
    return snapshot[asset_id]


def resolve_access_policy_id(
    record: AssetSensorUpdateRecord, current: AssetSensor
) -> Optional[str]:
    """Decide the access policy id to send for a sensor update.

    The all-zero id resets the sensor to its inherited policy. An omitted id
    keeps an explicitly set policy and leaves an inherited one inherited.

    Args:
        record: The requested update
        current: The sensor as it is now

    Returns:
        The policy id to send, or None to send an unset policy
    """
    if record.access_policy_id == SENTINEL_ID:
        return None
    if record.access_policy_id is None:
        if current.access_policy_is_inherited:
            return None
        return current.access_policy_id or None
    return record.access_policy_id


def update_asset_sensor(
    config: AppConfig,
    session: requests.Session,
    record: AssetSensorUpdateRecord,
    snapshot: SensorSnapshot,
) -> None:
    """Rename a sensor and/or change its access policy.

    Raises:
        RecordSkipped: If the sensor is not attached to the named asset
    """
    sensors = get_cached_sensors(config, session, record.asset_id, snapshot)
    current = sensors.get(record.sensor_id)
    if current is None:
        raise RecordSkipped(f"Sensor {record.sensor_id} not found on asset {record.asset_id}")

    payload = {
        "id": current.id,
        "name": record.name or current.name,
        "accessPolicyId": resolve_access_policy_id(record, current),
    }
    logger.log(TRACE, "Sensor update payload: %s", to_pretty_json(payload))

    url = f"{config.instance_url}{SENSOR_API_PREFIX}/{current.id}"
    make_api_request(session, "PUT", url, payload=payload)


def bulk_update_asset_sensor(
    config: AppConfig, session: requests.Session, filename: str
) -> BulkRunResult:
    """Apply sensor updates from a CSV file.

    Each asset's sensors are listed at most once per run.
    """
    snapshot: SensorSnapshot = {}
    return process_records(
        read_csv_records(filename, AssetSensorUpdateRecord),
        lambda record: update_asset_sensor(config, session, record, snapshot),
        operation_name="updated",
        identify=lambda record: f"{record.asset_id}/{record.sensor_id}",
    )
