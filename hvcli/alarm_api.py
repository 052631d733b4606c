"""Alarm event listing and bulk close/acknowledge."""

import logging
from typing import List

import requests

from .api_constants import (
    ASSET_ALARM_EVENT_BULK_ACKNOWLEDGE_API_PREFIX,
    ASSET_ALARM_EVENT_BULK_CLOSE_API_PREFIX,
    ASSET_ALARM_EVENT_LIST_API_PREFIX,
)
from .bulk import chunked, read_csv_records
from .config import AppConfig
from .models import AlarmEvent, AlarmEventRecord
from .utils import MalformedResponseError, make_api_request

logger = logging.getLogger(__name__)

ALARM_FILTERS = {
    "unacknowledged": '["acknowledgementState", "=", "unacknowledged"]',
    "active": '["isActive", "=", true]',
}

MANAGE_ACTIONS = ["close", "acknowledge"]


def list_alarm_events(
    config: AppConfig,
    session: requests.Session,
    skip: int = 0,
    take: int = 100,
    alarm_filter: str = "unacknowledged",
) -> List[AlarmEvent]:
    """List alarm events across all assets.

    Args:
        config: Connection settings
        session: Authenticated session
        skip: Number of events to skip
        take: Maximum number of events to return
        alarm_filter: ``unacknowledged`` or ``active``

    Returns:
        The alarm events on this page

    Raises:
        ValueError: If the filter name is unknown
        MalformedResponseError: If the response has no ``data`` list
    """
    if alarm_filter not in ALARM_FILTERS:
        raise ValueError(f"Unknown alarm filter: {alarm_filter}")

    url = f"{config.instance_url}{ASSET_ALARM_EVENT_LIST_API_PREFIX}"
    params = {"skip": skip, "take": take, "filter": ALARM_FILTERS[alarm_filter]}
    body = make_api_request(session, "GET", url, params=params).json()

    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, list):
        raise MalformedResponseError("Alarm event response did not contain a data list")
    logger.info(
        "Alarm events: | Total: %s | Returned: %d |", body.get("totalCount"), len(data)
    )
    return [AlarmEvent.from_dict(item) for item in data]


def manage_alarm_events(
    config: AppConfig,
    session: requests.Session,
    alarm_ids: List[str],
    action: str,
) -> int:
    """Close or acknowledge alarm events in fixed-size batches.

    One PUT is issued per batch, in input order. A failing batch ends the run;
    earlier batches stay applied.

    Returns:
        The number of batches sent
    """
    if action == "close":
        url = f"{config.instance_url}{ASSET_ALARM_EVENT_BULK_CLOSE_API_PREFIX}"
    elif action == "acknowledge":
        url = f"{config.instance_url}{ASSET_ALARM_EVENT_BULK_ACKNOWLEDGE_API_PREFIX}"
    else:
        raise ValueError(f"Unknown alarm action: {action}")

    sent = 0
    for batch in chunked(alarm_ids, config.api.batch_size):
        if action == "close":
            payload = batch
        else:
            payload = {"alarmEventIds": batch, "acknowledgementState": "acknowledged"}
        logger.debug("Sending %s batch %d (%d ids)", action, sent + 1, len(batch))
        make_api_request(session, "PUT", url, payload=payload)
        sent += 1
    return sent


def bulk_manage_alarm_events(
    config: AppConfig, session: requests.Session, filename: str, action: str
) -> int:
    """Close or acknowledge every alarm id listed in a CSV file."""
    alarm_ids = [record.id for record in read_csv_records(filename, AlarmEventRecord)]
    logger.info("Read %d alarm event ids from %s", len(alarm_ids), filename)
    return manage_alarm_events(config, session, alarm_ids, action)
