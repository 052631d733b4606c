"""Asset search execution against the search endpoint."""

import logging
from typing import Any, Dict, List

import requests

from .api_constants import ASSET_ASSETS_API_PREFIX, ASSET_SEARCH_API_PREFIX, ROOT_LOCATION_ID
from .config import AppConfig
from .models import Asset
from .property_api import get_named_asset_property
from .query_builder import CompiledQuery, SearchCriteria, compile_query
from .utils import MalformedResponseError, TRACE, make_api_request, to_pretty_json

logger = logging.getLogger(__name__)


def get_raw_asset(config: AppConfig, session: requests.Session, asset_id: str) -> Dict[str, Any]:
    """Fetch the full asset document by id."""
    url = f"{config.instance_url}{ASSET_ASSETS_API_PREFIX}/{asset_id}"
    return make_api_request(session, "GET", url).json()


def get_root_location_name(config: AppConfig, session: requests.Session) -> str:
    """Return the display name of the root location.

    Raises:
        MalformedResponseError: If the root location has no name
    """
    root = get_raw_asset(config, session, ROOT_LOCATION_ID)
    name = root.get("name") if isinstance(root, dict) else None
    if not isinstance(name, str) or not name:
        raise MalformedResponseError("Root location did not have a name")
    return name


def execute_search(
    config: AppConfig,
    session: requests.Session,
    compiled: CompiledQuery,
    show_property: str = "",
) -> List[Asset]:
    """Run a compiled query and map the hits to assets.

    Args:
        config: Connection settings
        session: Authenticated session
        compiled: The compiled query
        show_property: When set, each asset's values for this property type
            are looked up and stored on ``Asset.property``

    Returns:
        The matching assets; empty when the service reports zero hits

    Raises:
        MalformedResponseError: If the response lacks the metadata envelope or
            a hit lacks a required field
    """
    url = f"{config.instance_url}{ASSET_SEARCH_API_PREFIX}"
    body = make_api_request(session, "POST", url, payload=compiled.to_payload()).json()

    try:
        total = int(body["estimatedTotalHits"])
        limit = int(body["limit"])
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedResponseError(
            "Search response is missing estimatedTotalHits or limit"
        ) from exc
    logger.info("Meta Data: | Total: %d | Limit: %d |", total, limit)

    if total == 0:
        return []

    hits = body.get("hits") or []
    if not isinstance(hits, list):
        raise MalformedResponseError("Search response hits is not a list")

    assets = []
    for hit in hits:
        logger.log(TRACE, "RAW: %s", to_pretty_json(hit))
        if not isinstance(hit, dict):
            raise MalformedResponseError("Search result is not an object")
        assets.append(Asset.from_search_hit(hit, config.api.path_delimiter))

    if show_property:
        for asset in assets:
            properties = get_named_asset_property(config, session, asset.id, show_property)
            asset.property = " ".join(
                "" if prop.value is None else str(prop.value) for prop in properties
            )

    return assets


def search_assets(
    config: AppConfig, session: requests.Session, criteria: SearchCriteria
) -> List[Asset]:
    """Search assets, anchoring unscoped searches under the root location."""
    root_location_name = None
    if not criteria.location_path:
        root_location_name = get_root_location_name(config, session)
    compiled = compile_query(criteria, config.api, root_location_name)
    return execute_search(config, session, compiled, criteria.show_property or "")


def list_any_of(
    config: AppConfig, session: requests.Session, criteria: SearchCriteria
) -> List[Asset]:
    """List assets whose property matches any of the given values.

    Raises:
        ValueError: If no property key or values were given
    """
    if not criteria.any_of_key or not criteria.any_of_values:
        raise ValueError("A property key and at least one value are required")
    compiled = compile_query(criteria, config.api)
    return execute_search(config, session, compiled, criteria.show_property or "")
