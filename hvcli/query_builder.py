"""Compile asset search criteria into a search endpoint request body.

Compilation is pure: no network calls are made here. The root location name
used to anchor unscoped searches is resolved by the caller and passed in.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .config import ApiSettings

logger = logging.getLogger(__name__)

FILTER_JOIN = " AND "


@dataclass
class SearchCriteria:
    """Optional, independently specified search criteria.

    Absent criteria are ``None`` (or an empty list for the repeatable
    ``properties`` and ``custom_properties`` tokens).
    """

    search_pattern: Optional[str] = None
    asset_type: Optional[str] = None
    location_path: Optional[str] = None
    properties: List[str] = field(default_factory=list)
    custom_properties: List[str] = field(default_factory=list)
    id: Optional[str] = None
    manufacturer: Optional[str] = None
    product: Optional[str] = None
    any_of_key: Optional[str] = None
    any_of_values: List[str] = field(default_factory=list)
    skip: int = 0
    limit: int = 100
    show_property: Optional[str] = None


@dataclass
class CompiledQuery:
    """Ordered filter predicates plus the fixed request parameters."""

    filters: List[str]
    limit: int
    offset: int
    attributes: List[str]
    query: Optional[str] = None

    @property
    def filter_string(self) -> str:
        return FILTER_JOIN.join(self.filters)

    def to_payload(self) -> Dict[str, Any]:
        """Build the JSON body for the search endpoint."""
        payload: Dict[str, Any] = {
            "limit": self.limit,
            "offset": self.offset,
            "attributesToRetrieve": list(self.attributes),
        }
        if self.query:
            payload["q"] = self.query
        payload["filter"] = self.filter_string
        return payload


def _escape_filter_value(value: str) -> str:
    """Backslash-escape single quotes so a value cannot close its literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def parse_key_value(token: str) -> Optional[Tuple[str, str]]:
    """Split a ``key=value`` token on the first ``=``.

    Returns:
        The trimmed (key, value) pair, or None when the token has no ``=`` or
        an empty key. Malformed tokens are logged at error level.
    """
    key, sep, value = token.partition("=")
    key = key.strip()
    if not sep or not key:
        logger.error("Unable to parse property filter '%s'; expected key=value", token)
        return None
    return key, value.strip()


def _location_predicate(path: str, delimiter: str) -> str:
    prepared_path = _escape_filter_value(path.replace("/", delimiter))
    return f"delimitedPath STARTS WITH '{prepared_path}'"


def _key_value_predicates(tokens: List[str], attribute_prefix: str) -> List[str]:
    predicates = []
    for token in tokens:
        parsed = parse_key_value(token)
        if parsed is None:
            continue
        key, value = parsed
        predicates.append(f"{attribute_prefix}{key} = '{_escape_filter_value(value)}'")
    return predicates


def compile_query(
    criteria: SearchCriteria,
    settings: ApiSettings,
    root_location_name: Optional[str] = None,
) -> CompiledQuery:
    """Compile search criteria into filter predicates and request parameters.

    Predicates are emitted in a fixed order: value-set membership, asset type,
    location, properties, custom properties, id, manufacturer, product.

    Args:
        criteria: The search criteria
        settings: API settings supplying the path delimiter and projection
        root_location_name: Display name of the root location. When given and
            no location criterion is set, results are anchored under it.

    Returns:
        The compiled query
    """
    filters: List[str] = []

    if criteria.any_of_key and criteria.any_of_values:
        key = criteria.any_of_key.strip()
        values = json.dumps(
            [value.strip() for value in criteria.any_of_values], ensure_ascii=False
        )
        filters.append(f"assetProperty_{key} EXISTS AND assetProperty_{key} IN {values}")

    if criteria.asset_type:
        filters.append(f"assetType = '{_escape_filter_value(criteria.asset_type)}'")

    if criteria.location_path:
        filters.append(_location_predicate(criteria.location_path, settings.path_delimiter))
    elif root_location_name:
        root_prefix = _escape_filter_value(f"{root_location_name}{settings.path_delimiter}")
        filters.append(f"delimitedPath STARTS WITH '{root_prefix}'")

    filters.extend(_key_value_predicates(criteria.properties, "assetProperty_"))
    filters.extend(_key_value_predicates(criteria.custom_properties, "customProperty_"))

    if criteria.id:
        filters.append(f"id = '{_escape_filter_value(criteria.id)}'")
    if criteria.manufacturer:
        filters.append(f"manufacturerName = '{_escape_filter_value(criteria.manufacturer)}'")
    if criteria.product:
        filters.append(f"productName CONTAINS '{_escape_filter_value(criteria.product)}'")

    compiled = CompiledQuery(
        filters=filters,
        limit=criteria.limit,
        offset=criteria.skip,
        attributes=list(settings.search_attributes),
        query=criteria.search_pattern or None,
    )
    logger.debug("Compiled filter: %s", compiled.filter_string)
    return compiled
