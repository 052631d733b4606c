"""Data classes for Hyperview API entities and bulk CSV records.

Entities are built from API responses with ``from_dict`` (or
``from_search_hit`` for assets). CSV records are built from
``csv.DictReader`` rows with ``from_row``, which raises ``KeyError`` or
``ValueError`` when a row does not have the expected shape.
"""

import json
import uuid
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from .api_constants import PATH_DELIMITER, RACK_PANEL_TYPES, RACK_POSITIONS, RACK_SIDES
from .utils import MalformedResponseError

# (header, attribute, width) triples used by table output
TableColumns = List[Tuple[str, str, int]]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_uuid(value: Any, field_name: str) -> str:
    """Return the canonical form of a UUID string.

    Raises:
        ValueError: If the value is not a UUID
    """
    try:
        return str(uuid.UUID(str(value).strip()))
    except (ValueError, AttributeError) as exc:
        raise ValueError(f"{field_name} is not a valid UUID: {value!r}") from exc


def _required(row: Dict[str, Optional[str]], key: str) -> str:
    value = row.get(key)
    if value is None:
        raise KeyError(f"missing column '{key}'")
    return value


def _optional(row: Dict[str, Optional[str]], key: str) -> Optional[str]:
    value = row.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _optional_int(row: Dict[str, Optional[str]], key: str) -> Optional[int]:
    value = _optional(row, key)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{key} is not an integer: {value!r}") from exc


def _choice(value: Optional[str], choices: List[str], field_name: str) -> Optional[str]:
    """Match a value case-insensitively against the allowed choices."""
    if value is None:
        return None
    for choice in choices:
        if choice.lower() == value.strip().lower():
            return choice
    raise ValueError(f"{field_name} must be one of {', '.join(choices)}: {value!r}")


# --- Entities ---


# Asset attribute -> search document field
ASSET_HIT_FIELDS = {
    "id": "id",
    "name": "displayName",
    "asset_lifecycle_state": "assetLifecycleState",
    "asset_type": "assetType",
    "manufacturer_id": "manufacturerId",
    "manufacturer_name": "manufacturerName",
    "monitoring_state": "monitoringState",
    "parent_id": "parentId",
    "parent_name": "parentDisplayName",
    "product_id": "productId",
    "product_name": "productName",
    "status": "status",
    "path": "delimitedPath",
}


@dataclass
class Asset:
    """An asset as returned by the search endpoint."""

    id: str
    name: str
    asset_lifecycle_state: str
    asset_type: str
    manufacturer_id: str
    manufacturer_name: str
    monitoring_state: str
    parent_id: str
    parent_name: str
    product_id: str
    product_name: str
    status: str
    path: str
    serial_number: str = "[]"
    property: Optional[str] = None

    TABLE_COLUMNS: ClassVar[TableColumns] = [
        ("Name", "name", 28),
        ("Type", "asset_type", 14),
        ("Manufacturer", "manufacturer_name", 16),
        ("Product", "product_name", 20),
        ("Path", "path", 40),
        ("ID", "id", 36),
    ]

    @classmethod
    def from_search_hit(cls, hit: Dict[str, Any], path_delimiter: str = PATH_DELIMITER) -> "Asset":
        """Map one search document to an Asset.

        Every projected field except the serial number array must be present.

        Raises:
            MalformedResponseError: If a required field is missing or the id
                is not a UUID
        """
        missing = [key for key in ASSET_HIT_FIELDS.values() if key not in hit]
        if missing:
            raise MalformedResponseError(
                f"Search result is missing required field(s): {', '.join(missing)}"
            )

        values = {attr: _text(hit[key]) for attr, key in ASSET_HIT_FIELDS.items()}
        try:
            values["id"] = parse_uuid(hit["id"], "id")
        except ValueError as exc:
            raise MalformedResponseError(f"Search result has an invalid id: {exc}") from exc
        values["path"] = values["path"].replace(path_delimiter, "/")

        serial_numbers = hit.get("assetProperty_serialNumber")
        serial_number = json.dumps(serial_numbers) if isinstance(serial_numbers, list) else "[]"

        return cls(serial_number=serial_number, **values)


@dataclass
class AssetProperty:
    """A typed (system-defined) asset property such as serialNumber."""

    id: Optional[str]
    property_type: str
    value: Any = None
    data_type: str = ""
    data_source: str = ""
    asset_property_display_category: str = ""
    is_deletable: bool = False
    is_editable: bool = False
    is_inherited: bool = False
    created_date_time: Optional[str] = None
    updated_date_time: Optional[str] = None
    minimum_value: Any = None

    TABLE_COLUMNS: ClassVar[TableColumns] = [
        ("Type", "property_type", 28),
        ("Value", "value", 30),
        ("Data Type", "data_type", 10),
        ("Source", "data_source", 10),
        ("Inherited", "is_inherited", 9),
        ("ID", "id", 36),
    ]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetProperty":
        """Create an AssetProperty from an API response item."""
        return cls(
            id=data.get("id"),
            property_type=_text(data.get("type")),
            value=data.get("value"),
            data_type=_text(data.get("dataType")),
            data_source=_text(data.get("dataSource")),
            asset_property_display_category=_text(data.get("assetPropertyDisplayCategory")),
            is_deletable=bool(data.get("isDeletable", False)),
            is_editable=bool(data.get("isEditable", False)),
            is_inherited=bool(data.get("isInherited", False)),
            created_date_time=data.get("createdDateTime"),
            updated_date_time=data.get("updatedDateTime"),
            minimum_value=data.get("minimumValue"),
        )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize back to the API's field names."""
        return {
            "id": self.id,
            "type": self.property_type,
            "value": self.value,
            "dataType": self.data_type,
            "dataSource": self.data_source,
            "assetPropertyDisplayCategory": self.asset_property_display_category,
            "isDeletable": self.is_deletable,
            "isEditable": self.is_editable,
            "isInherited": self.is_inherited,
            "createdDateTime": self.created_date_time,
            "updatedDateTime": self.updated_date_time,
            "minimumValue": self.minimum_value,
        }


@dataclass
class CustomAssetProperty:
    """A user-defined asset property."""

    id: str
    custom_asset_property_key_id: str
    custom_asset_property_group_id: str
    value: Any
    data_type: str
    name: str
    group_name: str
    data_source: str = ""
    updated_date_time: str = ""
    unit: str = ""

    TABLE_COLUMNS: ClassVar[TableColumns] = [
        ("Name", "name", 28),
        ("Value", "value", 28),
        ("Group", "group_name", 18),
        ("Data Type", "data_type", 10),
        ("ID", "id", 36),
    ]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomAssetProperty":
        """Create a CustomAssetProperty from an API response item."""
        return cls(
            id=_text(data.get("id")),
            custom_asset_property_key_id=_text(data.get("customAssetPropertyKeyId")),
            custom_asset_property_group_id=_text(data.get("customAssetPropertyGroupId")),
            value=data.get("value"),
            data_type=_text(data.get("dataType")),
            name=_text(data.get("name")),
            group_name=_text(data.get("groupName")),
            data_source=_text(data.get("dataSource")),
            updated_date_time=_text(data.get("updatedDateTime")),
            unit=_text(data.get("unit")),
        )


@dataclass
class AssetPort:
    """A physical port. Also the row shape for bulk port updates."""

    id: str
    name: str
    parent_id: str
    port_number: int
    port_side: Optional[str] = None
    port_side_value_id: Optional[str] = None
    connector_type_value_id: Optional[str] = None
    port_type_value_id: Optional[str] = None

    TABLE_COLUMNS: ClassVar[TableColumns] = [
        ("Port", "port_number", 6),
        ("Name", "name", 24),
        ("Side", "port_side", 10),
        ("ID", "id", 36),
    ]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetPort":
        """Create an AssetPort from a detailed port listing item."""
        port_number = data.get("portNumber")
        return cls(
            id=_text(data.get("id")),
            name=_text(data.get("name")),
            parent_id=_text(data.get("parentId")),
            port_number=int(port_number) if port_number is not None else 0,
            port_side=data.get("portSide"),
            port_side_value_id=data.get("portSideValueId"),
            connector_type_value_id=data.get("connectorTypeValueId"),
            port_type_value_id=data.get("portTypeValueId"),
        )

    @classmethod
    def from_row(cls, row: Dict[str, Optional[str]]) -> "AssetPort":
        port_number = _optional_int(row, "port_number")
        if port_number is None:
            raise ValueError("port_number is required")
        return cls(
            id=parse_uuid(_required(row, "id"), "id"),
            name=_required(row, "name").strip(),
            parent_id=_required(row, "parent_id").strip(),
            port_number=port_number,
            port_side=_optional(row, "port_side"),
            port_side_value_id=_optional(row, "port_side_value_id"),
            connector_type_value_id=_optional(row, "connector_type_value_id"),
            port_type_value_id=_optional(row, "port_type_value_id"),
        )


@dataclass
class AlarmEvent:
    """An alarm event raised against an asset."""

    id: str
    severity: str
    asset_name: str
    asset_location_path: str
    alarm_event_setting_id: str
    asset_id: str
    start_timestamp: str
    end_timestamp: str
    acknowledgement_state: str
    acknowledged_by: str
    acknowledged_timestamp: str
    closed_by: str
    alarm_event_category: str
    is_active: bool
    property_values: str
    text_template: str

    TABLE_COLUMNS: ClassVar[TableColumns] = [
        ("Severity", "severity", 10),
        ("Asset", "asset_name", 24),
        ("Started", "start_timestamp", 26),
        ("Ack State", "acknowledgement_state", 14),
        ("ID", "id", 36),
    ]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlarmEvent":
        """Create an AlarmEvent from an alarm listing item; nulls become empty strings."""
        property_values = data.get("propertyValues")
        if not isinstance(property_values, str) and property_values is not None:
            property_values = json.dumps(property_values)
        return cls(
            id=_text(data.get("id")),
            severity=_text(data.get("severity")),
            asset_name=_text(data.get("assetName")),
            asset_location_path=_text(data.get("assetLocationPath")),
            alarm_event_setting_id=_text(data.get("alarmEventSettingId")),
            asset_id=_text(data.get("assetId")),
            start_timestamp=_text(data.get("startTimestamp")),
            end_timestamp=_text(data.get("endTimestamp")),
            acknowledgement_state=_text(data.get("acknowledgementState")),
            acknowledged_by=_text(data.get("acknowledgedBy")),
            acknowledged_timestamp=_text(data.get("acknowledgedTimestamp")),
            closed_by=_text(data.get("closedBy")),
            alarm_event_category=_text(data.get("alarmEventCategory")),
            is_active=bool(data.get("isActive", False)),
            property_values=_text(property_values),
            text_template=_text(data.get("textTemplate")),
        )


@dataclass
class AssetSensor:
    """A sensor reading point attached to an asset."""

    id: str
    name: str
    sensor_type_id: str = ""
    list_index: str = ""
    sensor_type_description: str = ""
    value: Any = None
    raw_value: Any = None
    unit_string: str = ""
    data_source: str = ""
    data_collector_id: str = ""
    data_collector_name: str = ""
    last_value_update: str = ""
    source_asset_display_name: str = ""
    source_asset_id: str = ""
    source_device_asset_id: str = ""
    sensor_association_type: str = ""
    is_numeric: bool = False
    access_policy_id: str = ""
    access_policy_name: str = ""
    asset_access_policy_id: str = ""
    access_policy_is_inherited: bool = False

    TABLE_COLUMNS: ClassVar[TableColumns] = [
        ("Name", "name", 28),
        ("Value", "value", 12),
        ("Unit", "unit_string", 8),
        ("Access Policy", "access_policy_name", 20),
        ("Inherited", "access_policy_is_inherited", 9),
        ("ID", "id", 36),
    ]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetSensor":
        """Create an AssetSensor from a sensor listing item."""
        return cls(
            id=_text(data.get("id")),
            name=_text(data.get("name")),
            sensor_type_id=_text(data.get("sensorTypeId")),
            list_index=_text(data.get("listIndex")),
            sensor_type_description=_text(data.get("sensorTypeDescription")),
            value=data.get("value"),
            raw_value=data.get("rawValue"),
            unit_string=_text(data.get("unitString")),
            data_source=_text(data.get("dataSource")),
            data_collector_id=_text(data.get("dataCollectorId")),
            data_collector_name=_text(data.get("dataCollectorName")),
            last_value_update=_text(data.get("lastValueUpdate")),
            source_asset_display_name=_text(data.get("sourceAssetDisplayName")),
            source_asset_id=_text(data.get("sourceAssetId")),
            source_device_asset_id=_text(data.get("sourceDeviceAssetId")),
            sensor_association_type=_text(data.get("sensorAssociationType")),
            is_numeric=bool(data.get("isNumeric", False)),
            access_policy_id=_text(data.get("accessPolicyId")),
            access_policy_name=_text(data.get("accessPolicyName")),
            asset_access_policy_id=_text(data.get("assetAccessPolicyId")),
            access_policy_is_inherited=bool(data.get("accessPolicyIsInherited", False)),
        )


@dataclass
class PowerProviderComponent:
    """An outlet, tap-off or breaker on a power-providing asset."""

    id: str
    name: str
    number: int
    panel_number: Optional[int] = None

    TABLE_COLUMNS: ClassVar[TableColumns] = [
        ("Number", "number", 6),
        ("Panel", "panel_number", 6),
        ("Name", "name", 28),
        ("ID", "id", 36),
    ]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PowerProviderComponent":
        """Create a component; the number field name depends on the component kind."""
        number = None
        for key in ("outletNumber", "tapOffNumber", "breakerNumber", "number"):
            if data.get(key) is not None:
                number = data[key]
                break
        if number is None:
            raise MalformedResponseError(
                f"Power component {data.get('id')} has no outlet, tap-off or breaker number"
            )
        panel_number = data.get("panelNumber")
        return cls(
            id=_text(data.get("id")),
            name=_text(data.get("name")),
            number=int(number),
            panel_number=int(panel_number) if panel_number is not None else None,
        )


# --- Bulk CSV records ---


@dataclass
class UpdateAssetNameRecord:
    asset_id: str
    new_name: str

    @classmethod
    def from_row(cls, row: Dict[str, Optional[str]]) -> "UpdateAssetNameRecord":
        return cls(
            asset_id=parse_uuid(_required(row, "asset_id"), "asset_id"),
            new_name=_required(row, "new_name"),
        )


@dataclass
class UpdateAssetLocationRecord:
    asset_id: str
    new_location_id: str
    rack_position: Optional[str] = None
    rack_side: Optional[str] = None
    rack_u_location: Optional[int] = None

    @classmethod
    def from_row(cls, row: Dict[str, Optional[str]]) -> "UpdateAssetLocationRecord":
        return cls(
            asset_id=parse_uuid(_required(row, "asset_id"), "asset_id"),
            new_location_id=parse_uuid(_required(row, "new_location_id"), "new_location_id"),
            rack_position=_choice(_optional(row, "rack_position"), RACK_POSITIONS, "rack_position"),
            rack_side=_choice(_optional(row, "rack_side"), RACK_SIDES, "rack_side"),
            rack_u_location=_optional_int(row, "rack_u_location"),
        )


@dataclass
class AssetPropertyImportRecord:
    asset_id: str
    new_value: str

    @classmethod
    def from_row(cls, row: Dict[str, Optional[str]]) -> "AssetPropertyImportRecord":
        return cls(
            asset_id=parse_uuid(_required(row, "asset_id"), "asset_id"),
            new_value=_required(row, "new_value"),
        )


@dataclass
class CustomAssetPropertyImportRecord:
    asset_id: str
    custom_asset_property_name: str
    new_custom_property_value: str

    @classmethod
    def from_row(cls, row: Dict[str, Optional[str]]) -> "CustomAssetPropertyImportRecord":
        return cls(
            asset_id=parse_uuid(_required(row, "asset_id"), "asset_id"),
            custom_asset_property_name=_required(row, "custom_asset_property_name").strip(),
            new_custom_property_value=_required(row, "new_custom_property_value"),
        )


@dataclass
class AddRackAccessoryRecord:
    id: str
    panel_type: str
    side: str
    u_location: int

    @classmethod
    def from_row(cls, row: Dict[str, Optional[str]]) -> "AddRackAccessoryRecord":
        u_location = _optional_int(row, "u_location")
        if u_location is None:
            raise ValueError("u_location is required")
        return cls(
            id=parse_uuid(_required(row, "id"), "id"),
            panel_type=_choice(_required(row, "panel_type"), RACK_PANEL_TYPES, "panel_type") or "",
            side=_choice(_required(row, "side"), RACK_SIDES, "side") or "",
            u_location=u_location,
        )


@dataclass
class AlarmEventRecord:
    """Only the id column of a list-alarms export is needed."""

    id: str

    @classmethod
    def from_row(cls, row: Dict[str, Optional[str]]) -> "AlarmEventRecord":
        alarm_id = _required(row, "id").strip()
        if not alarm_id:
            raise ValueError("id is empty")
        return cls(id=alarm_id)


@dataclass
class BulkPowerAssociationRecord:
    """Consumer asset to provider asset, optionally at a numbered component."""

    asset_id: str
    provider_asset_id: str
    provider_asset_type: Optional[str] = None
    provider_component_number: Optional[int] = None
    provider_panel_number: Optional[int] = None

    @classmethod
    def from_row(cls, row: Dict[str, Optional[str]]) -> "BulkPowerAssociationRecord":
        return cls(
            asset_id=parse_uuid(_required(row, "asset_id"), "asset_id"),
            provider_asset_id=parse_uuid(_required(row, "provider_asset_id"), "provider_asset_id"),
            provider_asset_type=_optional(row, "provider_asset_type"),
            provider_component_number=_optional_int(row, "provider_component_number"),
            provider_panel_number=_optional_int(row, "provider_panel_number"),
        )


@dataclass
class AssetSensorUpdateRecord:
    """A sensor rename and/or access policy change.

    An empty ``access_policy_id`` means "not supplied"; the all-zero UUID
    means "reset to the inherited policy".
    """

    asset_id: str
    sensor_id: str
    name: Optional[str] = None
    access_policy_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Optional[str]]) -> "AssetSensorUpdateRecord":
        access_policy_id = _optional(row, "access_policy_id")
        if access_policy_id is not None:
            access_policy_id = parse_uuid(access_policy_id, "access_policy_id")
        return cls(
            asset_id=parse_uuid(_required(row, "asset_id"), "asset_id"),
            sensor_id=parse_uuid(_required(row, "sensor_id"), "sensor_id"),
            name=_optional(row, "name"),
            access_policy_id=access_policy_id,
        )
