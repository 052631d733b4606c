"""API paths and fixed identifiers for the Hyperview asset service."""

ASSET_ALARM_EVENT_BULK_CLOSE_API_PREFIX = "/api/asset/alarmEvents/bulkClose"
ASSET_ALARM_EVENT_BULK_ACKNOWLEDGE_API_PREFIX = "/api/asset/alarmEvents/bulkAcknowledgementStates"
ASSET_ALARM_EVENT_LIST_API_PREFIX = "/api/asset/alarmEvents/allAssets/advancedCollection"
ASSET_ASSETS_API_PREFIX = "/api/asset/assets"
ASSET_LOCATION_API_PREFIX = "/api/asset/location"
ASSET_PORTS_API_PREFIX = "/api/asset/physicalPorts"
ASSET_PROPERTIES_API_PREFIX = "/api/asset/assetProperties"
ASSET_SEARCH_API_PREFIX = "/api/asset/search"
BUSWAY_TAPOFF_API_PREFIX = "/api/asset/buswayTapOff"
CUSTOM_ASSET_PROPERTIES_API_PREFIX = "/api/asset/customAssetProperties"
PDU_RPP_BREAKERS_API_PREFIX = "/api/asset/pduBreakers"
POWER_ASSOCIATION_API_PREFIX = "/api/asset/powerSourceAssociations"
RACK_PANEL_API_PREFIX = "/api/asset/rackPanel"
RACK_PDU_OUTLETS_API_PREFIX = "/api/asset/availablePowerSources/outlets"
SENSOR_API_PREFIX = "/api/asset/sensors"

BULK_ACTION_BATCH_SIZE = 100
PATH_DELIMITER = "~"

# The "All" location every other location hangs under
ROOT_LOCATION_ID = "11223344-5566-7788-99aa-bbccddeeff00"

# All-zero id meaning "clear / reset to inherited"
SENTINEL_ID = "00000000-0000-0000-0000-000000000000"

ASSET_PROPERTY_ASSET_TAG = "assetTag"
ASSET_PROPERTY_SERIAL_NUMBER = "serialNumber"
ASSET_PROPERTY_DESIGN_VALUE = "designValue"

EDITABLE_ASSET_PROPERTIES = [
    ASSET_PROPERTY_SERIAL_NUMBER,
    ASSET_PROPERTY_ASSET_TAG,
    ASSET_PROPERTY_DESIGN_VALUE,
]

SEARCH_ATTRIBUTES = [
    "id",
    "displayName",
    "assetLifecycleState",
    "assetType",
    "manufacturerId",
    "manufacturerName",
    "monitoringState",
    "parentId",
    "parentDisplayName",
    "productId",
    "productName",
    "status",
    "delimitedPath",
    "assetProperty_serialNumber",
]

ASSET_TYPES = [
    "BladeEnclosure",
    "BladeNetwork",
    "BladeServer",
    "BladeStorage",
    "Busway",
    "Camera",
    "Chiller",
    "Crac",
    "Crah",
    "Environmental",
    "FireControlPanel",
    "Generator",
    "InRowCooling",
    "KvmSwitch",
    "Location",
    "Monitor",
    "NetworkDevice",
    "NetworkStorage",
    "NodeServer",
    "PatchPanel",
    "PduAndRpp",
    "PowerMeter",
    "Rack",
    "RackPdu",
    "Server",
    "SmallUps",
    "TransferSwitch",
    "Unknown",
    "Ups",
    "VirtualServer",
]

# Provider asset type -> endpoint listing its numbered components
POWER_PROVIDER_COMPONENT_PATHS = {
    "PduAndRpp": PDU_RPP_BREAKERS_API_PREFIX,
    "RackPdu": RACK_PDU_OUTLETS_API_PREFIX,
    "Busway": BUSWAY_TAPOFF_API_PREFIX,
}

RACK_SIDES = ["Front", "Rear", "Unknown"]
RACK_POSITIONS = ["Left", "Right", "Top", "Bottom", "Above", "Below", "Unknown"]
RACK_PANEL_TYPES = ["BlankingPanel", "CableManagement"]
