"""Unit tests for asset name, location, port and rack accessory updates."""

import pytest

from hvcli.asset_api import (
    add_rack_accessory,
    bulk_add_rack_accessory,
    bulk_update_asset_location,
    bulk_update_asset_name,
    bulk_update_ports,
    list_asset_ports,
    update_asset_location,
    update_asset_name,
)
from hvcli.utils import AssetNotFoundError

ASSET_ID = "3a6c3022-6140-4e85-a64f-bf868766c4c8"
OTHER_ID = "0702c619-ee10-4af2-bda7-471772ac97c3"
LOCATION_ID = "11223344-5566-7788-99aa-bbccddeeff00"
ASSET_URL = f"https://hv.test/api/asset/assets/{ASSET_ID}"


class TestAssetName:
    """Tests for asset renames."""

    def test_update_writes_back_full_document(self, config, fake_session) -> None:
        fake_session.add("GET", ASSET_URL, {"id": ASSET_ID, "name": "old", "assetType": "Server"})

        update_asset_name(config, fake_session, ASSET_ID, "new")

        put = fake_session.calls_to("PUT", ASSET_URL)[0]
        assert put["json"] == {"id": ASSET_ID, "name": "new", "assetType": "Server"}

    def test_asset_without_name(self, config, fake_session) -> None:
        fake_session.add("GET", ASSET_URL, {"id": ASSET_ID})

        with pytest.raises(AssetNotFoundError):
            update_asset_name(config, fake_session, ASSET_ID, "new")

    def test_bulk_cleans_and_skips_empty_names(self, config, fake_session, write_csv) -> None:
        fake_session.add("GET", ASSET_URL, {"id": ASSET_ID, "name": "old"})
        filename = write_csv(
            'asset_id,new_name\n{a},"  ""web"" 01 "\n{b},"  "\n'.format(a=ASSET_ID, b=OTHER_ID)
        )

        result = bulk_update_asset_name(config, fake_session, filename)

        puts = fake_session.calls_to("PUT")
        assert len(puts) == 1
        assert puts[0]["json"]["name"] == "web 01"
        assert result.failures[0][0] == OTHER_ID


class TestAssetLocation:
    """Tests for asset moves."""

    def test_update_location_payload(self, config, fake_session) -> None:
        update_asset_location(config, fake_session, ASSET_ID, LOCATION_ID, None, "Front", 12)

        put = fake_session.calls_to("PUT")[0]
        assert put["url"] == f"https://hv.test/api/asset/location/{ASSET_ID}"
        assert put["params"] == {"id": ASSET_ID}
        assert put["json"] == {
            "parentId": LOCATION_ID,
            "rackPosition": None,
            "rackSide": "Front",
            "rackULocation": 12,
        }

    def test_bulk_location_skips_bad_side(self, config, fake_session, write_csv) -> None:
        filename = write_csv(
            "asset_id,new_location_id,rack_position,rack_side,rack_u_location\n"
            f"{ASSET_ID},{LOCATION_ID},,rear,4\n"
            f"{OTHER_ID},{LOCATION_ID},,Sideways,4\n"
        )

        bulk_update_asset_location(config, fake_session, filename)

        puts = fake_session.calls_to("PUT")
        assert len(puts) == 1
        assert puts[0]["json"]["rackSide"] == "Rear"
        assert puts[0]["json"]["rackULocation"] == 4


class TestPorts:
    """Tests for port listing and bulk updates."""

    def test_list_ports(self, config, fake_session) -> None:
        fake_session.add(
            "GET",
            f"https://hv.test/api/asset/physicalPorts/detailed/{ASSET_ID}",
            [{"id": OTHER_ID, "name": "eth0", "parentId": ASSET_ID, "portNumber": 1}],
        )

        ports = list_asset_ports(config, fake_session, ASSET_ID)

        assert ports[0].name == "eth0"
        assert ports[0].port_number == 1
        assert ports[0].port_side is None

    @pytest.mark.parametrize(
        "patch_panel,url,extra",
        [
            (
                False,
                f"https://hv.test/api/asset/physicalPorts/{OTHER_ID}",
                {"portSideValueId": "side-1", "portTypeValueId": "type-1"},
            ),
            (
                True,
                f"https://hv.test/api/asset/physicalPorts/patchPanel/{OTHER_ID}",
                {"portSideValueId": "side-1", "connectorTypeValueId": "conn-1"},
            ),
        ],
    )
    def test_bulk_update_ports(self, config, fake_session, write_csv, patch_panel, url, extra):
        filename = write_csv(
            "id,name,parent_id,port_number,port_side,port_side_value_id,"
            "connector_type_value_id,port_type_value_id\n"
            f"{OTHER_ID},eth0,{ASSET_ID},1,Front,side-1,conn-1,type-1\n"
        )

        bulk_update_ports(config, fake_session, filename, patch_panel)

        put = fake_session.calls_to("PUT")[0]
        assert put["url"] == url
        expected = {"id": OTHER_ID, "name": "eth0", "parentId": ASSET_ID, "portNumber": 1}
        expected.update(extra)
        assert put["json"] == expected


class TestRackAccessory:
    """Tests for rack accessories."""

    def test_rear_blanking_panel(self, config, fake_session) -> None:
        add_rack_accessory(config, fake_session, ASSET_ID, "BlankingPanel", "Rear", 7)

        post = fake_session.calls_to("POST", "https://hv.test/api/asset/rackPanel")[0]
        assert post["json"] == {
            "panelType": "blankingPanel",
            "rackId": ASSET_ID,
            "rackSide": "rear",
            "rackPanelDataCollection": [
                {"rackUnit": 7, "displayName": "Blanking Panel at 7U(R)"}
            ],
        }

    def test_unknown_side_cable_management(self, config, fake_session) -> None:
        add_rack_accessory(config, fake_session, ASSET_ID, "CableManagement", "Unknown", 3)

        payload = fake_session.calls_to("POST")[0]["json"]
        assert payload["panelType"] == "cableManagement"
        assert payload["rackSide"] == ""
        assert payload["rackPanelDataCollection"][0]["displayName"] == "Cable Management at 3U"

    def test_bulk_add(self, config, fake_session, write_csv) -> None:
        filename = write_csv(
            "id,panel_type,side,u_location\n"
            f"{ASSET_ID},BlankingPanel,Front,1\n"
            f"{ASSET_ID},CableManagement,Front,2\n"
            f"{ASSET_ID},Shelf,Front,3\n"
        )

        bulk_add_rack_accessory(config, fake_session, filename)

        assert len(fake_session.calls_to("POST")) == 2
