"""Unit tests for search filter compilation."""

import logging

import pytest

from hvcli.config import ApiSettings
from hvcli.models import Asset
from hvcli.query_builder import SearchCriteria, compile_query, parse_key_value


@pytest.fixture
def settings() -> ApiSettings:
    return ApiSettings()


class TestCompileQuery:
    """Tests for compile_query."""

    def test_type_and_location(self, settings: ApiSettings) -> None:
        """Asset type and location compile to two predicates in order."""
        compiled = compile_query(
            SearchCriteria(asset_type="Server", location_path="All/"), settings
        )

        assert compiled.filter_string == (
            "assetType = 'Server' AND delimitedPath STARTS WITH 'All~'"
        )

    def test_empty_criteria_gives_empty_filter(self, settings: ApiSettings) -> None:
        compiled = compile_query(SearchCriteria(), settings)

        assert compiled.filters == []
        assert compiled.filter_string == ""

    def test_empty_criteria_with_root_scope(self, settings: ApiSettings) -> None:
        """An unscoped search is anchored under the root location only."""
        compiled = compile_query(SearchCriteria(), settings, root_location_name="All")

        assert compiled.filter_string == "delimitedPath STARTS WITH 'All~'"
        assert " AND " not in compiled.filter_string

    def test_explicit_location_overrides_root_scope(self, settings: ApiSettings) -> None:
        compiled = compile_query(
            SearchCriteria(location_path="All/Site A/"), settings, root_location_name="All"
        )

        assert compiled.filters == ["delimitedPath STARTS WITH 'All~Site A~'"]

    def test_predicate_order(self, settings: ApiSettings) -> None:
        """Every criterion appears once, in the documented order."""
        criteria = SearchCriteria(
            any_of_key="serialNumber",
            any_of_values=["A1", "B2"],
            asset_type="Server",
            location_path="All/Lab/",
            properties=["assetTag=123"],
            custom_properties=["Owner = Ops "],
            id="3a6c3022-6140-4e85-a64f-bf868766c4c8",
            manufacturer="Dell",
            product="R740",
        )

        compiled = compile_query(criteria, settings)

        assert compiled.filters == [
            'assetProperty_serialNumber EXISTS AND assetProperty_serialNumber IN ["A1", "B2"]',
            "assetType = 'Server'",
            "delimitedPath STARTS WITH 'All~Lab~'",
            "assetProperty_assetTag = '123'",
            "customProperty_Owner = 'Ops'",
            "id = '3a6c3022-6140-4e85-a64f-bf868766c4c8'",
            "manufacturerName = 'Dell'",
            "productName CONTAINS 'R740'",
        ]
        assert compiled.filter_string.count(" AND ") == 8

    def test_malformed_tokens_are_skipped(
        self, settings: ApiSettings, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Bad key=value tokens are logged and dropped; good ones survive."""
        criteria = SearchCriteria(
            properties=["noequals", "=value", "assetTag=ok"],
            custom_properties=["Rack=R1=B"],
        )

        with caplog.at_level(logging.ERROR, logger="hvcli.query_builder"):
            compiled = compile_query(criteria, settings)

        assert compiled.filters == [
            "assetProperty_assetTag = 'ok'",
            "customProperty_Rack = 'R1=B'",
        ]
        assert "noequals" in caplog.text
        assert "=value" in caplog.text

    def test_single_quotes_are_escaped(self, settings: ApiSettings) -> None:
        compiled = compile_query(SearchCriteria(product="O'Brien 1U"), settings)

        assert compiled.filters == ["productName CONTAINS 'O\\'Brien 1U'"]

    def test_any_of_keeps_non_ascii_values(self, settings: ApiSettings) -> None:
        compiled = compile_query(
            SearchCriteria(any_of_key="assetTag", any_of_values=["Café", "Zürich"]), settings
        )

        assert compiled.filters == [
            'assetProperty_assetTag EXISTS AND assetProperty_assetTag IN ["Café", "Zürich"]'
        ]

    def test_custom_delimiter(self) -> None:
        compiled = compile_query(
            SearchCriteria(location_path="All/Lab/"), ApiSettings(path_delimiter="|")
        )

        assert compiled.filters == ["delimitedPath STARTS WITH 'All|Lab|'"]


class TestPayload:
    """Tests for CompiledQuery.to_payload."""

    def test_payload_fields(self, settings: ApiSettings) -> None:
        compiled = compile_query(
            SearchCriteria(search_pattern="web", asset_type="Server", skip=20, limit=50),
            settings,
        )

        payload = compiled.to_payload()

        assert payload["limit"] == 50
        assert payload["offset"] == 20
        assert payload["q"] == "web"
        assert payload["filter"] == "assetType = 'Server'"
        assert payload["attributesToRetrieve"] == settings.search_attributes

    def test_payload_without_search_term(self, settings: ApiSettings) -> None:
        payload = compile_query(SearchCriteria(), settings).to_payload()

        assert "q" not in payload
        assert payload["filter"] == ""


class TestParseKeyValue:
    """Tests for parse_key_value."""

    def test_splits_on_first_equals(self) -> None:
        assert parse_key_value(" a = b=c ") == ("a", "b=c")

    def test_empty_value_is_allowed(self) -> None:
        assert parse_key_value("a=") == ("a", "")

    @pytest.mark.parametrize("token", ["abc", "=abc", "  =abc", ""])
    def test_malformed(self, token: str) -> None:
        assert parse_key_value(token) is None


@pytest.mark.parametrize("path", ["All/", "All/Site A/Room 1/", "All/Lab/Rack 7"])
def test_location_path_round_trip(settings: ApiSettings, path: str) -> None:
    """A compiled location maps back to the same path on the asset."""
    compiled = compile_query(SearchCriteria(location_path=path), settings)
    delimited = compiled.filters[0].split("'")[1]

    hit = {
        "id": "3a6c3022-6140-4e85-a64f-bf868766c4c8",
        "displayName": "x",
        "assetLifecycleState": "active",
        "assetType": "Server",
        "manufacturerId": "m",
        "manufacturerName": "Dell",
        "monitoringState": "on",
        "parentId": "p",
        "parentDisplayName": "Lab",
        "productId": "pr",
        "productName": "R740",
        "status": "normal",
        "delimitedPath": delimited,
    }

    assert Asset.from_search_hit(hit, settings.path_delimiter).path == path
