"""Unit tests for configuration loading."""

from pathlib import Path

import keyring
import keyring.errors
import pytest

from hvcli.config import (
    KEYRING_SECRET_KEY,
    KEYRING_SERVICE,
    ApiSettings,
    load_config,
    load_config_file,
    remove_client_secret,
    store_client_secret,
)
from hvcli.utils import ConfigurationError

CONFIG_TEXT = """
client_id = "hvcli"
client_secret = "from-file"
scope = "HyperviewManagerApi"
token_url = "https://hv.test/connect/token"
instance_url = "https://hv.test/"

[api]
batch_size = 25
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "hyperview.toml"
    path.write_text(CONFIG_TEXT, encoding="utf-8")
    return path


class TestLoadConfig:
    """Tests for load_config."""

    def test_reads_file(self, config_file: Path) -> None:
        config = load_config(config_file)

        assert config.client_id == "hvcli"
        assert config.client_secret == "from-file"
        assert config.instance_url == "https://hv.test"
        assert config.api.batch_size == 25
        assert config.api.path_delimiter == "~"
        assert config.missing_keys() == []

    def test_environment_overrides_file(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HYPERVIEW_INSTANCE_URL", "https://other.test")

        assert load_config(config_file).instance_url == "https://other.test"

    def test_missing_file_gives_empty_config(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "absent.toml")

        assert config.missing_keys() == ["client_id", "client_secret", "token_url", "instance_url"]

    def test_secret_falls_back_to_keyring(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "hyperview.toml"
        path.write_text('client_id = "hvcli"\n', encoding="utf-8")
        monkeypatch.setattr(
            "hvcli.config.keyring.get_password",
            lambda service, key: "from-keyring" if key == KEYRING_SECRET_KEY else None,
        )

        assert load_config(path).client_secret == "from-keyring"

    def test_only_known_keys_are_loaded(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "hyperview.toml"
        path.write_text(
            CONFIG_TEXT + '\nauth_url = "https://hv.test/connect/authorize"\n', encoding="utf-8"
        )
        monkeypatch.setenv("HYPERVIEW_AUTH_URL", "https://other.test/authorize")

        config = load_config(path)

        assert not hasattr(config, "auth_url")
        assert config.token_url == "https://hv.test/connect/token"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "hyperview.toml"
        path.write_text("client_id = \n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config_file(path)

    def test_default_path_from_environment(self, tmp_path: Path) -> None:
        # HYPERVIEW_CONFIG is pointed at tmp_path by the autouse fixture
        (tmp_path / "hyperview.toml").write_text(CONFIG_TEXT, encoding="utf-8")

        assert load_config().client_id == "hvcli"


class TestApiSettings:
    """Tests for ApiSettings."""

    def test_rejects_zero_batch_size(self) -> None:
        with pytest.raises(ConfigurationError):
            ApiSettings.from_dict({"batch_size": 0})

    @pytest.mark.parametrize("value", ["lots", None, [100]])
    def test_rejects_non_integer_batch_size(self, value) -> None:
        with pytest.raises(ConfigurationError, match="batch_size"):
            ApiSettings.from_dict({"batch_size": value})

    def test_rejects_empty_path_delimiter(self) -> None:
        with pytest.raises(ConfigurationError, match="path_delimiter"):
            ApiSettings.from_dict({"path_delimiter": ""})

    def test_bad_api_table_in_file(self, tmp_path: Path) -> None:
        path = tmp_path / "hyperview.toml"
        path.write_text('[api]\nbatch_size = "many"\n', encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_defaults(self) -> None:
        settings = ApiSettings.from_dict({})

        assert settings.batch_size == 100
        assert "delimitedPath" in settings.search_attributes


def test_store_and_remove_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    stored = {}
    monkeypatch.setattr(
        "hvcli.config.keyring.set_password",
        lambda service, key, value: stored.__setitem__((service, key), value),
    )
    monkeypatch.setattr(
        "hvcli.config.keyring.delete_password",
        lambda service, key: stored.pop((service, key)),
    )

    store_client_secret("abc")
    assert stored == {(KEYRING_SERVICE, KEYRING_SECRET_KEY): "abc"}

    remove_client_secret()
    assert stored == {}


def test_remove_missing_secret_is_quiet(monkeypatch: pytest.MonkeyPatch) -> None:
    def delete_password(service: str, key: str) -> None:
        raise keyring.errors.PasswordDeleteError("not stored")

    monkeypatch.setattr("hvcli.config.keyring.delete_password", delete_password)

    remove_client_secret()
