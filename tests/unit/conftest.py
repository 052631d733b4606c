"""Unit test configuration - runs before any test collection or imports.

Forces the keyring null backend so tests never touch a real OS keychain,
points the config file at a temporary path and blocks real HTTP calls.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import keyring
import pytest
import requests
from keyring.backends.null import Keyring as NullKeyring

from hvcli.config import AppConfig

# Force the null backend BEFORE any test triggers a real keyring call.
keyring.set_keyring(NullKeyring())

INSTANCE_URL = "https://hv.test"


class MockResponse:
    """Mock HTTP response for preventing real network calls."""

    def __init__(self, json_data: Any = None, status_code: int = 200) -> None:
        """Initialize mock response.

        Args:
            json_data: JSON data to return from json() method
            status_code: HTTP status code
        """
        self._json_data = {} if json_data is None else json_data
        self.status_code = status_code
        self.text = ""

    def json(self) -> Any:
        """Return the JSON data."""
        return self._json_data

    def raise_for_status(self) -> None:
        """Raise requests.HTTPError on an error status."""
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP error {self.status_code}", response=self)


class FakeSession:
    """Stand-in for requests.Session that records every call.

    Responses are registered per (method, url). Registering several for the
    same route returns them in turn, the last one repeating.
    """

    def __init__(self) -> None:
        """Initialize with no routes."""
        self.calls: List[Dict[str, Any]] = []
        self._routes: Dict[Tuple[str, str], List[MockResponse]] = {}

    def add(self, method: str, url: str, json_data: Any = None, status_code: int = 200) -> None:
        """Register a response for a method and URL."""
        self._routes.setdefault((method, url), []).append(MockResponse(json_data, status_code))

    def _request(
        self, method: str, url: str, json: Any = None, params: Optional[Dict[str, Any]] = None
    ) -> MockResponse:
        self.calls.append({"method": method, "url": url, "json": json, "params": params})
        responses = self._routes.get((method, url))
        if not responses:
            return MockResponse()
        if len(responses) > 1:
            return responses.pop(0)
        return responses[0]

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> MockResponse:
        return self._request("GET", url, params=params)

    def post(
        self, url: str, json: Any = None, params: Optional[Dict[str, Any]] = None
    ) -> MockResponse:
        return self._request("POST", url, json=json, params=params)

    def put(
        self, url: str, json: Any = None, params: Optional[Dict[str, Any]] = None
    ) -> MockResponse:
        return self._request("PUT", url, json=json, params=params)

    def calls_to(self, method: str, url: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return recorded calls for a method, optionally for one URL."""
        return [
            call
            for call in self.calls
            if call["method"] == method and (url is None or call["url"] == url)
        ]


@pytest.fixture
def fake_session() -> FakeSession:
    """Return a fresh recording session."""
    return FakeSession()


@pytest.fixture
def config() -> AppConfig:
    """Return a complete configuration pointing at a fake instance."""
    return AppConfig(
        client_id="hvcli-test",
        client_secret="s3cret",
        scope="HyperviewManagerApi",
        token_url=f"{INSTANCE_URL}/connect/token",
        instance_url=INSTANCE_URL,
    )


@pytest.fixture
def write_csv(tmp_path: Path):
    """Return a helper writing CSV text to a temporary file."""

    def _write(text: str, name: str = "input.csv") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the user's config file and the network.

    The config file is redirected into the test's temp dir and the
    ``HYPERVIEW_*`` overrides are cleared. ``requests`` module-level calls
    return empty mock responses; tests that need specific responses override
    them with their own mocks.
    """
    monkeypatch.setenv("HYPERVIEW_CONFIG", str(tmp_path / "hyperview.toml"))
    for key in ["client_id", "client_secret", "scope", "token_url", "instance_url"]:
        monkeypatch.delenv(f"HYPERVIEW_{key.upper()}", raising=False)
    monkeypatch.delenv("HVCLI_SSL_VERIFY", raising=False)

    def mock_requests_method(*args: Any, **kwargs: Any) -> MockResponse:
        """Return empty mock response for any unpatched HTTP call."""
        return MockResponse()

    monkeypatch.setattr("requests.get", mock_requests_method)
    monkeypatch.setattr("requests.post", mock_requests_method)
    monkeypatch.setattr("requests.put", mock_requests_method)
    monkeypatch.setattr("requests.patch", mock_requests_method)
    monkeypatch.setattr("requests.delete", mock_requests_method)
