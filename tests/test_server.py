"""
Tests for the assembled application and its startup wiring.
"""

import pytest
from fastapi.testclient import TestClient

from concordserver import service_factory
from concordserver.config import Settings
from concordserver.server import create_app

from tests.conftest import AUTHORITY, BANK_OF_TEST_LEI, BANK_OF_TEST_UUID, FIXTURES_DIR


@pytest.fixture
def configured(tmp_path):
    """Install settings pointing at a fresh database and reset the singletons afterwards."""

    def _configure(**overrides) -> Settings:
        values = {"database_url": f"sqlite:///{tmp_path / 'concordances.db'}"}
        values.update(overrides)
        settings = Settings(**values)
        service_factory.configure(settings)
        return settings

    yield _configure
    service_factory.close_service()
    service_factory._settings = None
    service_factory._logger = None


class TestStartup:
    def test_concepts_loaded_at_startup(self, configured) -> None:
        configured(concepts_path=str(FIXTURES_DIR))

        with TestClient(create_app()) as client:
            response = client.get(
                "/concordances", params={"authority": AUTHORITY + "LEI", "identifierValue": BANK_OF_TEST_LEI}
            )

        assert response.status_code == 200
        assert response.headers["Cache-Control"] == "max-age=30, public"
        (concordance,) = response.json()["concordances"]
        assert concordance["concept"]["id"] == "http://api.ft.com/things/" + BANK_OF_TEST_UUID

    def test_public_api_url_setting(self, configured) -> None:
        configured(concepts_path=str(FIXTURES_DIR), public_api_url="https://api.example.com")

        with TestClient(create_app()) as client:
            response = client.get("/concordances", params={"conceptId": BANK_OF_TEST_UUID})

        urls = {c["concept"]["apiUrl"] for c in response.json()["concordances"]}
        assert urls == {"https://api.example.com/organisations/" + BANK_OF_TEST_UUID}

    def test_without_concepts(self, configured) -> None:
        configured()

        with TestClient(create_app()) as client:
            assert client.get("/__gtg").text == "OK"
            response = client.get("/concordances", params={"conceptId": BANK_OF_TEST_UUID})

        assert response.json() == {"concordances": []}

    def test_missing_concepts_path_is_skipped(self, configured, tmp_path) -> None:
        configured(concepts_path=str(tmp_path / "missing"))

        with TestClient(create_app()) as client:
            assert client.get("/__gtg").status_code == 200

    def test_store_closed_on_shutdown(self, configured) -> None:
        configured()

        with TestClient(create_app()):
            assert service_factory._store is not None
        assert service_factory._store is None
