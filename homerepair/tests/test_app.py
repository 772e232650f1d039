"""Tests for app wiring: health endpoints, CORS and error rendering."""

import pytest
from fastapi.testclient import TestClient

from homerepair.ai.vision import dependencies as vision_dependencies
from homerepair.ai.vision.dependencies import get_vision_client
from homerepair.config import AppSettings, Environment
from homerepair.main import app, get_version
from homerepair.matching import dependencies as matching_dependencies
from homerepair.matching.dependencies import get_search_client
from homerepair.profiles.dependencies import get_profile_service
from homerepair.search.config import SearchSettings, set_search_settings


class BrokenProfileService:
    async def get_profile(self, user):
        raise RuntimeError("unexpected")


@pytest.mark.parametrize("path", ["/", "/healthcheck"])
def test_health(client, path):
    response = client.get(path)

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "HomeRepair API is running"}


def test_version_matches_pyproject():
    assert app.version == get_version()


def test_cors_preflight(client):
    response = client.options(
        "/api/chat-handler",
        headers={
            "Origin": "https://app.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type, Authorization",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_request_validation_error_is_400(client, auth_headers):
    response = client.post("/api/jobs", json=[1, 2], headers=auth_headers("user-1"))

    assert response.status_code == 400
    assert set(response.json()) == {"error"}


def test_unexpected_error_is_generic_500(client, auth_headers):
    """Test that unhandled exceptions never leak their details."""
    app.dependency_overrides[get_profile_service] = BrokenProfileService
    safe_client = TestClient(app, raise_server_exceptions=False)

    response = safe_client.get("/api/get-profile", headers=auth_headers("user-1"))

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


@pytest.mark.parametrize(
    ("environment", "expected"),
    [("dev", True), ("staging", True), ("prod", False)],
)
def test_docs_enabled_outside_production(monkeypatch, environment, expected):
    monkeypatch.setenv("ENVIRONMENT", environment)

    settings = AppSettings()

    assert settings.environment is Environment(environment)
    assert settings.docs_enabled is expected
    assert settings.api_prefix == "/api"


def test_shutdown_closes_shared_clients():
    set_search_settings(SearchSettings(endpoint="https://search.example.com", api_key="k"))
    try:
        get_search_client()
        get_vision_client()

        with TestClient(app):
            pass

        assert matching_dependencies._search_client is None
        assert vision_dependencies._vision_client is None
    finally:
        set_search_settings(None)
