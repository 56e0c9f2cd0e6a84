"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from eligibility_engine.core import get_settings
from eligibility_engine.main import create_app


@pytest.fixture
def client(service) -> TestClient:
    """Test client over the real decision table (lifespan not started)."""
    return TestClient(create_app(service))


class TestEvaluateEndpoint:
    def test_eligible_applicant(self, client: TestClient):
        response = client.post(
            "/evaluate",
            json={
                "relationship": "mother",
                "situation": "illness",
                "is_single_parent": False,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_error"] is False
        assert data["response"]["output"]["case"] == "A"
        assert data["response"]["output"]["monthly_benefit"] == 725

    def test_string_encoded_fields(self, client: TestClient):
        response = client.post(
            "/evaluate",
            json={
                "relationship": "mother",
                "situation": "birth",
                "is_single_parent": "True",
                "total_children_after": "1",
            },
        )

        assert response.status_code == 200
        assert response.json()["response"]["output"]["case"] == "E"

    def test_malformed_boolean(self, client: TestClient):
        response = client.post(
            "/evaluate",
            json={
                "relationship": "mother",
                "situation": "birth",
                "is_single_parent": "maybe",
            },
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error_kind"] == "malformed_input"
        assert "maybe" in data["text"]

    def test_rejected_relationship(self, client: TestClient):
        response = client.post(
            "/evaluate",
            json={
                "relationship": "brother",
                "situation": "birth",
                "is_single_parent": False,
            },
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error_kind"] == "validation"
        assert any("relationship" in error["path"] for error in data["errors"])
        assert "response" not in data

    def test_missing_field_rejected_by_request_model(self, client: TestClient):
        response = client.post("/evaluate", json={"relationship": "mother"})
        assert response.status_code == 422

    def test_numeric_single_parent_rejected(self, client: TestClient):
        response = client.post(
            "/evaluate",
            json={"relationship": "mother", "situation": "birth", "is_single_parent": 1},
        )
        assert response.status_code == 422


class TestServiceEndpoints:
    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert "evaluate" in response.json()["endpoints"]

    def test_root_reports_configured_version(self, service, monkeypatch):
        monkeypatch.setenv("APP_VERSION", "9.9.9")
        get_settings.cache_clear()
        try:
            response = TestClient(create_app(service)).get("/")
        finally:
            get_settings.cache_clear()

        assert response.json()["version"] == "9.9.9"

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_metrics_count_requests(self, client: TestClient):
        client.post(
            "/evaluate",
            json={"relationship": "mother", "situation": "illness", "is_single_parent": False},
        )
        client.post(
            "/evaluate",
            json={"relationship": "mother", "situation": "birth", "is_single_parent": "maybe"},
        )

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "eligibility_requests_total 2.0" in response.text
        assert "eligibility_errors_total 1.0" in response.text
