"""Test the HTTP API"""
import pytest
from fastapi.testclient import TestClient

from travel_inquiry.api.app import create_app


@pytest.fixture
def client(handler):
    with TestClient(create_app(handler)) as test_client:
        yield test_client


class TestContactApi:
    """Test contact form endpoints"""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["name"] == "Travel Inquiry API"

    def test_submit(self, client, sender, valid_payload):
        response = client.post("/api/v1/contact", json=valid_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["submissionId"].startswith("sub_")
        assert len(sender.outbox) == 2

    def test_submit_invalid(self, client, storage):
        response = client.post(
            "/api/v1/contact", json={"name": "", "email": "a@b.com", "message": "x"}
        )

        assert response.status_code == 400
        assert "required" in response.json()["message"]
        assert storage.submissions == []

    def test_submit_malformed(self, client):
        response = client.post(
            "/api/v1/contact",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 500

    def test_get_submission(self, client, valid_payload):
        submission_id = client.post("/api/v1/contact", json=valid_payload).json()["submissionId"]

        response = client.get(f"/api/v1/contact/{submission_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == submission_id
        assert data["email"] == "john@example.com"
        assert data["travelDateStart"] == "2026-12-01"

    def test_get_missing_submission(self, client):
        response = client.get("/api/v1/contact/sub_0_missing")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_list_by_email(self, client, valid_payload):
        client.post("/api/v1/contact", json=valid_payload)
        client.post("/api/v1/contact", json={**valid_payload, "email": "other@example.com"})

        response = client.get("/api/v1/contact", params={"email": "John@Example.com"})

        assert response.status_code == 200
        assert [item["email"] for item in response.json()] == ["john@example.com"]

    def test_list_requires_email(self, client):
        assert client.get("/api/v1/contact").status_code == 400
