"""
Tests for the notification API.

These tests verify the FastAPI endpoints on top of the pipeline.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app, reset_api_state
from notifications.factory import ChannelFactory
from notifications.store import NotificationStore


@pytest.fixture
def api_client(factory: ChannelFactory, store: NotificationStore):
    """Create a test client with fresh state."""
    reset_api_state(factory=factory, store=store)
    yield TestClient(app)
    reset_api_state(None, None)


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, api_client):
        """Test that health endpoint returns healthy."""
        response = api_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestChannelsEndpoint:
    """Tests for the /channels endpoint."""

    def test_lists_channels(self, api_client):
        """Test that every channel is listed with its save support."""
        response = api_client.get("/channels")

        assert response.status_code == 200
        assert response.json() == [
            {"channel": "email", "supports_save": True},
            {"channel": "sms", "supports_save": True},
            {"channel": "push", "supports_save": False},
            {"channel": "whatsapp", "supports_save": False},
        ]


class TestNotifyEndpoint:
    """Tests for the /notify endpoint."""

    def test_email_notification(self, api_client, store):
        """Test a full email run via the API."""
        response = api_client.post("/notify", json={
            "channel": "email",
            "target": "user@example.com",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["channel"] == "email"
        assert data["target"] == "user@example.com"
        assert data["state"] == "completed"
        assert data["content"] == "Welcome to our service! Thanks for subscribing."
        assert data["delivered"] is True
        assert data["saved"] is True
        assert data["strategies_channel"] == "email"
        assert store.count() == 1

    def test_push_is_not_saved(self, api_client, store):
        """Test that push notifications complete without saving."""
        response = api_client.post("/notify", json={"channel": "push", "target": "token_abc123"})

        data = response.json()
        assert data["state"] == "completed"
        assert data["delivered"] is True
        assert data["saved"] is False
        assert store.count() == 0

    def test_invalid_target_is_aborted(self, api_client, store):
        """Test that validation failure is a normal response, not an error."""
        response = api_client.post("/notify", json={"channel": "sms", "target": "12345"})

        assert response.status_code == 200
        data = response.json()
        assert data["state"] == "aborted"
        assert data["content"] is None
        assert data["delivered"] is False
        assert data["saved"] is False
        assert store.count() == 0

    def test_unknown_channel(self, api_client):
        """Test that unknown channel returns 400."""
        response = api_client.post("/notify", json={"channel": "pigeon", "target": "somewhere"})

        assert response.status_code == 400
        assert "unknown channel" in response.json()["detail"].lower()

    def test_missing_target(self, api_client):
        """Test that a malformed request is rejected by validation."""
        response = api_client.post("/notify", json={"channel": "email"})

        assert response.status_code == 422

    def test_strategies_from_other_channel(self, api_client, store):
        """Test running an SMS notification with the email strategies."""
        response = api_client.post("/notify", json={
            "channel": "sms",
            "target": "5555555555",
            "strategies_from": "email",
        })

        data = response.json()
        assert data["channel"] == "sms"
        assert data["strategies_channel"] == "email"
        assert data["content"] == "Your verification code is: 123456"
        assert data["saved"] is True
        assert store.list_all()[0].channel == "email"

    def test_unknown_strategies_from(self, api_client):
        """Test that an unknown strategy channel returns 400."""
        response = api_client.post("/notify", json={
            "channel": "sms",
            "target": "5555555555",
            "strategies_from": "pigeon",
        })

        assert response.status_code == 400


class TestInspectionEndpoints:
    """Tests for /notifications and /logs."""

    def test_saved_notifications(self, api_client):
        """Test listing and filtering saved notifications."""
        api_client.post("/notify", json={"channel": "email", "target": "a@example.com"})
        api_client.post("/notify", json={"channel": "sms", "target": "1234567890"})

        all_records = api_client.get("/notifications").json()
        sms_records = api_client.get("/notifications", params={"channel": "sms"}).json()

        assert len(all_records) == 2
        assert len(sms_records) == 1
        assert sms_records[0]["target"] == "1234567890"

    def test_saved_notifications_unknown_channel(self, api_client):
        """Test that filtering on an unknown channel returns 400."""
        response = api_client.get("/notifications", params={"channel": "pigeon"})

        assert response.status_code == 400

    def test_logs(self, api_client):
        """Test that shared-logger messages are exposed."""
        api_client.post("/notify", json={"channel": "whatsapp", "target": "0987654321"})

        response = api_client.get("/logs")

        assert response.status_code == 200
        assert response.json()["messages"] == ["WhatsApp processed for 0987654321"]
