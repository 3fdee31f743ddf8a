"""
Test Configuration

Pytest configuration and fixtures for the test suite.
"""

import json
from typing import Callable, Generator, List

import pytest
from fastapi.testclient import TestClient

from helpers import RecordingSink, make_settings
from levanta_webhook.config import Settings, get_settings
from levanta_webhook.main import app
from levanta_webhook.notifications import NotificationSink
from levanta_webhook.webhook.handler import get_notification_sink


@pytest.fixture
def settings() -> Settings:
    """Settings with the test secret configured."""
    return make_settings()


@pytest.fixture
def sink() -> RecordingSink:
    """In-memory notification sink."""
    return RecordingSink()


@pytest.fixture
def make_client(sink: RecordingSink) -> Generator[Callable[..., TestClient], None, None]:
    """Factory for test clients running with the given settings."""
    clients: List[TestClient] = []

    def _make(settings: Settings, notification_sink: NotificationSink = sink) -> TestClient:
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_notification_sink] = lambda: notification_sink
        test_client = TestClient(app)
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.close()
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, settings: Settings) -> TestClient:
    """Test client with signature verification enabled."""
    return make_client(settings)


@pytest.fixture
def insecure_client(make_client) -> TestClient:
    """Test client without a webhook secret."""
    return make_client(make_settings(levanta_webhook_secret=None))


@pytest.fixture
def product_added_event() -> dict:
    """Sample product.added event."""
    return {
        "type": "product.added",
        "id": "evt_1",
        "created": 1700000000000,
        "data": {
            "asin": "B000123",
            "marketplace": "US",
            "commission": 0.05,
            "pricing": {
                "currency": "USD",
                "price": 19.99
            }
        }
    }


@pytest.fixture
def product_added_body(product_added_event: dict) -> bytes:
    """Serialized product.added event, exactly as it is signed."""
    return json.dumps(product_added_event, separators=(",", ":")).encode()
