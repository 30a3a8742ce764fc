"""
Global pytest configuration and fixtures for all tests.
"""

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from slack_relay.config.relay_config import RelayConfigLoader
from slack_relay.controllers.notify_controller import get_relay_service
from slack_relay.main import app
from slack_relay.services.deduplicator import Deduplicator
from slack_relay.services.relay_service import RelayService
from slack_relay.services.slack_service import SlackWebhookClient
from tests.utils import RelayConfigFactory, WebhookRecorder

TEST_WINDOW_MS = 90_000


@pytest.fixture(autouse=True)
def reset_deduplicator_singleton() -> Generator[None, None, None]:
    """Reset the process-wide Deduplicator between tests."""
    Deduplicator._instance = None
    yield
    Deduplicator._instance = None


@pytest.fixture
def relay_config_path(tmp_path: Path) -> Path:
    """Path of an enabled relay configuration file."""
    return RelayConfigFactory.write_enabled(tmp_path / "slack-relay-config.json")


@pytest.fixture
def webhook() -> WebhookRecorder:
    """Fake Slack webhook answering 200 ok."""
    return WebhookRecorder()


@pytest.fixture
def deduplicator() -> Deduplicator:
    return Deduplicator(TEST_WINDOW_MS)


@pytest.fixture
def relay_service(
    relay_config_path: Path,
    deduplicator: Deduplicator,
    webhook: WebhookRecorder
) -> RelayService:
    """RelayService wired to a temp config file and the fake webhook."""
    return RelayService(
        config_loader=RelayConfigLoader(relay_config_path),
        deduplicator=deduplicator,
        webhook_client=SlackWebhookClient(webhook.client()),
    )


@pytest.fixture
def client(relay_service: RelayService) -> Generator[TestClient, None, None]:
    """Test client with the relay service injected (lifespan not run)."""
    app.dependency_overrides[get_relay_service] = lambda: relay_service
    yield TestClient(app)
    app.dependency_overrides.clear()
