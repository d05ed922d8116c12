"""Pytest fixtures for notifier tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from prometheus_client import CollectorRegistry

from monitoring.metrics import MetricsExporter
from notifier.config import NotificationConfig


def _webhook_response(status=200, text=""):
    """Build an ``async with session.post(...)`` context returning a mock response."""
    response = AsyncMock()
    response.status = status
    response.text.return_value = text

    context = MagicMock()
    context.__aenter__.return_value = response
    context.__aexit__.return_value = False
    return context


@pytest.fixture
def webhook_response():
    """Factory for mocked webhook responses."""
    return _webhook_response


@pytest.fixture
def config():
    """Fixture to provide a test configuration."""
    return NotificationConfig(
        discord_webhook_url="https://discord.com/api/webhooks/test",
        mention="<@1234>",
    )


@pytest.fixture
def metrics():
    """Metrics exporter on a private registry."""
    return MetricsExporter(registry=CollectorRegistry())
