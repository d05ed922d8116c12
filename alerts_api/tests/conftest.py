"""Pytest fixtures for alerts_api tests."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry

from alerts_api.app import create_app
from alerts_api.config import ApiConfig
from alerts_api.scheduler import PollScheduler
from alerts_api.services import Services
from monitoring.metrics import MetricsExporter
from notifier.config import NotificationConfig
from notifier.notifier import LiveAlertBuilder
from platform_client.models import UserInfo
from state_store.config import StateStoreConfig
from state_store.store import StateStore
from stream_monitor.config import MonitorConfig
from stream_monitor.monitor import StreamMonitor
from stream_monitor.registry import MonitorRegistry


@pytest.fixture
def user():
    """Factory for user entries."""

    def factory(login="alice"):
        return UserInfo(
            id="1001",
            login=login,
            display_name=login.capitalize(),
            profile_image_url=f"https://cdn.test/{login}-profile.png",
            offline_image_url=f"https://cdn.test/{login}-offline.png",
        )

    return factory


@pytest.fixture
def monitor_config():
    """Monitor configuration allowing alice and bob."""
    return MonitorConfig(allowed_creators=["alice", "bob"])


@pytest.fixture
def state_store(tmp_path):
    """File-backed store so records outlive the app's shutdown."""
    store = StateStore(StateStoreConfig(database_url=f"sqlite:///{tmp_path}/alerts.db"))
    store.initialize()
    yield store
    store.close()


@pytest.fixture
def platform():
    """Platform client double; creators are offline and unknown by default."""
    client = AsyncMock()
    client.get_live_status.return_value = None
    client.get_user.return_value = None
    return client


@pytest.fixture
def sink():
    """Notification sink double."""
    return AsyncMock()


@pytest.fixture
def services(monitor_config, state_store, platform, sink):
    """Services wired around the platform and sink doubles."""
    metrics = MetricsExporter(registry=CollectorRegistry())
    builder = LiveAlertBuilder(NotificationConfig(discord_webhook_url="https://x.test/hook"))

    def make_monitor(creator):
        return StreamMonitor(
            creator, monitor_config, platform, sink, builder, state_store, metrics=metrics
        )

    registry = MonitorRegistry(monitor_config, make_monitor, state_store, metrics=metrics)
    return Services(
        api_config=ApiConfig(enable_scheduler=False, environment="testing"),
        monitor_config=monitor_config,
        state_store=state_store,
        metrics=metrics,
        registry=registry,
        scheduler=PollScheduler(registry, state_store, interval_seconds=1),
    )


@pytest.fixture
def client(services):
    """Test client running the app lifespan."""
    with TestClient(create_app(services)) as test_client:
        yield test_client
