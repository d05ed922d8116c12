"""Pytest fixtures for stream_monitor tests."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from prometheus_client import CollectorRegistry

from monitoring.metrics import MetricsExporter
from notifier.config import NotificationConfig
from notifier.notifier import LiveAlertBuilder
from platform_client.models import LiveStreamInfo, UserInfo
from state_store.config import StateStoreConfig
from state_store.store import StateStore
from stream_monitor.config import MonitorConfig
from stream_monitor.monitor import StreamMonitor
from stream_monitor.registry import MonitorRegistry


class FakeClock:
    """Controllable UTC clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def _stream(stream_id="123", user_login="alice"):
    return LiveStreamInfo(
        id=stream_id,
        user_id="1001",
        user_login=user_login,
        user_name=user_login.capitalize(),
        type="live",
        thumbnail_url=f"https://cdn.test/live_user_{user_login}-{{width}}x{{height}}.jpg",
    )


def _user(login="alice"):
    return UserInfo(
        id="1001",
        login=login,
        display_name=login.capitalize(),
        profile_image_url=f"https://cdn.test/{login}-profile.png",
        offline_image_url=f"https://cdn.test/{login}-offline.png",
    )


@pytest.fixture
def stream():
    """Factory for live stream entries."""
    return _stream


@pytest.fixture
def user():
    """Factory for user entries."""
    return _user


@pytest.fixture
def clock():
    """Clock frozen at a fixed instant."""
    return FakeClock(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def config():
    """Monitor configuration allowing alice and bob."""
    return MonitorConfig(allowed_creators=["alice", "bob"])


@pytest.fixture
def state_store():
    """In-memory durable record store."""
    store = StateStore(StateStoreConfig(database_url="sqlite:///:memory:"))
    store.initialize()
    yield store
    store.close()


@pytest.fixture
def metrics():
    """Metrics exporter on a private registry."""
    return MetricsExporter(registry=CollectorRegistry())


@pytest.fixture
def platform():
    """Platform client double; every creator is offline and unknown by default."""
    client = AsyncMock()
    client.get_live_status.return_value = None
    client.get_user.return_value = None
    return client


@pytest.fixture
def sink():
    """Notification sink double that always delivers."""
    return AsyncMock()


@pytest.fixture
def builder():
    """Real payload builder."""
    return LiveAlertBuilder(NotificationConfig(discord_webhook_url="https://x.test/hook"))


@pytest.fixture
def make_monitor(config, platform, sink, builder, state_store, metrics, clock):
    """Factory building a monitor bound to a creator."""

    def factory(creator_id="alice"):
        return StreamMonitor(
            creator_id,
            config,
            platform,
            sink,
            builder,
            state_store,
            metrics=metrics,
            clock=clock,
        )

    return factory


@pytest.fixture
def monitor(make_monitor):
    """Monitor bound to alice."""
    return make_monitor("alice")


@pytest.fixture
def registry(config, make_monitor, state_store, metrics):
    """Registry over the monitor factory."""
    return MonitorRegistry(config, make_monitor, state_store, metrics=metrics)
