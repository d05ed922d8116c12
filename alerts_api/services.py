"""Component wiring for the alerts service."""

import logging
from dataclasses import dataclass
from typing import Optional

from prometheus_client import CollectorRegistry

from credential_store.config import CredentialConfig
from credential_store.store import CredentialStore
from monitoring.metrics import MetricsExporter
from notifier.config import NotificationConfig
from notifier.discord import DiscordWebhookSink
from notifier.notifier import LiveAlertBuilder
from platform_client.client import PlatformClient
from platform_client.config import PlatformConfig
from state_store.config import StateStoreConfig
from state_store.store import StateStore
from stream_monitor.config import MonitorConfig
from stream_monitor.monitor import StreamMonitor
from stream_monitor.registry import MonitorRegistry

from alerts_api.config import ApiConfig
from alerts_api.scheduler import PollScheduler

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything the HTTP layer talks to."""

    api_config: ApiConfig
    monitor_config: MonitorConfig
    state_store: StateStore
    metrics: MetricsExporter
    registry: MonitorRegistry
    scheduler: PollScheduler
    credentials: Optional[CredentialStore] = None

    async def aclose(self) -> None:
        """Stop background work and release connections."""
        await self.scheduler.stop()
        await self.registry.aclose()
        self.state_store.close()


def build_services(registry: Optional[CollectorRegistry] = None) -> Services:
    """
    Build every component from environment configuration.

    Args:
        registry: Prometheus registry for the metrics exporter. A private
            registry is created when omitted.

    Returns:
        Wired services

    Raises:
        ValueError: If any configuration is invalid
    """
    api_config = ApiConfig.from_env()
    api_config.validate()

    monitor_config = MonitorConfig.from_env()
    monitor_config.validate()

    notification_config = NotificationConfig.from_env()
    notification_config.validate()

    store_config = StateStoreConfig.from_env()
    store_config.validate()

    metrics = MetricsExporter(registry=registry if registry is not None else CollectorRegistry())

    state_store = StateStore(store_config)
    state_store.initialize()

    credentials = CredentialStore(CredentialConfig.from_env(), state_store, metrics=metrics)
    platform = PlatformClient(PlatformConfig.from_env(), credentials)
    sink = DiscordWebhookSink(notification_config, metrics=metrics)
    builder = LiveAlertBuilder(notification_config, monitor_config.creator_url_template)

    def make_monitor(creator: str) -> StreamMonitor:
        return StreamMonitor(
            creator, monitor_config, platform, sink, builder, state_store, metrics=metrics
        )

    monitors = MonitorRegistry(monitor_config, make_monitor, state_store, metrics=metrics)
    scheduler = PollScheduler(monitors, state_store, monitor_config.poll_interval_seconds)

    logger.info(
        f"Services built for {len(monitor_config.allowed_creators)} allowed creator(s) "
        f"({api_config.environment})"
    )
    return Services(
        api_config=api_config,
        monitor_config=monitor_config,
        state_store=state_store,
        metrics=metrics,
        registry=monitors,
        scheduler=scheduler,
        credentials=credentials,
    )
