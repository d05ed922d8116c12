"""Prometheus metrics exporter for stream alert monitoring."""

import logging
from typing import Dict, Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, generate_latest

logger = logging.getLogger(__name__)

POLL_OUTCOMES = ("offline", "live", "notified", "error", "rejected")
PRESERVE_REASONS = ("same_stream", "cooldown", "both")


class MetricsExporter:
    """Prometheus metrics exporter for the stream alerts service.

    Tracks poll outcomes, notification delivery, token refreshes and the
    anti-flap decision that suppresses duplicate alerts.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """Initialize Prometheus metrics.

        Args:
            registry: Registry to register on. Defaults to the global registry.
        """
        self.registry = registry if registry is not None else REGISTRY

        # Counters
        self.polls_total = Counter(
            "stream_alerts_polls_total",
            "Total number of scheduled polls",
            ["outcome"],  # offline, live, notified, error, rejected
            registry=self.registry,
        )

        self.notifications_total = Counter(
            "stream_alerts_notifications_total",
            "Total number of live notifications attempted",
            ["result"],  # sent, failed, skipped
            registry=self.registry,
        )

        self.token_refreshes_total = Counter(
            "stream_alerts_token_refreshes_total",
            "Total number of app token endpoint calls",
            ["kind", "result"],  # kind: expired, forced; result: success, failure
            registry=self.registry,
        )

        # Which condition kept an earlier notification stamp alive
        self.notify_preserved_total = Counter(
            "stream_alerts_notify_preserved_total",
            "Polls where a previous notification stamp was preserved",
            ["reason"],  # same_stream, cooldown, both
            registry=self.registry,
        )

        # Gauges
        self.creator_live = Gauge(
            "stream_alerts_creator_live",
            "Creator live status (1=live, 0=offline)",
            ["creator"],
            registry=self.registry,
        )

        # Histograms
        self.poll_duration_seconds = Histogram(
            "stream_alerts_poll_duration_seconds",
            "Poll duration in seconds",
            buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
            registry=self.registry,
        )

        logger.info("Prometheus metrics initialized")

    def record_poll(self, outcome: str) -> None:
        """Increment the poll counter.

        Args:
            outcome: One of offline, live, notified, error, rejected
        """
        self.polls_total.labels(outcome=outcome).inc()

    def record_notification(self, result: str) -> None:
        """Record a notification attempt.

        Args:
            result: One of sent, failed, skipped
        """
        self.notifications_total.labels(result=result).inc()

    def record_token_refresh(self, kind: str, result: str) -> None:
        """Record an outbound token refresh."""
        self.token_refreshes_total.labels(kind=kind, result=result).inc()
        logger.debug(f"Token refresh recorded: kind={kind}, result={result}")

    def record_notify_preserved(self, reason: str) -> None:
        """Record which anti-flap condition preserved a notification stamp.

        Args:
            reason: One of same_stream, cooldown, both
        """
        self.notify_preserved_total.labels(reason=reason).inc()

    def update_creator_live(self, creator: str, live: bool) -> None:
        """Update the live gauge for a creator."""
        self.creator_live.labels(creator=creator).set(1 if live else 0)

    def observe_poll_duration(self, duration_seconds: float) -> None:
        """Record poll duration histogram."""
        self.poll_duration_seconds.observe(duration_seconds)

    def get_metrics(self) -> bytes:
        """Generate Prometheus metrics output.

        Returns:
            Prometheus metrics in text format
        """
        return generate_latest(self.registry)

    def get_metrics_summary(self) -> Dict:
        """Get current metrics summary as dictionary.

        Returns:
            Dictionary with current metric values
        """
        return {
            "polls": {
                outcome: self.polls_total.labels(outcome=outcome)._value.get()
                for outcome in POLL_OUTCOMES
            },
            "notifications": {
                result: self.notifications_total.labels(result=result)._value.get()
                for result in ("sent", "failed", "skipped")
            },
            "notify_preserved": {
                reason: self.notify_preserved_total.labels(reason=reason)._value.get()
                for reason in PRESERVE_REASONS
            },
        }
