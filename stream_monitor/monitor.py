"""
Per-creator stream monitor.

Each monitor is bound to one creator and owns that creator's durable record.
A scheduled poll moves the record between Offline and Live and sends at most
one live alert per session. Callers serialize access per creator (see
``MonitorRegistry``); the monitor itself holds no lock.
"""

import logging
import time
from datetime import datetime
from typing import Optional, Union

from monitoring.metrics import MetricsExporter
from notifier.discord import DiscordWebhookSink
from notifier.notifier import LiveAlertBuilder
from platform_client.client import PlatformClient
from shared.clock import Clock, utc_now
from shared.errors import NotFoundError
from state_store.migrations import MONITOR_KIND
from state_store.store import StateStore
from stream_monitor.config import MonitorConfig
from stream_monitor.models import CreatorProfile, Live, MonitorRecord, Offline

logger = logging.getLogger(__name__)


def record_key(creator_id: str) -> str:
    """Durable record key of a creator's monitor."""
    return f"{MONITOR_KIND}:{creator_id}"


class StreamMonitor:
    """State machine for one creator: Uninitialized, then Offline or Live."""

    def __init__(
        self,
        creator_id: str,
        config: MonitorConfig,
        platform: PlatformClient,
        sink: DiscordWebhookSink,
        builder: LiveAlertBuilder,
        state_store: StateStore,
        metrics: Optional[MetricsExporter] = None,
        clock: Clock = utc_now,
    ):
        """
        Initialize the monitor.

        Args:
            creator_id: Creator login this monitor is bound to
            config: Monitor configuration
            platform: Helix client
            sink: Live alert delivery
            builder: Live alert payload builder
            state_store: Durable record store
            metrics: Optional metrics exporter
            clock: Source of the current UTC time
        """
        self.creator_id = creator_id
        self.config = config
        self.platform = platform
        self.sink = sink
        self.builder = builder
        self.state_store = state_store
        self.metrics = metrics
        self._clock = clock
        self._key = record_key(creator_id)
        self._record: Optional[MonitorRecord] = None

    # ------------------------------------------------------------------
    # Record access
    # ------------------------------------------------------------------

    def load(self) -> MonitorRecord:
        """Return the in-memory record, reading it from the store on first use."""
        if self._record is None:
            payload = self.state_store.load(self._key, MONITOR_KIND)
            if payload is None:
                self._record = MonitorRecord.new(self.creator_id)
            else:
                self._record = MonitorRecord.from_payload(payload)
        return self._record

    def get_state(self) -> MonitorRecord:
        """Snapshot of the current record."""
        return self.load().model_copy(deep=True)

    def purge(self) -> int:
        """
        Delete all persisted state for this creator.

        Returns:
            Number of durable records removed
        """
        self._record = None
        removed = self.state_store.delete_namespace(self._key)
        logger.warning(f"Purged {removed} record(s) for creator {self.creator_id}")
        return removed

    def _save(self) -> None:
        self.state_store.save(self._key, MONITOR_KIND, self.load().to_payload())

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def ensure_profile(self, refresh: bool = False) -> CreatorProfile:
        """
        Populate the creator profile if it has not been fetched yet.

        Args:
            refresh: Re-fetch even when the profile is already populated

        Returns:
            The creator profile

        Raises:
            NotFoundError: If the creator does not exist upstream. All persisted
                state for the creator is purged first.
        """
        record = self.load()
        if record.profile.display_name and not refresh:
            return record.profile

        try:
            user = await self.platform.get_user(self.creator_id)
        except NotFoundError:
            self.purge()
            raise

        if user is None:
            self.purge()
            raise NotFoundError(f"user not found: {self.creator_id}")

        record.profile = CreatorProfile(
            creator_id=self.creator_id,
            display_name=user.display_name,
            profile_image_url=user.profile_image_url,
            offline_image_url=user.offline_image_url,
        )
        self._save()
        logger.info(f"Loaded profile for {self.creator_id} ({user.display_name})")
        return record.profile

    async def poll_and_notify(self, expected_creator: str) -> str:
        """
        Poll the creator's live status and send a live alert when due.

        Never raises: failures are logged with the creator and dropped, so a
        flaky upstream does not make the scheduler retry harder. State written
        before a failure stays written.

        Args:
            expected_creator: Creator the scheduled task was issued for

        Returns:
            Poll outcome (offline, live, notified, error or rejected)
        """
        started = time.monotonic()
        try:
            outcome = await self._poll(expected_creator)
        except Exception as e:
            logger.error(
                f"Failed to check stream status for {self.creator_id}: {e}",
                exc_info=True,
                extra={"creator": self.creator_id},
            )
            outcome = "error"

        if self.metrics:
            self.metrics.record_poll(outcome)
            self.metrics.observe_poll_duration(time.monotonic() - started)
        return outcome

    async def _poll(self, expected_creator: str) -> str:
        if not self.creator_id:
            logger.error(f"Monitor has no bound creator, refusing poll for {expected_creator!r}")
            return "rejected"

        if expected_creator != self.creator_id:
            logger.error(
                f"Poll for {expected_creator!r} reached monitor bound to {self.creator_id!r}"
            )
            return "rejected"

        record = self.load()
        stream = await self.platform.get_live_status(self.creator_id)

        if stream is None:
            previous = record.status
            if previous.is_live:
                logger.info(
                    f"{self.creator_id} went offline",
                    extra={"creator": self.creator_id, "stream_id": previous.stream_id},
                )
                record.status = Offline(last_notified_at=previous.notified_at)
            self._save()
            self._update_live_gauge(False)
            return "offline"

        notified_at = self._preserved_stamp(record.status, stream.id)
        record.status = Live(
            stream_id=stream.id,
            thumbnail_url=stream.thumbnail_url,
            notified_at=notified_at,
        )
        self._save()
        self._update_live_gauge(True)

        if notified_at is not None:
            return "live"

        logger.info(
            f"{self.creator_id} is live, sending alert",
            extra={"creator": self.creator_id, "stream_id": stream.id},
        )
        return "notified" if await self._notify(stream.id) else "live"

    def _preserved_stamp(
        self, previous: Union[Live, Offline], stream_id: str
    ) -> Optional[datetime]:
        """Decide whether an earlier alert already covers this stream."""
        if previous.is_live:
            stamp = previous.notified_at
            same_stream = previous.stream_id == stream_id
        else:
            stamp = previous.last_notified_at
            same_stream = False

        if stamp is None:
            return None

        within_cooldown = self._clock() - stamp < self.config.notify_cooldown
        if not (same_stream or within_cooldown):
            return None

        if same_stream and within_cooldown:
            reason = "both"
        elif same_stream:
            reason = "same_stream"
        else:
            reason = "cooldown"
            logger.info(
                f"New stream {stream_id} for {self.creator_id} within cooldown, not alerting",
                extra={"creator": self.creator_id, "stream_id": stream_id},
            )

        if self.metrics:
            self.metrics.record_notify_preserved(reason)
        return stamp

    async def _notify(self, stream_id: str) -> bool:
        """
        Deliver the live alert and stamp the record.

        Returns:
            True if the stamp was written

        Raises:
            NotificationDeliveryError: If delivery failed after the sink's retry
        """
        payload = self.builder.build(self.load())
        await self.sink.notify(payload)

        # The record may have been purged or moved on while the webhook ran
        record = self.load()
        status = record.status
        if not (status.is_live and status.stream_id == stream_id):
            logger.warning(
                f"Status of {self.creator_id} changed during delivery, not stamping",
                extra={"creator": self.creator_id, "stream_id": stream_id},
            )
            return False

        status.notified_at = self._clock()
        self._save()
        logger.info(
            f"Live alert sent for {self.creator_id}",
            extra={"creator": self.creator_id, "stream_id": stream_id},
        )
        return True

    def _update_live_gauge(self, live: bool) -> None:
        if self.metrics:
            self.metrics.update_creator_live(self.creator_id, live)
