"""
Registry of per-creator monitors.

Gives every creator exactly one ``StreamMonitor`` and one lock. Operations on
the same creator run one at a time; different creators proceed concurrently.
"""

import asyncio
import logging
from typing import Callable, Dict, Optional, Set

from monitoring.metrics import MetricsExporter
from shared.errors import InvalidCreatorError
from state_store.store import StateStore
from stream_monitor.config import MonitorConfig
from stream_monitor.models import MonitorRecord
from stream_monitor.monitor import StreamMonitor, record_key
from stream_monitor.tasks import CronTask

logger = logging.getLogger(__name__)

MonitorFactory = Callable[[str], StreamMonitor]


class MonitorRegistry:
    """Serialized access to creator monitors."""

    def __init__(
        self,
        config: MonitorConfig,
        monitor_factory: MonitorFactory,
        state_store: StateStore,
        metrics: Optional[MetricsExporter] = None,
    ):
        """
        Initialize the registry.

        Args:
            config: Monitor configuration (allow-list)
            monitor_factory: Builds the monitor bound to a creator
            state_store: Durable record store, used to purge rejected creators
            metrics: Optional metrics exporter
        """
        self.config = config
        self.monitor_factory = monitor_factory
        self.state_store = state_store
        self.metrics = metrics
        self._monitors: Dict[str, StreamMonitor] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._purges: Set[asyncio.Task] = set()

    def _get_lock(self, creator: str) -> asyncio.Lock:
        if creator not in self._locks:
            self._locks[creator] = asyncio.Lock()
        return self._locks[creator]

    def _get_monitor(self, creator: str) -> StreamMonitor:
        if creator not in self._monitors:
            self._monitors[creator] = self.monitor_factory(creator)
        return self._monitors[creator]

    def validate_creator(self, creator: str) -> None:
        """
        Check a creator against the allow-list.

        A rejected creator has its persisted state purged in the background;
        the purge may still be running when this raises.

        Args:
            creator: Creator login

        Raises:
            InvalidCreatorError: If the creator is not allowed
        """
        if self.config.is_allowed(creator):
            return

        logger.warning(f"Rejected unknown creator {creator!r}")
        task = asyncio.create_task(self._purge(creator))
        self._purges.add(task)
        task.add_done_callback(self._purges.discard)
        raise InvalidCreatorError(f"unknown creator: {creator}")

    async def _purge(self, creator: str) -> None:
        # Rejected creators never get a monitor or a lock
        try:
            removed = self.state_store.delete_namespace(record_key(creator))
        except Exception as e:
            logger.error(f"Failed to purge state for {creator!r}: {e}")
            return
        if removed:
            logger.info(f"Purged {removed} record(s) for rejected creator {creator!r}")

    async def load(self, creator: str, refresh: bool = False) -> MonitorRecord:
        """
        Validate the creator, make sure its profile is loaded and return its record.

        Args:
            creator: Creator login
            refresh: Re-fetch the profile even if already populated

        Returns:
            Snapshot of the creator's record

        Raises:
            InvalidCreatorError: If the creator is not allowed
            NotFoundError: If the creator does not exist upstream
        """
        self.validate_creator(creator)
        async with self._get_lock(creator):
            monitor = self._get_monitor(creator)
            await monitor.ensure_profile(refresh=refresh)
            return monitor.get_state()

    async def poll(self, task: CronTask) -> str:
        """
        Run one scheduled poll.

        The callback name addresses the monitor; the payload creator must match
        the creator that monitor is bound to.

        Args:
            task: The scheduled task

        Returns:
            Poll outcome
        """
        creator = task.callback.name
        try:
            self.validate_creator(creator)
        except InvalidCreatorError:
            if self.metrics:
                self.metrics.record_poll("rejected")
            return "rejected"

        async with self._get_lock(creator):
            monitor = self._get_monitor(creator)
            return await monitor.poll_and_notify(task.payload.creator)

    async def get_state(self, creator: str) -> MonitorRecord:
        """
        Snapshot a creator's record without touching the network.

        Raises:
            InvalidCreatorError: If the creator is not allowed
        """
        self.validate_creator(creator)
        async with self._get_lock(creator):
            return self._get_monitor(creator).get_state()

    async def aclose(self) -> None:
        """Wait for background purges to finish."""
        if self._purges:
            await asyncio.gather(*self._purges, return_exceptions=True)
