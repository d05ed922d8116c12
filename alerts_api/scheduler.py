"""
In-process poll scheduler.

Keeps the registered cron tasks in the durable store and, on a fixed interval,
hands every task to the monitor registry. Cron expressions are recorded as
given; the interval comes from ``POLL_INTERVAL_SECONDS``.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from state_store.migrations import TASK_KIND
from state_store.store import StateStore
from stream_monitor.registry import MonitorRegistry
from stream_monitor.tasks import CronTask

logger = logging.getLogger(__name__)


class PollScheduler:
    """Runs registered poll tasks on an interval."""

    def __init__(self, registry: MonitorRegistry, state_store: StateStore, interval_seconds: int):
        """
        Initialize the scheduler.

        Args:
            registry: Monitor registry the tasks are dispatched to
            state_store: Durable store holding registered tasks
            interval_seconds: Seconds between ticks
        """
        self.registry = registry
        self.state_store = state_store
        self.interval_seconds = interval_seconds
        self._tasks: Dict[str, CronTask] = {}
        self._loop_task: Optional[asyncio.Task] = None

    def load(self) -> int:
        """
        Read registered tasks from the durable store.

        Returns:
            Number of tasks loaded
        """
        for key in self.state_store.keys(TASK_KIND):
            payload = self.state_store.load(key, TASK_KIND)
            if payload is None:
                continue
            task = CronTask.model_validate(payload)
            self._tasks[task.id] = task
        logger.info(f"Loaded {len(self._tasks)} scheduled task(s)")
        return len(self._tasks)

    def schedule_task(self, task: CronTask) -> CronTask:
        """
        Register or replace a task.

        Args:
            task: Task to register; an existing task with the same id is replaced

        Returns:
            The registered task
        """
        self.state_store.save(f"{TASK_KIND}:{task.id}", TASK_KIND, task.model_dump(mode="json"))
        self._tasks[task.id] = task
        logger.info(f"Task scheduled: {task.id} ({task.cron})")
        return task

    def query(self, type: Optional[str] = None) -> List[CronTask]:
        """
        List registered tasks.

        Args:
            type: Only return tasks of this type

        Returns:
            Tasks sorted by id
        """
        tasks = sorted(self._tasks.values(), key=lambda t: t.id)
        if type is not None:
            tasks = [t for t in tasks if t.type == type]
        return tasks

    async def tick(self) -> Dict[str, str]:
        """
        Dispatch every registered task once.

        Returns:
            Poll outcome per task id
        """
        tasks = self.query()
        outcomes = await asyncio.gather(*(self.registry.poll(task) for task in tasks))
        return {task.id: outcome for task, outcome in zip(tasks, outcomes)}

    async def run(self) -> None:
        """Tick forever, sleeping between ticks."""
        logger.info(f"Starting poll loop every {self.interval_seconds}s...")

        while True:
            try:
                outcomes = await self.tick()
                if outcomes:
                    logger.debug(f"Poll tick finished: {outcomes}")
                await asyncio.sleep(self.interval_seconds)

            except asyncio.CancelledError:
                logger.info("Poll loop cancelled")
                break
            except Exception as e:
                logger.error(f"Error in poll loop: {e}", exc_info=True)
                await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        """Start the poll loop in the background."""
        if self._loop_task is None:
            self._loop_task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """Cancel the poll loop and wait for it to exit."""
        if self._loop_task:
            self._loop_task.cancel()
            try:
                await self._loop_task
            except asyncio.CancelledError:
                pass
            self._loop_task = None
