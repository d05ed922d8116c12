"""Tests for the in-process poll scheduler."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from alerts_api.scheduler import PollScheduler
from stream_monitor.tasks import CronTask


class TestPollScheduler:
    """Test PollScheduler."""

    def test_tasks_survive_restart(self, services, state_store):
        """Test registered tasks are reloaded by a new scheduler."""
        services.scheduler.schedule_task(CronTask.for_creator("alice", "*/5 * * * *"))
        services.scheduler.schedule_task(CronTask.for_creator("bob", "*/5 * * * *"))

        restarted = PollScheduler(services.registry, state_store, interval_seconds=1)

        assert restarted.load() == 2
        assert [t.id for t in restarted.query()] == ["alice", "bob"]

    @pytest.mark.asyncio
    async def test_tick_polls_every_task(self, services, platform):
        """Test one tick dispatches each registered task."""
        services.scheduler.schedule_task(CronTask.for_creator("alice", "*/5 * * * *"))
        services.scheduler.schedule_task(CronTask.for_creator("bob", "*/5 * * * *"))

        outcomes = await services.scheduler.tick()

        assert outcomes == {"alice": "offline", "bob": "offline"}
        assert platform.get_live_status.await_count == 2

    @pytest.mark.asyncio
    async def test_tick_without_tasks(self, services):
        """Test an empty schedule is a no-op."""
        assert await services.scheduler.tick() == {}

    @pytest.mark.asyncio
    async def test_loop_runs_until_stopped(self, state_store):
        """Test the background loop polls repeatedly and stops cleanly."""
        registry = MagicMock()
        registry.poll = AsyncMock(return_value="offline")
        scheduler = PollScheduler(registry, state_store, interval_seconds=0.01)
        scheduler.schedule_task(CronTask.for_creator("alice", "*/5 * * * *"))

        scheduler.start()
        await asyncio.sleep(0.05)
        await scheduler.stop()

        assert registry.poll.await_count >= 2
        calls = registry.poll.await_count
        await asyncio.sleep(0.03)
        assert registry.poll.await_count == calls

    @pytest.mark.asyncio
    async def test_loop_survives_errors(self, state_store):
        """Test a failing tick does not end the loop."""
        registry = MagicMock()
        calls = []

        async def flaky_poll(task):
            calls.append(task.id)
            if len(calls) == 1:
                raise RuntimeError("boom")
            return "offline"

        registry.poll = AsyncMock(side_effect=flaky_poll)
        scheduler = PollScheduler(registry, state_store, interval_seconds=0.01)
        scheduler.schedule_task(CronTask.for_creator("alice", "*/5 * * * *"))

        scheduler.start()
        await asyncio.sleep(0.05)
        await scheduler.stop()

        assert registry.poll.await_count >= 2
