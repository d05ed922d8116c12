"""Scheduled poll task model."""

from datetime import datetime

from pydantic import BaseModel, Field

from shared.clock import utc_now

POLL_FUNCTION = "poll_and_notify"


class TaskPayload(BaseModel):
    creator: str


class TaskCallback(BaseModel):
    """Where the scheduler delivers the task."""

    type: str = "monitor"
    namespace: str = "StreamMonitor"
    name: str
    function: str = POLL_FUNCTION


class CronTask(BaseModel):
    """A recurring poll of one creator."""

    id: str
    description: str
    payload: TaskPayload
    callback: TaskCallback
    cron: str
    time: datetime = Field(default_factory=utc_now)
    type: str = "cron"

    @classmethod
    def for_creator(cls, creator: str, cron: str) -> "CronTask":
        """Build the poll task for a creator.

        Args:
            creator: Creator login
            cron: Cron expression the task is registered under

        Returns:
            CronTask whose id and callback name are the creator
        """
        return cls(
            id=creator,
            description=f"Check if twitch.tv/{creator} is live",
            payload=TaskPayload(creator=creator),
            callback=TaskCallback(name=creator),
            cron=cron,
        )
