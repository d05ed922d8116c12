"""Creator status and schedule routes."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from stream_monitor.page import page_meta
from stream_monitor.tasks import CronTask

from alerts_api.dependencies import get_services
from alerts_api.services import Services

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{creator}")
async def get_creator(creator: str, services: Services = Depends(get_services)) -> Dict[str, Any]:
    """Creator status page data.

    Rejects creators off the allow-list (their stored state is purged),
    loads the profile on first view and returns the record with its meta tags.

    Args:
        creator: Creator login.
        services: Application services.

    Returns:
        dict: Monitor record and page meta tags.
    """
    record = await services.registry.load(creator)
    return {
        "record": record.model_dump(mode="json"),
        "meta": page_meta(record),
    }


@router.post("/{creator}/schedule", response_model=CronTask)
async def schedule_creator(creator: str, services: Services = Depends(get_services)) -> CronTask:
    """Register the recurring poll for a creator.

    Args:
        creator: Creator login.
        services: Application services.

    Returns:
        CronTask: The registered task.

    Raises:
        HTTPException: 400 if the creator is not on the allow-list.
    """
    if not services.monitor_config.is_allowed(creator):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"unknown creator: {creator}"
        )

    task = CronTask.for_creator(creator, services.monitor_config.poll_cron)
    return services.scheduler.schedule_task(task)
