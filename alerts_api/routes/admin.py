"""Admin routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends

from stream_monitor.tasks import CronTask

from alerts_api.dependencies import get_services
from alerts_api.services import Services

router = APIRouter()


@router.get("/tasks", response_model=List[CronTask])
async def list_tasks(
    type: Optional[str] = "cron", services: Services = Depends(get_services)
) -> List[CronTask]:
    """List scheduled tasks.

    Args:
        type: Task type filter.
        services: Application services.

    Returns:
        list: Registered tasks.
    """
    return services.scheduler.query(type=type)
