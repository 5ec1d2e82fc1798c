"""
Cron Handler

Endpoints hit by the external scheduler. Every route requires
"Authorization: Bearer {CRON_SECRET}" (see verify_cron_secret).

The same jobs run outside HTTP through src.worker.job_runner.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import verify_cron_secret
from src.api.dependencies.services import (
    AssignmentServiceDep,
    IntegrationServiceDep,
    PostServiceDep,
)
from src.shared.core.logging import get_logger
from src.shared.schemas.post import ScheduledPublishResponse
from src.shared.schemas.workflow import RemindersResponse


logger = get_logger(__name__)

router = APIRouter(dependencies=[Depends(verify_cron_secret)])


@router.get("/publish-scheduled", response_model=ScheduledPublishResponse)
async def publish_scheduled(service: PostServiceDep):
    """Promote drafts whose scheduled published_at has passed."""
    result = await service.publish_scheduled_posts()
    logger.info("Cron publish-scheduled finished", published=result["published"])
    return result


@router.get("/reminders", response_model=RemindersResponse)
async def send_reminders(service: AssignmentServiceDep):
    """One digest per writer with assignments due in the next 7 days."""
    result = await service.send_deadline_reminders()
    logger.info("Cron reminders finished", sent=result["sent"], success=result["success"])
    return result


@router.get("/indexnow")
async def submit_indexnow(service: IntegrationServiceDep) -> dict:
    """
    Submit the last 24 hours of posts to IndexNow and ping the WebSub hub.

    Raises:
        500: IndexNow key not configured
        502: IndexNow rejected the submission
    """
    return await service.submit_indexnow()
