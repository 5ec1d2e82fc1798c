"""
Scheduled Job Runner

Runs the cron jobs outside HTTP, e.g. from a system crontab or a one-off
container:

    python -m src.worker.job_runner publish_scheduled
    python -m src.worker.job_runner send_reminders
    python -m src.worker.job_runner submit_indexnow

Each job gets its own session from session_scope(): committed when the job
returns, rolled back when it raises.
"""

import argparse
import asyncio
import json
import sys
from contextlib import AbstractAsyncContextManager
from typing import Any, Callable, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import InshortException
from src.shared.core.logging import get_logger
from src.shared.db import session_scope
from src.shared.services.assignment_service import AssignmentService
from src.shared.services.integration_service import IntegrationService
from src.shared.services.post_service import PostService
from src.worker.processors.base_processor import BaseProcessor, Handler

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class CronJobProcessor(BaseProcessor):
    """
    Job processor for the scheduler jobs.

    Attributes:
        session_factory: Yields a transactional session per job
    """

    def __init__(self, session_factory: Optional[SessionFactory] = None) -> None:
        self.session_factory = session_factory or session_scope

    def handlers(self) -> Dict[str, Handler]:
        return {
            "publish_scheduled": self.handle_publish_scheduled,
            "send_reminders": self.handle_send_reminders,
            "submit_indexnow": self.handle_submit_indexnow,
        }

    async def handle_publish_scheduled(self, message: Dict[str, Any]) -> Dict[str, Any]:
        async with self.session_factory() as session:
            return await PostService(session).publish_scheduled_posts()

    async def handle_send_reminders(self, message: Dict[str, Any]) -> Dict[str, Any]:
        async with self.session_factory() as session:
            return await AssignmentService(session).send_deadline_reminders()

    async def handle_submit_indexnow(self, message: Dict[str, Any]) -> Dict[str, Any]:
        async with self.session_factory() as session:
            return await IntegrationService(session).submit_indexnow()


async def run_job(job_type: str, processor: Optional[CronJobProcessor] = None) -> Dict[str, Any]:
    processor = processor or CronJobProcessor()
    logger.info("Job started", job_type=job_type)
    try:
        result = await processor.process({"job_type": job_type})
    except Exception as e:
        logger.error("Job failed", job_type=job_type, error=str(e), exc_info=True)
        raise
    logger.info("Job finished", job_type=job_type, result=result)
    return result


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run an Inshort scheduled job")
    parser.add_argument("job", choices=CronJobProcessor().job_types, help="Job to run")
    args = parser.parse_args(argv)

    try:
        result = asyncio.run(run_job(args.job))
    except InshortException as e:
        print(json.dumps(e.to_dict(), ensure_ascii=False), file=sys.stderr)
        return 1

    print(json.dumps(result, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
