from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from choseong_finder.config import settings

logger = logging.getLogger(__name__)

_scheduler: AsyncIOScheduler | None = None


def get_scheduler() -> AsyncIOScheduler:
    global _scheduler
    if _scheduler is None:
        _scheduler = AsyncIOScheduler(timezone=settings.scheduler_timezone)
    return _scheduler


def start_scheduler() -> AsyncIOScheduler:
    scheduler = get_scheduler()
    scheduler.start()
    logger.info("Scheduler started")
    return scheduler
