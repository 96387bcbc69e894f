from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from choseong_finder.config import settings
from choseong_finder.services.sheet_source import DatasetUnavailableError, SheetSource
from choseong_finder.session.search_session import SearchSession

logger = logging.getLogger(__name__)


async def refresh_dataset(search_session: SearchSession, source: SheetSource) -> None:
    """시트 데이터 주기적 재로딩. 실패 시 기존 데이터 유지."""
    try:
        await search_session.reload(source)
    except DatasetUnavailableError:
        logger.warning("주기적 데이터 갱신 실패, 기존 데이터 유지")


def register_jobs(
    scheduler: AsyncIOScheduler, search_session: SearchSession, source: SheetSource
) -> None:
    if settings.dataset_refresh_minutes <= 0:
        logger.info("주기적 데이터 갱신 비활성화")
        return

    scheduler.add_job(
        refresh_dataset,
        "interval",
        minutes=settings.dataset_refresh_minutes,
        args=[search_session, source],
        id="refresh_dataset",
        replace_existing=True,
    )
    logger.info("Registered scheduled jobs")
