from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from choseong_finder.database import async_session, engine
from choseong_finder.models.base import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting choseong-finder")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")

    from choseong_finder.scheduler.jobs import register_jobs
    from choseong_finder.scheduler.scheduler import start_scheduler
    from choseong_finder.scheduler.timers import APSchedulerTimers
    from choseong_finder.services.history_store import HistoryStore
    from choseong_finder.services.sheet_source import DatasetUnavailableError, SheetSource
    from choseong_finder.session.search_session import SearchSession

    scheduler = start_scheduler()
    source = SheetSource()
    search_session = SearchSession(APSchedulerTimers(scheduler), HistoryStore(async_session))
    await search_session.open()
    try:
        await search_session.reload(source)
    except DatasetUnavailableError:
        logger.warning("초기 데이터 로딩 실패, 빈 데이터셋으로 시작")
    register_jobs(scheduler, search_session, source)

    app.state.search_session = search_session
    app.state.sheet_source = source

    yield

    # Shutdown
    await search_session.close()
    if scheduler.running:
        scheduler.shutdown(wait=False)
    await engine.dispose()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Choseong Finder",
        version="0.1.0",
        lifespan=lifespan,
    )

    from choseong_finder.api.router import api_router
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
