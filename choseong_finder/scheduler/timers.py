"""취소 가능한 지연 작업 추상화 (디바운스/체류 타이머용).

같은 목적의 타이머를 다시 예약할 때는 반드시 이전 핸들을 먼저 취소한다.
콜백은 이벤트 루프 위에서 실행되며, awaitable을 반환하면 끝까지 기다린다.
"""

from __future__ import annotations

import inspect
import logging
import time
import uuid
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler

logger = logging.getLogger(__name__)

TimerCallback = Callable[[str], "Awaitable[None] | None"]


@dataclass(eq=False)
class TimerHandle:
    purpose: str
    token: str
    job_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class TaskScheduler(ABC):
    """schedule_after / cancel 계약을 제공하는 타이머 계층."""

    @abstractmethod
    def now_ms(self) -> int:
        """현재 시각 (epoch millis)."""

    @abstractmethod
    def schedule_after(
        self, delay_ms: int, callback: TimerCallback, token: str, purpose: str = "timer"
    ) -> TimerHandle:
        """delay_ms 후 callback(token)을 한 번 실행하도록 예약한다."""

    @abstractmethod
    def cancel(self, handle: TimerHandle | None) -> None:
        """예약을 취소한다. 이미 실행됐거나 취소된 핸들은 무시한다."""


async def fire_handle(handle: TimerHandle, callback: TimerCallback) -> None:
    if not handle.active:
        return
    handle.fired = True
    result = callback(handle.token)
    if inspect.isawaitable(result):
        await result


class APSchedulerTimers(TaskScheduler):
    """AsyncIOScheduler의 일회성 date 작업으로 타이머를 구현한다."""

    def __init__(self, scheduler: AsyncIOScheduler):
        self._scheduler = scheduler

    def now_ms(self) -> int:
        return int(time.time() * 1000)

    def schedule_after(
        self, delay_ms: int, callback: TimerCallback, token: str, purpose: str = "timer"
    ) -> TimerHandle:
        handle = TimerHandle(purpose=purpose, token=token)
        run_date = datetime.now(timezone.utc) + timedelta(milliseconds=delay_ms)
        self._scheduler.add_job(
            fire_handle,
            "date",
            run_date=run_date,
            args=[handle, callback],
            id=f"{purpose}-{handle.job_id}",
            misfire_grace_time=None,
        )
        logger.debug("타이머 예약: %s token=%r (%dms)", purpose, token, delay_ms)
        return handle

    def cancel(self, handle: TimerHandle | None) -> None:
        if handle is None or not handle.active:
            return
        handle.cancelled = True
        try:
            self._scheduler.remove_job(f"{handle.purpose}-{handle.job_id}")
        except JobLookupError:
            pass  # 이미 실행 대기열에서 빠짐
        logger.debug("타이머 취소: %s token=%r", handle.purpose, handle.token)
