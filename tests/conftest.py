"""테스트 공통 설정: 인메모리 SQLite 세션 팩토리, 가상 시계 타이머, 샘플 데이터셋."""

from __future__ import annotations

import inspect

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from choseong_finder.config import settings
from choseong_finder.models.base import Base
from choseong_finder.models.kv_slot import KeyValueSlot
from choseong_finder.scheduler.timers import TaskScheduler, TimerCallback, TimerHandle
from choseong_finder.services.dataset import Dataset


class VirtualTimers(TaskScheduler):
    """가상 시계 위에서 동작하는 타이머. advance()로 시간을 진행한다."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self._now = start_ms
        self._seq = 0
        self._queue: list[tuple[int, int, TimerHandle, TimerCallback]] = []

    def now_ms(self) -> int:
        return self._now

    def schedule_after(
        self, delay_ms: int, callback: TimerCallback, token: str, purpose: str = "timer"
    ) -> TimerHandle:
        handle = TimerHandle(purpose=purpose, token=token)
        self._seq += 1
        self._queue.append((self._now + delay_ms, self._seq, handle, callback))
        return handle

    def cancel(self, handle: TimerHandle | None) -> None:
        if handle is None or not handle.active:
            return
        handle.cancelled = True
        self._queue = [item for item in self._queue if item[2] is not handle]

    def pending(self, purpose: str | None = None) -> list[TimerHandle]:
        return [
            h for _, _, h, _ in self._queue
            if h.active and (purpose is None or h.purpose == purpose)
        ]

    async def advance(self, ms: int) -> None:
        target = self._now + ms
        while True:
            due = [item for item in self._queue if item[0] <= target]
            if not due:
                break
            item = min(due, key=lambda i: (i[0], i[1]))
            self._queue.remove(item)
            run_at, _, handle, callback = item
            self._now = run_at
            if not handle.active:
                continue
            handle.fired = True
            result = callback(handle.token)
            if inspect.isawaitable(result):
                await result
        self._now = target


@pytest.fixture
def timers() -> VirtualTimers:
    return VirtualTimers()


@pytest.fixture
async def session_factory():
    """각 테스트마다 독립적인 인메모리 DB 세션 팩토리 제공."""
    engine = create_async_engine("sqlite+aiosqlite://", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def dataset() -> Dataset:
    """동물/음식/식물 카테고리와 태그가 섞인 기본 데이터셋."""
    return Dataset.from_records([
        {"category": "animal", "tags": ["mammal"], "name": "고양이"},
        {"category": "animal", "tags": ["mammal", "pet"], "name": "강아지"},
        {"category": "animal", "tags": ["bird"], "name": "까치"},
        {"category": "animal", "tags": [], "name": "거북이"},
        {"category": "animal", "tags": ["mammal"], "name": "돼지"},
        {"category": "animal", "tags": ["mammal"], "name": "검은 고양이"},
        {"category": "food", "tags": ["dish"], "name": "김치찌개"},
        {"category": "food", "tags": [], "name": "돼지국밥"},
        {"category": "food", "tags": ["dish"], "name": "고기완자"},
        {"category": "animal", "tags": ["pet"], "name": "강아지 인형"},
        {"category": "plant", "tags": ["weed"], "name": "강아지풀"},
    ])


class SlotAccess:
    """히스토리 슬롯의 원본 JSON을 직접 읽고 쓴다."""

    def __init__(self, session_factory, key: str = settings.history_slot_key):
        self._session_factory = session_factory
        self.key = key

    async def read(self) -> str | None:
        async with self._session_factory() as session:
            slot = await session.get(KeyValueSlot, self.key)
            return slot.value if slot else None

    async def write(self, raw: str) -> None:
        async with self._session_factory() as session:
            slot = await session.get(KeyValueSlot, self.key)
            if slot is None:
                session.add(KeyValueSlot(key=self.key, value=raw))
            else:
                slot.value = raw
            await session.commit()


@pytest.fixture
def history_slot(session_factory) -> SlotAccess:
    return SlotAccess(session_factory)
