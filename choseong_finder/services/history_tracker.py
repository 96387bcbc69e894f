"""검색 히스토리 — 일정 시간 머문 검색어만 기록한다.

검색어가 바뀔 때마다 체류 타이머를 새로 시작하고, 타이머가 만료되면
그 시점의 실제 입력값을 다시 읽어 같은 검색어일 때만 기록한다.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable

from choseong_finder.config import settings
from choseong_finder.scheduler.timers import TaskScheduler, TimerHandle
from choseong_finder.schemas.history import HistoryEntry

logger = logging.getLogger(__name__)

PersistHook = Callable[[list[HistoryEntry]], Awaitable[None]]


class HistoryLog:
    """최근 순으로 정렬된 히스토리 목록 (최대 limit개)."""

    def __init__(
        self,
        entries: Iterable[HistoryEntry] = (),
        limit: int = settings.history_limit,
        dedup_window: int = settings.history_dedup_window,
    ):
        self.limit = limit
        self.dedup_window = dedup_window
        self._entries: list[HistoryEntry] = self._normalize(entries)

    def _normalize(self, entries: Iterable[HistoryEntry]) -> list[HistoryEntry]:
        # 최근 dedup_window개 안의 중복은 버리고 limit개까지만 남긴다
        kept: list[HistoryEntry] = []
        for entry in entries:
            if len(kept) >= self.limit:
                break
            if len(kept) < self.dedup_window and entry.query in (h.query for h in kept):
                continue
            kept.append(entry)
        return kept

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def recent_queries(self) -> list[str]:
        return [h.query for h in self._entries[: self.dedup_window]]

    def add(self, query: str, timestamp: int) -> bool:
        """맨 앞에 추가한다. 최근 dedup_window개 안에 같은 검색어가 있으면 무시."""
        if query in self.recent_queries():
            return False
        self._entries.insert(0, HistoryEntry(query=query, timestamp=timestamp))
        del self._entries[self.limit:]
        return True

    def get(self, index: int) -> HistoryEntry:
        self._check_index(index)
        return self._entries[index]

    def remove(self, index: int) -> HistoryEntry:
        self._check_index(index)
        return self._entries.pop(index)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._entries):
            raise IndexError(f"히스토리 인덱스 범위 초과: {index}")

    def replace(self, entries: Iterable[HistoryEntry]) -> None:
        self._entries = self._normalize(entries)

    def clear(self) -> None:
        self._entries.clear()


class HistoryTracker:

    def __init__(
        self,
        timers: TaskScheduler,
        live_query: Callable[[], str],
        log: HistoryLog | None = None,
        persist: PersistHook | None = None,
        dwell_ms: int = settings.dwell_ms,
    ):
        self._timers = timers
        self._live_query = live_query
        self._persist = persist
        self.log = log or HistoryLog()
        self.dwell_ms = dwell_ms

        self.candidate_query = ""
        self.dwell_start: int | None = None
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None and self._handle.active

    def observe(self, query: str) -> None:
        """검색이 실행될 때마다 호출된다. 빈 검색어는 체류 상태를 초기화한다."""
        query = query.strip()
        if not query:
            self.reset()
            return

        if self.pending and query == self.candidate_query:
            return

        self._timers.cancel(self._handle)
        self.candidate_query = query
        self.dwell_start = self._timers.now_ms()
        self._handle = self._timers.schedule_after(
            self.dwell_ms, self._on_dwell_elapsed, query, purpose="history-dwell"
        )

    def reset(self) -> None:
        self._timers.cancel(self._handle)
        self._handle = None
        self.candidate_query = ""
        self.dwell_start = None

    async def _on_dwell_elapsed(self, query: str) -> None:
        dwell_start = self.dwell_start
        self._handle = None
        self.candidate_query = ""
        self.dwell_start = None

        # 예약 시점이 아닌 만료 시점의 입력값으로 다시 확인
        live = self._live_query().strip()
        if dwell_start is None or not live or live != query:
            return
        if self._timers.now_ms() - dwell_start < self.dwell_ms:
            return

        if self.log.add(query, self._timers.now_ms()):
            logger.info("검색 히스토리 기록: %r", query)
            await self._save()

    async def remove(self, index: int) -> HistoryEntry:
        removed = self.log.remove(index)
        await self._save()
        return removed

    async def clear(self) -> None:
        self.log.clear()
        await self._save()

    async def _save(self) -> None:
        if self._persist is not None:
            await self._persist(self.log.entries)
