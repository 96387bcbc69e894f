"""검색 세션 — 데이터셋, 필터, 입력 컨트롤러, 히스토리, 타이머를 한곳에서 소유한다.

open()으로 히스토리를 불러오고 close()로 남은 타이머를 모두 취소한다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from choseong_finder.config import ALL_CATEGORIES, settings
from choseong_finder.scheduler.timers import TaskScheduler
from choseong_finder.services.dataset import Dataset
from choseong_finder.services.history_store import HistoryStore
from choseong_finder.services.history_tracker import HistoryLog, HistoryTracker
from choseong_finder.services.registration_service import RegistrationService
from choseong_finder.services.search_engine import SearchEngine, SearchOutcome
from choseong_finder.services.sheet_source import SheetSource
from choseong_finder.session.controller import InputSessionController
from choseong_finder.session.state import QueryState

logger = logging.getLogger(__name__)


class SearchSession:

    def __init__(
        self,
        timers: TaskScheduler,
        history_store: HistoryStore | None = None,
        dataset: Dataset | None = None,
        engine: SearchEngine | None = None,
    ):
        self.timers = timers
        self.state = QueryState()
        self.dataset = dataset or Dataset()
        self.engine = engine or SearchEngine(settings.max_results)
        self._history_store = history_store

        self.history = HistoryTracker(
            timers,
            live_query=lambda: self.state.buffer,
            log=HistoryLog(),
            persist=history_store.save if history_store else None,
            dwell_ms=settings.dwell_ms,
        )
        self.controller = InputSessionController(
            self.state,
            timers,
            on_search=self.run_search,
            debounce_ms=settings.debounce_ms,
            settle_ms=settings.composition_settle_ms,
        )
        self.last_outcome = SearchOutcome.blank(self.engine.max_results)

    async def open(self) -> None:
        if self._history_store is not None:
            self.history.log.replace(await self._history_store.load())
            logger.info("검색 히스토리 %d건 로드", len(self.history.log))

    async def close(self) -> None:
        self.controller.cancel_pending()
        self.history.reset()

    # ── 검색 ────────────────────────────────────────────────────

    def run_search(self, query: str) -> SearchOutcome:
        outcome = self.engine.search(
            self.dataset, query, self.state.category, self.state.tags
        )
        self.history.observe(outcome.query)
        self.last_outcome = outcome
        return outcome

    def rerun(self) -> SearchOutcome:
        return self.run_search(self.state.buffer)

    def apply_history(self, index: int) -> SearchOutcome:
        """히스토리 항목을 입력창에 넣고 바로 검색한다. 체류 확인도 새로 시작된다."""
        entry = self.history.log.get(index)
        self.controller.search_now(entry.query)
        return self.last_outcome

    # ── 필터 ────────────────────────────────────────────────────

    def available_tags(self) -> list[tuple[str, int]]:
        if self.state.category == ALL_CATEGORIES:
            return []
        return self.dataset.tag_counts(self.state.category)

    @property
    def tag_filter_visible(self) -> bool:
        return bool(self.available_tags())

    def select_category(self, category: str) -> SearchOutcome:
        """카테고리를 바꾸면 선택된 태그는 초기화된다."""
        if category != ALL_CATEGORIES and not self.dataset.has_category(category):
            raise KeyError(category)
        self.state.category = category
        self.state.tags = set()
        return self.rerun()

    def select_tags(self, tags: Iterable[str]) -> SearchOutcome:
        selected = set(tags)
        known = {tag for tag, _ in self.available_tags()}
        unknown = selected - known
        if unknown:
            raise ValueError(f"선택할 수 없는 태그: {sorted(unknown)}")
        self.state.tags = selected
        return self.rerun()

    # ── 데이터셋 ────────────────────────────────────────────────

    def replace_dataset(self, dataset: Dataset) -> SearchOutcome:
        """데이터셋을 통째로 교체하고 필터를 새 데이터에 맞춘다."""
        previous = len(self.dataset)
        self.dataset = dataset

        if self.state.category != ALL_CATEGORIES and not dataset.has_category(self.state.category):
            logger.info("선택 카테고리 사라짐: %s -> 전체", self.state.category)
            self.state.category = ALL_CATEGORIES

        known = {tag for tag, _ in self.available_tags()}
        if not self.state.tags <= known:
            logger.info("선택 태그 초기화: %s", sorted(self.state.tags - known))
            self.state.tags = set()

        logger.info("데이터셋 교체: %d건 (이전 %d건)", len(dataset), previous)
        return self.rerun()

    async def reload(self, source: SheetSource) -> SearchOutcome:
        """시트에서 다시 불러온다. 실패하면 기존 데이터셋을 유지한 채 예외를 전달한다."""
        records = await source.fetch_records()
        return self.replace_dataset(Dataset.from_records(records))

    def registration(self) -> RegistrationService:
        return RegistrationService(self.dataset, settings.category_sample_limit)
