"""입력 세션 컨트롤러 — IME 조합 중에도 매 입력마다 초성 변환과 검색을 수행한다.

조합 단계(IDLE/COMPOSING)는 기록만 하며 처리 방식은 두 단계에서 같다.
검색은 변환 결과가 바뀐 경우에만 짧게 디바운스하여 실행한다.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from choseong_finder.config import settings
from choseong_finder.hangul_util import transcode
from choseong_finder.scheduler.timers import TaskScheduler, TimerHandle
from choseong_finder.schemas.common import CompositionPhase
from choseong_finder.session.state import QueryState

logger = logging.getLogger(__name__)

SearchTrigger = Callable[[str], Any]


class InputSessionController:

    def __init__(
        self,
        state: QueryState,
        timers: TaskScheduler,
        on_search: SearchTrigger,
        debounce_ms: int = settings.debounce_ms,
        settle_ms: int = settings.composition_settle_ms,
    ):
        self.state = state
        self._timers = timers
        self._on_search = on_search
        self.debounce_ms = debounce_ms
        self.settle_ms = settle_ms

        self.last_searched = ""
        self._debounce: TimerHandle | None = None
        self._settle: TimerHandle | None = None

    @property
    def search_pending(self) -> bool:
        return self._debounce is not None and self._debounce.active

    def composition_start(self) -> None:
        self.state.phase = CompositionPhase.COMPOSING
        logger.debug("compositionstart")

    def composition_end(self, value: str) -> None:
        """조합 종료 — 값이 반영될 시간을 두고 IDLE로 돌아가며 처리한다."""
        self._timers.cancel(self._settle)
        self._settle = self._timers.schedule_after(
            self.settle_ms, self._on_settled, value, purpose="composition-settle"
        )

    def _on_settled(self, value: str) -> None:
        self._settle = None
        self.state.phase = CompositionPhase.IDLE
        self.text_changed(value)

    def text_changed(self, value: str, phase: CompositionPhase | None = None) -> str:
        """입력 변경을 처리하고 보정된 입력창 값을 반환한다."""
        if phase is not None:
            self.state.phase = phase
        logger.debug("input: phase=%s value=%r", self.state.phase.value, value)

        if not value:
            self.state.buffer = ""
            self.state.transliterated = ""
            self._timers.cancel(self._debounce)
            self._debounce = None
            self.last_searched = ""
            self._on_search("")
            return ""

        converted = transcode(value)
        # 입력창에는 초성과 공백만 남긴다
        self.state.buffer = converted
        self.state.transliterated = converted

        if converted != self.last_searched:
            self.last_searched = converted
            self._timers.cancel(self._debounce)
            self._debounce = self._timers.schedule_after(
                self.debounce_ms, self._on_debounced, converted, purpose="search-debounce"
            )
        return converted

    def _on_debounced(self, query: str) -> None:
        self._debounce = None
        self._on_search(query)

    def submit(self) -> None:
        """Enter — 현재 입력값으로 즉시 검색한다."""
        self.search_now(self.state.buffer)

    def search_now(self, value: str) -> None:
        """입력창을 value로 바꾸고 디바운스 없이 바로 검색한다."""
        converted = transcode(value)
        self.state.buffer = converted
        self.state.transliterated = converted
        self._timers.cancel(self._debounce)
        self._debounce = None
        self.last_searched = converted
        self._on_search(converted)

    def clear(self) -> None:
        self.text_changed("")

    def cancel_pending(self) -> None:
        self._timers.cancel(self._debounce)
        self._timers.cancel(self._settle)
        self._debounce = None
        self._settle = None
