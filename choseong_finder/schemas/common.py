from __future__ import annotations

from enum import Enum


class CompositionPhase(str, Enum):
    IDLE = "IDLE"
    COMPOSING = "COMPOSING"


class OutcomeState(str, Enum):
    IDLE = "IDLE"  # 검색어 없음 (안내 문구)
    EMPTY = "EMPTY"  # 매칭 0건
    RESULTS = "RESULTS"
    TRUNCATED = "TRUNCATED"  # 최대 표시 개수 초과
