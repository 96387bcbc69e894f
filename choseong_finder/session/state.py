from __future__ import annotations

from dataclasses import dataclass, field

from choseong_finder.config import ALL_CATEGORIES
from choseong_finder.schemas.common import CompositionPhase


@dataclass
class QueryState:
    buffer: str = ""  # 입력창 값 (보정 후)
    transliterated: str = ""
    phase: CompositionPhase = CompositionPhase.IDLE
    category: str = ALL_CATEGORIES
    tags: set[str] = field(default_factory=set)
