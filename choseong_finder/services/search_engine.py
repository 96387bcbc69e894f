"""초성 검색 엔진 — 카테고리 → 태그 → 초성 부분일치 → 개수 제한 순으로 필터링한다."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterator
from dataclasses import dataclass, field
from itertools import islice

from choseong_finder.config import ALL_CATEGORIES, settings
from choseong_finder.schemas.common import OutcomeState
from choseong_finder.services.dataset import Dataset, Entry

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    query: str
    results: list[Entry] = field(default_factory=list)
    total_matched: int = 0
    cap: int = settings.max_results

    @classmethod
    def blank(cls, cap: int = settings.max_results) -> SearchOutcome:
        return cls(query="", cap=cap)

    @property
    def is_blank(self) -> bool:
        """검색어가 비어 있음 — '결과 0건'과 구분되는 중립 상태."""
        return not self.query

    @property
    def truncated(self) -> bool:
        return self.total_matched > len(self.results)


@dataclass
class OutcomeDescription:
    state: OutcomeState
    message: str


class SearchEngine:

    def __init__(self, max_results: int = settings.max_results):
        self.max_results = max_results

    def search(
        self,
        dataset: Dataset,
        query: str,
        category: str = ALL_CATEGORIES,
        tags: Collection[str] = (),
    ) -> SearchOutcome:
        """필터를 적용해 최대 max_results개의 결과와 실제 매칭 수를 반환한다.

        결과는 데이터셋 순서를 따른다. 개수 제한에 걸리면 제한 없이
        필터를 다시 돌려 total_matched를 계산한다.
        """
        query = (query or "").strip()
        if not query:
            return SearchOutcome.blank(self.max_results)

        selected_tags = frozenset(tags)
        results = list(
            islice(self._matches(dataset, query, category, selected_tags), self.max_results)
        )
        total = len(results)
        if total >= self.max_results:
            total = sum(1 for _ in self._matches(dataset, query, category, selected_tags))
            if total > self.max_results:
                logger.debug(
                    "검색 결과 제한: query=%r total=%d shown=%d", query, total, len(results)
                )

        return SearchOutcome(
            query=query, results=results, total_matched=total, cap=self.max_results
        )

    @staticmethod
    def _matches(
        dataset: Dataset,
        query: str,
        category: str,
        tags: frozenset[str],
    ) -> Iterator[Entry]:
        candidates: Iterator[Entry] = iter(dataset)

        # 1단계: 카테고리
        if category != ALL_CATEGORIES:
            candidates = (e for e in candidates if e.category == category)

        # 2단계: 태그 (하나라도 포함되면 통과, 태그 없는 항목은 제외)
        if tags:
            candidates = (e for e in candidates if not tags.isdisjoint(e.tags))

        # 3단계: 초성 부분일치
        return (e for e in candidates if query in e.choseong)


def describe_outcome(outcome: SearchOutcome) -> OutcomeDescription:
    """검색 결과를 화면 표시용 상태/문구로 변환한다."""
    if outcome.is_blank:
        return OutcomeDescription(OutcomeState.IDLE, "초성을 입력하면 검색 결과가 표시됩니다")
    if not outcome.results:
        return OutcomeDescription(OutcomeState.EMPTY, "검색 결과가 없습니다")
    if outcome.truncated:
        return OutcomeDescription(
            OutcomeState.TRUNCATED,
            f"총 {outcome.total_matched}개 중 {len(outcome.results)}개 표시 (최대 {outcome.cap}개)",
        )
    return OutcomeDescription(OutcomeState.RESULTS, f"총 {outcome.total_matched}개 결과")
