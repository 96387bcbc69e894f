"""정답 등록 보조 — 중복 확인, 입력 검증, 카테고리 추천.

등록 요청 자체의 전송은 외부 중계 서비스가 담당한다.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from itertools import islice

from choseong_finder.config import settings
from choseong_finder.services.dataset import Dataset

logger = logging.getLogger(__name__)

_KOREAN_NAME = re.compile(r"^[가-힣\s]+$")
_MAX_NAME_LENGTH = 200


def _most_common(counts: Counter[str]) -> str | None:
    # 동률이면 나중에 집계된 카테고리
    best: str | None = None
    for category, count in counts.items():
        if best is None or count >= counts[best]:
            best = category
    return best


class RegistrationService:

    def __init__(self, dataset: Dataset, sample_limit: int = settings.category_sample_limit):
        self.dataset = dataset
        self.sample_limit = sample_limit

    def is_duplicate(self, name: str) -> bool:
        return self.dataset.find_by_name(name.strip()) is not None

    def suggest_category(self, query: str) -> str | None:
        """현재 검색어로 가장 관련 있는 카테고리를 추천한다.

        1. 이름이 정확히 일치하는 항목의 카테고리
        2. 초성이 검색어를 포함하는 앞쪽 sample_limit개 항목 중 최다 카테고리
        3. 전체 데이터셋의 최다 카테고리
        """
        query = query.strip()
        if query:
            exact = self.dataset.find_by_name(query)
            if exact is not None:
                return exact.category

            sample = islice((e for e in self.dataset if query in e.choseong), self.sample_limit)
            counts = Counter(e.category for e in sample)
            if counts:
                return _most_common(counts)

        return _most_common(self.dataset.category_counts())

    def validate(self, name: str, category: str | None) -> str | None:
        """등록 입력을 검증한다. 문제가 없으면 None, 있으면 사유를 반환한다."""
        name = name.strip()
        if not name:
            return "이름을 입력해주세요."
        if not category:
            return "카테고리를 선택해주세요."
        if not self.dataset.has_category(category):
            return "알 수 없는 카테고리입니다."
        if not _KOREAN_NAME.match(name):
            return "한글만 입력 가능합니다."
        if len(name) > _MAX_NAME_LENGTH:
            return f"이름은 최대 {_MAX_NAME_LENGTH}자까지 입력 가능합니다."
        if self.is_duplicate(name):
            return "이미 등록된 항목입니다."
        return None
