"""초성 검색 대상 데이터셋.

항목은 로딩 시점에 초성 투영이 계산되며 이후 변경되지 않는다.
데이터셋은 새로 고침될 때 통째로 교체된다.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from choseong_finder.hangul_util import transcode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    category: str
    name: str
    tags: tuple[str, ...] = ()
    choseong: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "choseong", transcode(self.name))


class Dataset:
    """Entry의 순서 있는 모음과 그로부터 파생된 카테고리/태그 집계."""

    def __init__(self, entries: Iterable[Entry] = ()):
        self._entries: tuple[Entry, ...] = tuple(entries)
        self._category_counts = Counter(e.category for e in self._entries)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> Dataset:
        """원시 레코드에서 데이터셋을 만든다. category/name이 없는 레코드는 건너뛴다."""
        entries: list[Entry] = []
        skipped = 0
        for idx, record in enumerate(records):
            category = (record.get("category") or "").strip()
            name = (record.get("name") or "").strip()
            if not category or not name:
                logger.warning("데이터 레코드 건너뜀 (#%d): %r", idx, dict(record))
                skipped += 1
                continue
            tags = tuple(t.strip() for t in record.get("tags") or () if t and t.strip())
            entries.append(Entry(category=category, name=name, tags=tags))

        logger.info("데이터셋 로드: %d건 (건너뜀 %d건)", len(entries), skipped)
        return cls(entries)

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    @property
    def categories(self) -> list[str]:
        return sorted(self._category_counts)

    def has_category(self, category: str) -> bool:
        return category in self._category_counts

    def category_counts(self) -> Counter[str]:
        """카테고리별 항목 수 (처음 등장한 순서 유지)."""
        return Counter(self._category_counts)

    def tag_counts(self, category: str) -> list[tuple[str, int]]:
        """카테고리 내 태그별 항목 수를 많은 순으로 반환한다 (동률은 등장 순)."""
        counts: Counter[str] = Counter()
        for entry in self._entries:
            if entry.category == category:
                counts.update(entry.tags)
        return sorted(counts.items(), key=lambda kv: -kv[1])

    def find_by_name(self, name: str) -> Entry | None:
        return next((e for e in self._entries if e.name == name), None)
