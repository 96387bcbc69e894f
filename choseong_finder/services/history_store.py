"""검색 히스토리 영속화 — key-value 슬롯에 JSON으로 저장한다.

이전 형식(검색어 문자열 배열)도 읽을 수 있으며, 읽은 뒤에는
현재 형식({query, timestamp} 배열)으로 다시 저장한다.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable

from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from choseong_finder.config import settings
from choseong_finder.models.kv_slot import KeyValueSlot
from choseong_finder.schemas.history import HistoryEntry
from choseong_finder.services.history_tracker import HistoryLog

logger = logging.getLogger(__name__)

_CANONICAL = TypeAdapter(list[HistoryEntry])
_LEGACY = TypeAdapter(list[str])


def _now_ms() -> int:
    return int(time.time() * 1000)


def decode_history(raw: str, now_ms: int) -> tuple[list[HistoryEntry], bool]:
    """저장된 JSON을 해석한다. (항목 목록, 이전 형식 여부)를 반환한다.

    형식이 맞지 않으면 ValueError를 던진다.
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"히스토리 형식 오류: {type(data).__name__}")
    if not data:
        return [], False
    if isinstance(data[0], str):
        queries = _LEGACY.validate_python(data)
        return [HistoryEntry(query=q, timestamp=now_ms) for q in queries], True
    return _CANONICAL.validate_python(data), False


def encode_history(entries: list[HistoryEntry]) -> str:
    return _CANONICAL.dump_json(entries).decode("utf-8")


class HistoryStore:

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        key: str = settings.history_slot_key,
        clock: Callable[[], int] = _now_ms,
        limit: int = settings.history_limit,
        dedup_window: int = settings.history_dedup_window,
    ):
        self._session_factory = session_factory
        self.key = key
        self._clock = clock
        self.limit = limit
        self.dedup_window = dedup_window

    async def load(self) -> list[HistoryEntry]:
        """히스토리를 읽는다. 개수 제한과 중복 규칙에 맞게 정리하고,
        정리된 내용이 저장본과 다르면 다시 저장한다. 해석에 실패하면 빈 목록으로 시작한다.
        """
        async with self._session_factory() as session:
            slot = await session.get(KeyValueSlot, self.key)
            raw = slot.value if slot else None

        if not raw:
            return []
        try:
            entries, legacy = decode_history(raw, self._clock())
        except ValueError:
            logger.warning("히스토리 로드 실패, 빈 목록으로 초기화 (key=%s)", self.key)
            return []

        normalized = HistoryLog(entries, self.limit, self.dedup_window).entries
        if legacy:
            logger.info("이전 형식 히스토리 %d건 변환", len(entries))
        if legacy or normalized != entries:
            await self.save(normalized)
        return normalized

    async def save(self, entries: list[HistoryEntry]) -> None:
        async with self._session_factory() as session:
            slot = await session.get(KeyValueSlot, self.key)
            if slot is None:
                slot = KeyValueSlot(key=self.key)
                session.add(slot)
            slot.value = encode_history(entries)
            await session.commit()

