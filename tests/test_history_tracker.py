"""HistoryTracker 테스트: 체류 시간, 실시간 재확인, 중복 방지, 용량 제한."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from choseong_finder.schemas.history import HistoryEntry
from choseong_finder.services.history_tracker import HistoryLog, HistoryTracker


class LiveBuffer:
    def __init__(self, value: str = ""):
        self.value = value

    def __call__(self) -> str:
        return self.value


def _tracker(timers, buffer, persist=None, log=None):
    return HistoryTracker(timers, live_query=buffer, log=log, persist=persist, dwell_ms=1500)


@pytest.mark.asyncio
async def test_stable_query_commits_once(timers):
    buffer = LiveBuffer("ㄷㅈ")
    persist = AsyncMock()
    tracker = _tracker(timers, buffer, persist)

    tracker.observe("ㄷㅈ")
    await timers.advance(2000)

    assert [h.query for h in tracker.log.entries] == ["ㄷㅈ"]
    assert tracker.log.entries[0].timestamp == timers.now_ms() - 500
    persist.assert_awaited_once()

    # 같은 세션에서 다시 입력해도 최근 10개 안에 있으므로 추가되지 않음
    tracker.observe("ㄷㅈ")
    await timers.advance(2000)
    assert len(tracker.log) == 1
    persist.assert_awaited_once()


@pytest.mark.asyncio
async def test_change_before_dwell_does_not_commit(timers):
    buffer = LiveBuffer("ㄱ")
    tracker = _tracker(timers, buffer)

    tracker.observe("ㄱ")
    await timers.advance(1499)
    buffer.value = "ㄱㅇ"
    tracker.observe("ㄱㅇ")
    await timers.advance(1)

    assert len(tracker.log) == 0
    assert tracker.candidate_query == "ㄱㅇ"

    await timers.advance(1499)
    assert [h.query for h in tracker.log.entries] == ["ㄱㅇ"]


@pytest.mark.asyncio
async def test_same_query_does_not_restart_timer(timers):
    buffer = LiveBuffer("ㄱㅇ")
    tracker = _tracker(timers, buffer)

    tracker.observe("ㄱㅇ")
    await timers.advance(1000)
    tracker.observe("ㄱㅇ")
    await timers.advance(500)

    assert [h.query for h in tracker.log.entries] == ["ㄱㅇ"]


@pytest.mark.asyncio
async def test_changing_back_resets_dwell_window(timers):
    buffer = LiveBuffer("ㄱ")
    tracker = _tracker(timers, buffer)

    tracker.observe("ㄱ")
    await timers.advance(1000)
    buffer.value = "ㄴ"
    tracker.observe("ㄴ")
    await timers.advance(100)
    buffer.value = "ㄱ"
    tracker.observe("ㄱ")

    # 취소된 타이머를 이어서 쓰지 않는다
    await timers.advance(1400)
    assert len(tracker.log) == 0
    await timers.advance(100)
    assert [h.query for h in tracker.log.entries] == ["ㄱ"]


@pytest.mark.asyncio
async def test_live_buffer_recheck_blocks_stale_commit(timers):
    buffer = LiveBuffer("ㄱㅇ")
    tracker = _tracker(timers, buffer)

    tracker.observe("ㄱㅇ")
    # 검색이 다시 실행되지 않은 채 입력창만 바뀐 경우
    buffer.value = "ㄱㅇㅈ"
    await timers.advance(1500)

    assert len(tracker.log) == 0
    assert not tracker.pending


@pytest.mark.asyncio
async def test_blank_query_cancels_timer(timers):
    buffer = LiveBuffer("ㄱ")
    tracker = _tracker(timers, buffer)

    tracker.observe("ㄱ")
    tracker.observe("  ")
    assert not tracker.pending
    assert tracker.dwell_start is None
    await timers.advance(5000)
    assert len(tracker.log) == 0


@pytest.mark.asyncio
async def test_at_most_one_dwell_timer(timers):
    buffer = LiveBuffer("ㄱ")
    tracker = _tracker(timers, buffer)
    for q in ("ㄱ", "ㄱㄴ", "ㄱㄴㄷ", "ㄱㄴ"):
        buffer.value = q
        tracker.observe(q)
    assert len(timers.pending("history-dwell")) == 1


def test_log_capacity_and_recent_dedup():
    log = HistoryLog(limit=20, dedup_window=10)
    for i in range(25):
        assert log.add(f"q{i}", i)
    assert len(log) == 20
    assert log.entries[0].query == "q24"
    assert log.entries[-1].query == "q5"

    # 최근 10개 안의 중복은 거부, 그보다 오래된 중복은 허용
    assert not log.add("q20", 100)
    assert log.add("q10", 101)
    assert log.entries[0] == HistoryEntry(query="q10", timestamp=101)
    assert [h.query for h in log.entries].count("q10") == 2
    assert len(log) == 20


def test_log_remove_and_clear():
    log = HistoryLog([HistoryEntry(query="a", timestamp=1), HistoryEntry(query="b", timestamp=2)])
    assert log.remove(1).query == "b"
    with pytest.raises(IndexError):
        log.remove(5)
    log.clear()
    assert len(log) == 0


@pytest.mark.asyncio
async def test_remove_and_clear_persist(timers):
    persist = AsyncMock()
    log = HistoryLog([HistoryEntry(query="a", timestamp=1), HistoryEntry(query="b", timestamp=2)])
    tracker = _tracker(timers, LiveBuffer(), persist, log)

    await tracker.remove(0)
    persist.assert_awaited_with([HistoryEntry(query="b", timestamp=2)])
    await tracker.clear()
    persist.assert_awaited_with([])


def test_loaded_entries_normalized():
    loaded = [HistoryEntry(query=q, timestamp=i) for i, q in enumerate(["ㄱ", "ㄱ", "ㄴ"])]
    log = HistoryLog(limit=20, dedup_window=10)
    log.replace(loaded)
    assert [h.query for h in log.entries] == ["ㄱ", "ㄴ"]

    log.replace(HistoryEntry(query=f"q{i}", timestamp=i) for i in range(25))
    assert len(log) == 20
    assert log.get(0).query == "q0"
    with pytest.raises(IndexError):
        log.get(20)
