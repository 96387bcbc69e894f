from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from choseong_finder.api.deps import get_search_session
from choseong_finder.api.search import to_search_response
from choseong_finder.schemas.history import HistoryResponse
from choseong_finder.schemas.search import SearchResponse
from choseong_finder.session.search_session import SearchSession

router = APIRouter(prefix="/history", tags=["history"])


def _history(search_session: SearchSession) -> HistoryResponse:
    log = search_session.history.log
    return HistoryResponse(items=log.entries, limit=log.limit)


@router.get("", response_model=HistoryResponse, summary="검색 히스토리 조회")
async def get_history(search_session: SearchSession = Depends(get_search_session)):
    return _history(search_session)


@router.delete("", response_model=HistoryResponse, summary="검색 히스토리 전체 삭제")
async def clear_history(search_session: SearchSession = Depends(get_search_session)):
    await search_session.history.clear()
    return _history(search_session)


@router.post(
    "/{index}/apply",
    response_model=SearchResponse,
    summary="히스토리 검색어 다시 검색",
    description="선택한 히스토리 검색어를 입력창에 넣고 디바운스 없이 바로 검색합니다.",
)
async def apply_history_item(
    index: int,
    search_session: SearchSession = Depends(get_search_session),
):
    try:
        outcome = search_session.apply_history(index)
    except IndexError:
        raise HTTPException(status_code=404, detail=f"히스토리 항목 없음: {index}")
    return to_search_response(outcome)


@router.delete("/{index}",response_model=HistoryResponse, summary="검색 히스토리 항목 삭제")
async def remove_history_item(
    index: int,
    search_session: SearchSession = Depends(get_search_session),
):
    try:
        await search_session.history.remove(index)
    except IndexError:
        raise HTTPException(status_code=404, detail=f"히스토리 항목 없음: {index}")
    return _history(search_session)
