from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from choseong_finder.api.deps import get_search_session
from choseong_finder.config import ALL_CATEGORIES
from choseong_finder.hangul_util import transcode
from choseong_finder.schemas.search import EntryResponse, SearchResponse
from choseong_finder.services.search_engine import SearchOutcome, describe_outcome
from choseong_finder.session.search_session import SearchSession

router = APIRouter(tags=["search"])


def to_search_response(outcome: SearchOutcome) -> SearchResponse:
    described = describe_outcome(outcome)
    return SearchResponse(
        query=outcome.query,
        results=[
            EntryResponse(category=e.category, tags=list(e.tags), name=e.name, choseong=e.choseong)
            for e in outcome.results
        ],
        total_matched=None if outcome.is_blank else outcome.total_matched,
        shown=len(outcome.results),
        cap=outcome.cap,
        state=described.state,
        message=described.message,
    )


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="초성 검색",
    description="검색어를 초성으로 변환한 뒤 카테고리·태그·초성 부분일치 순으로 필터링합니다. "
                "세션 상태(입력창, 히스토리)는 바뀌지 않습니다. 최대 표시 개수를 넘으면 "
                "total_matched에 실제 매칭 수가 담깁니다.",
)
async def search(
    q: str = "",
    category: str = ALL_CATEGORIES,
    tags: list[str] = Query(default=[]),
    search_session: SearchSession = Depends(get_search_session),
):
    outcome = search_session.engine.search(
        search_session.dataset, transcode(q), category, tags
    )
    return to_search_response(outcome)


@router.get(
    "/results",
    response_model=SearchResponse,
    summary="현재 세션 검색 결과",
    description="입력 이벤트로 실행된 마지막 검색 결과를 반환합니다.",
)
async def latest_results(search_session: SearchSession = Depends(get_search_session)):
    return to_search_response(search_session.last_outcome)
