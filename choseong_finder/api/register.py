from __future__ import annotations

from fastapi import APIRouter, Depends

from choseong_finder.api.deps import get_search_session
from choseong_finder.schemas.register import CategorySuggestionResponse, RegisterCheckResponse
from choseong_finder.session.search_session import SearchSession

router = APIRouter(prefix="/register", tags=["register"])


@router.get(
    "/check",
    response_model=RegisterCheckResponse,
    summary="등록 사전 검증",
    description="이름(한글, 최대 200자)과 카테고리를 검증하고 기존 항목과의 중복 여부를 확인합니다.",
)
async def check_registration(
    name: str,
    category: str | None = None,
    search_session: SearchSession = Depends(get_search_session),
):
    svc = search_session.registration()
    reason = svc.validate(name, category)
    return RegisterCheckResponse(
        name=name.strip(),
        category=category,
        valid=reason is None,
        duplicate=svc.is_duplicate(name),
        reason=reason,
    )


@router.get(
    "/category-suggestion",
    response_model=CategorySuggestionResponse,
    summary="카테고리 추천",
    description="현재 입력값과 정확히 일치하는 항목의 카테고리, 초성 매칭 상위 100건의 최다 카테고리, "
                "전체 최다 카테고리 순으로 추천합니다.",
)
async def suggest_category(search_session: SearchSession = Depends(get_search_session)):
    query = search_session.state.buffer
    return CategorySuggestionResponse(
        query=query,
        category=search_session.registration().suggest_category(query),
    )
