from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from choseong_finder.api.deps import get_search_session
from choseong_finder.schemas.filters import (
    CategorySelect,
    FilterStateResponse,
    TagCount,
    TagSelect,
)
from choseong_finder.session.search_session import SearchSession

router = APIRouter(tags=["filters"])


def filter_state(search_session: SearchSession) -> FilterStateResponse:
    return FilterStateResponse(
        categories=search_session.dataset.categories,
        category=search_session.state.category,
        tags=sorted(search_session.state.tags),
        available_tags=[
            TagCount(tag=tag, count=count) for tag, count in search_session.available_tags()
        ],
        tag_filter_visible=search_session.tag_filter_visible,
    )


@router.get("/categories", response_model=list[str], summary="카테고리 목록")
async def list_categories(search_session: SearchSession = Depends(get_search_session)):
    return search_session.dataset.categories


@router.get(
    "/filters",
    response_model=FilterStateResponse,
    summary="필터 상태 조회",
    description="선택된 카테고리·태그와 선택 카테고리의 태그별 항목 수(많은 순)를 반환합니다. "
                "카테고리가 '전체'이거나 태그가 없으면 태그 필터는 숨김 상태입니다.",
)
async def get_filters(search_session: SearchSession = Depends(get_search_session)):
    return filter_state(search_session)


@router.put("/filters/category", response_model=FilterStateResponse, summary="카테고리 선택")
async def select_category(
    req: CategorySelect,
    search_session: SearchSession = Depends(get_search_session),
):
    try:
        search_session.select_category(req.category)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"카테고리 없음: {req.category}")
    return filter_state(search_session)


@router.put("/filters/tags", response_model=FilterStateResponse, summary="태그 선택")
async def select_tags(
    req: TagSelect,
    search_session: SearchSession = Depends(get_search_session),
):
    try:
        search_session.select_tags(req.tags)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return filter_state(search_session)
