from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from choseong_finder.api.deps import get_search_session, get_sheet_source
from choseong_finder.schemas.dataset import DatasetReloadResponse
from choseong_finder.services.sheet_source import DatasetUnavailableError, SheetSource
from choseong_finder.session.search_session import SearchSession

router = APIRouter(prefix="/dataset", tags=["dataset"])


@router.post(
    "/reload",
    response_model=DatasetReloadResponse,
    summary="데이터 새로고침",
    description="시트 데이터를 다시 불러와 데이터셋을 통째로 교체합니다. "
                "사라진 카테고리/태그 선택은 초기화되며, 실패 시 기존 데이터를 유지합니다.",
)
async def reload_dataset(
    search_session: SearchSession = Depends(get_search_session),
    source: SheetSource = Depends(get_sheet_source),
):
    try:
        await search_session.reload(source)
    except DatasetUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return DatasetReloadResponse(
        entries=len(search_session.dataset),
        categories=search_session.dataset.categories,
        category=search_session.state.category,
        tags=sorted(search_session.state.tags),
        tag_filter_visible=search_session.tag_filter_visible,
    )
