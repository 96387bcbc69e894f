from __future__ import annotations

from fastapi import APIRouter, Depends

from choseong_finder.api.deps import get_search_session
from choseong_finder.session.search_session import SearchSession

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    summary="헬스 체크",
    description="서버 구동 상태와 현재 로드된 데이터셋 항목 수를 반환합니다.",
)
async def health(search_session: SearchSession = Depends(get_search_session)):
    return {
        "status": "ok",
        "entries": len(search_session.dataset),
        "version": "0.1.0",
    }
