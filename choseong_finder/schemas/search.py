from __future__ import annotations

from pydantic import BaseModel, Field

from choseong_finder.schemas.common import CompositionPhase, OutcomeState


class EntryResponse(BaseModel):
    category: str
    tags: list[str] = []
    name: str
    choseong: str

    model_config = {"from_attributes": True}


class SearchResponse(BaseModel):
    query: str = Field(..., description="초성으로 변환된 검색어")
    results: list[EntryResponse]
    total_matched: int | None = Field(None, description="잘리기 전 실제 매칭 수 (검색어가 없으면 null)")
    shown: int = Field(0, description="반환된 결과 수")
    cap: int = Field(..., description="최대 표시 개수")
    state: OutcomeState
    message: str


class InputEvent(BaseModel):
    value: str = ""
    phase: CompositionPhase | None = None


class InputResponse(BaseModel):
    buffer: str = Field(..., description="보정된 입력창 값 (초성/공백만 포함)")
    transliterated: str
    phase: CompositionPhase
