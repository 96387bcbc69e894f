from __future__ import annotations

from pydantic import BaseModel, Field


class HistoryEntry(BaseModel):
    query: str = Field(..., description="기록된 초성 검색어")
    timestamp: int = Field(..., description="기록 시각 (epoch millis)")

    model_config = {"frozen": True}


class HistoryResponse(BaseModel):
    items: list[HistoryEntry]
    limit: int
