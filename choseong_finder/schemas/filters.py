from __future__ import annotations

from pydantic import BaseModel, Field


class TagCount(BaseModel):
    tag: str
    count: int


class CategorySelect(BaseModel):
    category: str = "all"


class TagSelect(BaseModel):
    tags: list[str] = []


class FilterStateResponse(BaseModel):
    categories: list[str] = Field(..., description="데이터셋의 전체 카테고리 (정렬)")
    category: str
    tags: list[str]
    available_tags: list[TagCount] = Field([], description="선택 카테고리의 태그 (개수 많은 순)")
    tag_filter_visible: bool
