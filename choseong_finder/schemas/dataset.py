from __future__ import annotations

from pydantic import BaseModel


class DatasetReloadResponse(BaseModel):
    entries: int
    categories: list[str]
    category: str
    tags: list[str]
    tag_filter_visible: bool
