from __future__ import annotations

from pydantic import BaseModel


class RegisterCheckResponse(BaseModel):
    name: str
    category: str | None = None
    valid: bool
    duplicate: bool
    reason: str | None = None


class CategorySuggestionResponse(BaseModel):
    query: str
    category: str | None = None
