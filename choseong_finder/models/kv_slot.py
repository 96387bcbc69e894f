from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from choseong_finder.models.base import Base, TimestampMixin


class KeyValueSlot(TimestampMixin, Base):
    """직렬화된 값을 키 단위로 보관하는 영속 슬롯 (검색 히스토리 등)"""

    __tablename__ = "kv_slots"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, default="")

    def __repr__(self) -> str:
        return f"<KeyValueSlot key={self.key!r} size={len(self.value or '')}>"
