from choseong_finder.models.kv_slot import KeyValueSlot
from choseong_finder.models.base import Base

__all__ = [
    "Base",
    "KeyValueSlot",
]
