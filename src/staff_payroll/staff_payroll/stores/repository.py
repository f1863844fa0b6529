from __future__ import annotations

from typing import Optional, Protocol

from .model import Store


class StoreRepository(Protocol):
    def get_store(self, store_id: int) -> Optional[Store]:
        raise NotImplementedError

    def set_attendance_frozen(self, store_id: int, *, frozen: bool) -> bool:
        raise NotImplementedError
