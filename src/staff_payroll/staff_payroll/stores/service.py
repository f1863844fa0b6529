from __future__ import annotations

import logging
from typing import Sequence

from ..core.exceptions import AuthorizationError, NotFound
from ..users.access import require_store_manager
from ..users.model import Staff, SuperAdmin, User
from ..users.repository import UserRepository
from .model import Store
from .repository import StoreRepository

logger = logging.getLogger(__name__)


class StoreService:
    def __init__(self, stores: StoreRepository, users: UserRepository):
        self._stores = stores
        self._users = users

    def get(self, store_id: int) -> Store:
        store = self._stores.get_store(int(store_id))
        if not store:
            raise NotFound(f"Store {store_id} does not exist")
        return store

    def list_staff(self, actor: User, store_id: int) -> Sequence[Staff]:
        require_store_manager(actor, store_id)
        store = self.get(store_id)
        items = list(self._users.list_staff_for_store(store.store_id))
        items.sort(key=lambda s: s.name)
        return items

    def set_attendance_frozen(self, actor: User, store_id: int, *, frozen: bool) -> Store:
        """Freeze/unfreeze attendance; only the super admin may do this."""
        if not isinstance(actor, SuperAdmin):
            raise AuthorizationError("Only the super admin can freeze attendance")
        store = self.get(store_id)
        self._stores.set_attendance_frozen(store.store_id, frozen=bool(frozen))
        logger.info("Store %s attendance_frozen=%s by user %s", store.store_id, frozen, actor.user_id)
        return self.get(store_id)
