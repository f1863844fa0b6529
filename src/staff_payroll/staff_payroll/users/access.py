from __future__ import annotations

from ..core.exceptions import AuthorizationError, NotFound
from .model import Admin, Staff, SuperAdmin, User
from .repository import UserRepository


def can_manage_store(actor: User, store_id: int) -> bool:
    if isinstance(actor, SuperAdmin):
        return True
    if isinstance(actor, Admin):
        return int(store_id) in actor.store_ids
    return False


def require_store_manager(actor: User, store_id: int) -> None:
    if not can_manage_store(actor, store_id):
        raise AuthorizationError("You do not manage this store")


def require_staff(actor: User) -> Staff:
    if not isinstance(actor, Staff):
        raise AuthorizationError("Only staff members can do this")
    return actor


def load_staff(users: UserRepository, staff_id: int) -> Staff:
    user = users.get_by_id(int(staff_id))
    if not isinstance(user, Staff):
        raise NotFound(f"Staff member {staff_id} does not exist")
    return user


def require_self_or_manager(actor: User, staff: Staff) -> None:
    if isinstance(actor, Staff) and actor.user_id == staff.user_id:
        return
    require_store_manager(actor, staff.store_id)
