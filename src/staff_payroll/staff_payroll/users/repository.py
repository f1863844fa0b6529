from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Staff, User


class UserRepository(Protocol):
    """Read side of the user directory.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def list_staff_for_store(self, store_id: int) -> Sequence[Staff]:
        raise NotImplementedError
