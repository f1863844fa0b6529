from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from ..core.enums import Role, StaffStatus


@dataclass(frozen=True)
class SuperAdmin:
    """Owner of the tenant; manages every store."""

    role: ClassVar[Role] = Role.SUPER_ADMIN

    user_id: int
    name: str


@dataclass(frozen=True)
class Admin:
    """Store manager; may manage several stores."""

    role: ClassVar[Role] = Role.ADMIN

    user_id: int
    name: str
    store_ids: frozenset[int] = frozenset()


@dataclass(frozen=True)
class Staff:
    """Employee of exactly one store, paid a monthly salary."""

    role: ClassVar[Role] = Role.STAFF

    user_id: int
    name: str
    store_id: int
    monthly_salary: float
    status: StaffStatus = StaffStatus.ACTIVE


User = Union[SuperAdmin, Admin, Staff]
