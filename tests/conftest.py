from __future__ import annotations

from datetime import date, datetime

import pytest

from staff_payroll.attendance.model import GeoPoint
from staff_payroll.container import build_memory_container
from staff_payroll.database.memory import MemoryDatabase
from staff_payroll.stores.model import Holiday, Store
from staff_payroll.users.model import Admin, Staff, SuperAdmin

STORE_LOCATION = GeoPoint(lat=12.9716, lng=77.5946)
FAR_AWAY = GeoPoint(lat=13.0, lng=77.6)


@pytest.fixture
def fixed_now():
    return datetime(2026, 1, 15, 9, 10, 0)


@pytest.fixture
def store():
    return Store(
        store_id=1,
        name="MG Road",
        holidays=(Holiday(date(2026, 1, 26), "Republic Day"),),
        latitude=STORE_LOCATION.lat,
        longitude=STORE_LOCATION.lng,
        radius_meters=100,
    )


@pytest.fixture
def open_store():
    # No coordinates: check-in is accepted from anywhere.
    return Store(store_id=2, name="Indiranagar")


@pytest.fixture
def super_admin():
    return SuperAdmin(user_id=1, name="Owner")


@pytest.fixture
def admin(store):
    return Admin(user_id=2, name="Manager", store_ids=frozenset({store.store_id}))


@pytest.fixture
def other_admin(open_store):
    return Admin(user_id=3, name="Other Manager", store_ids=frozenset({open_store.store_id}))


@pytest.fixture
def staff(store):
    return Staff(user_id=10, name="Ravi", store_id=store.store_id, monthly_salary=15000)


@pytest.fixture
def remote_staff(open_store):
    return Staff(user_id=11, name="Priya", store_id=open_store.store_id, monthly_salary=12000)


@pytest.fixture
def db(store, open_store, super_admin, admin, other_admin, staff, remote_staff):
    db = MemoryDatabase()
    db.add_store(store)
    db.add_store(open_store)
    for user in (super_admin, admin, other_admin, staff, remote_staff):
        db.add_user(user)
    return db


@pytest.fixture
def container(db):
    return build_memory_container(db=db)


@pytest.fixture
def store_location():
    return STORE_LOCATION


@pytest.fixture
def far_away():
    return FAR_AWAY
