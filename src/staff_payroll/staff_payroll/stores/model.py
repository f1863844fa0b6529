from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.geo import has_coordinate
from ..core.constants import DEFAULT_SHIFT_END, DEFAULT_SHIFT_START
from ..core.rules import PayrollRules


@dataclass(frozen=True)
class Holiday:
    date: date
    description: str = ""


@dataclass(frozen=True)
class Store:
    """A tenant location with its calendar, shift and geofence."""

    store_id: int
    name: str
    holidays: tuple[Holiday, ...] = ()
    default_start_time: str = DEFAULT_SHIFT_START
    default_end_time: str = DEFAULT_SHIFT_END
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_meters: Optional[float] = None
    attendance_frozen: bool = False
    rules: Optional[PayrollRules] = None

    def holiday_dates(self) -> frozenset[str]:
        return frozenset(h.date.isoformat() for h in self.holidays)

    @property
    def has_geofence(self) -> bool:
        return has_coordinate(self.latitude, self.longitude)

    def effective_rules(self, default: PayrollRules) -> PayrollRules:
        return self.rules or default
