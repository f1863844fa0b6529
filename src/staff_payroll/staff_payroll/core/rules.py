from __future__ import annotations

from dataclasses import dataclass, replace
from types import ModuleType

from . import constants


@dataclass(frozen=True)
class PayrollRules:
    """Business values the rules engine runs on.

    Passed explicitly into services and calculators; a store may carry its
    own instance to override the tenant defaults.
    """

    grace_period_minutes: int = constants.DEFAULT_GRACE_PERIOD_MINUTES
    max_leaves_per_month: int = constants.DEFAULT_MAX_LEAVES_PER_MONTH
    perfect_attendance_bonus: int = constants.DEFAULT_PERFECT_ATTENDANCE_BONUS
    late_fine_amount: int = constants.DEFAULT_LATE_FINE_AMOUNT
    default_radius_meters: float = constants.DEFAULT_LOCATION_RADIUS_METERS
    default_shift_start: str = constants.DEFAULT_SHIFT_START

    @classmethod
    def from_settings(cls, settings: ModuleType) -> "PayrollRules":
        defaults = cls()
        return cls(
            grace_period_minutes=int(getattr(settings, "GRACE_PERIOD_MINUTES", defaults.grace_period_minutes)),
            max_leaves_per_month=int(getattr(settings, "MAX_LEAVES_PER_MONTH", defaults.max_leaves_per_month)),
            perfect_attendance_bonus=int(
                getattr(settings, "PERFECT_ATTENDANCE_BONUS", defaults.perfect_attendance_bonus)
            ),
            late_fine_amount=int(getattr(settings, "LATE_FINE_AMOUNT", defaults.late_fine_amount)),
            default_radius_meters=float(
                getattr(settings, "DEFAULT_LOCATION_RADIUS_METERS", defaults.default_radius_meters)
            ),
            default_shift_start=str(getattr(settings, "DEFAULT_SHIFT_START", defaults.default_shift_start)),
        )

    def with_overrides(self, **changes) -> "PayrollRules":
        return replace(self, **changes)
