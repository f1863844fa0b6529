"""Constants and defaults.

Note: Business values here are only the defaults used to build
``PayrollRules``; services read the rules object, never these names.
"""

DEFAULT_GRACE_PERIOD_MINUTES = 15
DEFAULT_MAX_LEAVES_PER_MONTH = 2
DEFAULT_PERFECT_ATTENDANCE_BONUS = 500
DEFAULT_LATE_FINE_AMOUNT = 200
DEFAULT_LOCATION_RADIUS_METERS = 100
DEFAULT_SHIFT_START = "09:00"
DEFAULT_SHIFT_END = "18:00"

EARTH_RADIUS_METERS = 6_371_000
ISO_DATE_FORMAT = "%Y-%m-%d"
