import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staff_payroll"),
}

# "mysql" or "memory"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql").lower()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Business rules (tenant defaults, stores may override)
GRACE_PERIOD_MINUTES = int(os.getenv("GRACE_PERIOD_MINUTES", "15"))
MAX_LEAVES_PER_MONTH = int(os.getenv("MAX_LEAVES_PER_MONTH", "2"))
PERFECT_ATTENDANCE_BONUS = int(os.getenv("PERFECT_ATTENDANCE_BONUS", "500"))
LATE_FINE_AMOUNT = int(os.getenv("LATE_FINE_AMOUNT", "200"))
DEFAULT_LOCATION_RADIUS_METERS = float(os.getenv("DEFAULT_LOCATION_RADIUS_METERS", "100"))
DEFAULT_SHIFT_START = os.getenv("DEFAULT_SHIFT_START", "09:00")
