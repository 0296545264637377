import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "youth_ministry"),
}

DEBUG = True

# Absence alerts
ABSENCE_ALERT_WEEKS = int(os.getenv("ABSENCE_ALERT_WEEKS", "2"))
ABSENCE_CEILING_WEEKS = int(os.getenv("ABSENCE_CEILING_WEEKS", "6"))
LATE_COUNTS_AS_PRESENT = bool(int(os.getenv("LATE_COUNTS_AS_PRESENT", "1")))
# Optional lower bound on attendance reads; must be >= ABSENCE_CEILING_WEEKS * 7.
ABSENCE_LOOKBACK_DAYS = int(os.getenv("ABSENCE_LOOKBACK_DAYS", "0")) or None
ALERT_CACHE_ENABLED = bool(int(os.getenv("ALERT_CACHE_ENABLED", "1")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
