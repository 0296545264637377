import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "youth_ministry_test"),
}

DEBUG = False
TESTING = True

ABSENCE_ALERT_WEEKS = 2
ABSENCE_CEILING_WEEKS = 6
LATE_COUNTS_AS_PRESENT = True
ABSENCE_LOOKBACK_DAYS = None
ALERT_CACHE_ENABLED = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
