import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "json" keeps one file per slot under DATA_DIR; "memory" forgets everything on exit
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
DATA_DIR = os.getenv("DATA_DIR", "instance/data")

SEED_DEMO_USERS = bool(int(os.getenv("SEED_DEMO_USERS", "1")))

# "all_time" ignores the report date range, "date_range" honours it
ATTENDANCE_REPORT_RANGE = os.getenv("ATTENDANCE_REPORT_RANGE", "all_time")
LATE_CHECK_IN_AFTER = os.getenv("LATE_CHECK_IN_AFTER", "09:00")
EARLY_CHECK_OUT_BEFORE = os.getenv("EARLY_CHECK_OUT_BEFORE", "17:00")

GEOLOCATION_TIMEOUT_MS = int(os.getenv("GEOLOCATION_TIMEOUT_MS", "10000"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
