SECRET_KEY = "test-secret"

STORAGE_BACKEND = "memory"
DATA_DIR = ""

SEED_DEMO_USERS = True

ATTENDANCE_REPORT_RANGE = "all_time"
LATE_CHECK_IN_AFTER = "09:00"
EARLY_CHECK_OUT_BEFORE = "17:00"

GEOLOCATION_TIMEOUT_MS = 10000

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
