"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Persisted slot names (kept identical to the original browser storage keys).
CURRENT_USER_KEY = "currentUser"
USERS_KEY = "users"
CUSTOMER_DATA_KEY = "customerData"
ATTENDANCE_RECORDS_KEY = "attendanceRecords"

DEFAULT_LATE_CHECK_IN_AFTER = "09:00"
DEFAULT_EARLY_CHECK_OUT_BEFORE = "17:00"
DEFAULT_GEOLOCATION_TIMEOUT_MS = 10_000

MIN_LOGIN_ID_LENGTH = 4
MIN_SECRET_LENGTH = 6
MOBILE_DIGITS = 10

ALL_CREATORS = "all"
