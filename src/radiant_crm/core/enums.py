from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for navigation gating."""

    ADMIN = "Admin"
    AGENT = "Agent"


class ConnectionType(str, Enum):
    HOME = "Home"
    COMMERCIAL = "Commercial"


class LeadStatus(str, Enum):
    """Outcome of a lead capture visit."""

    INTERESTED = "Interested"
    APPOINTMENT_FIXED = "Appointment Fixed"
    NOT_INTERESTED = "Not Interested"


class AttendanceRangeMode(str, Enum):
    """Whether the attendance report honours a date range."""

    ALL_TIME = "all_time"
    DATE_RANGE = "date_range"
