from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, time

from ..attendance.model import AttendanceRecord


class PunctualityRule(ABC):
    """Rule interface (Strategy Pattern for late/early decisions)."""

    @abstractmethod
    def is_late_check_in(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_early_check_out(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError


def _hour_minute(value: datetime) -> tuple[int, int]:
    return value.hour, value.minute


class StandardPunctualityRule(PunctualityRule):
    """Late when check-in is after ``late_after``, early when check-out is before ``early_before``.

    Only the local hour/minute is compared, so 09:00:45 is not late against 09:00.
    """

    def __init__(self, *, late_after: time = time(9, 0), early_before: time = time(17, 0)):
        self._late_after = (late_after.hour, late_after.minute)
        self._early_before = (early_before.hour, early_before.minute)

    def is_late_check_in(self, record: AttendanceRecord) -> bool:
        if not record.check_in_time:
            return False
        return _hour_minute(record.check_in_time) > self._late_after

    def is_early_check_out(self, record: AttendanceRecord) -> bool:
        if not record.check_out_time:
            return False
        return _hour_minute(record.check_out_time) < self._early_before
