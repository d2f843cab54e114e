from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..state.store import CrmStore
from ..users.model import AuthenticatedUser
from .model import AttendanceEvent, AttendanceRecord, CheckIn, CheckOut, Location


class AttendanceService:
    def __init__(self, store: CrmStore, *, clock: Callable[[], datetime] = now_local):
        self._store = store
        self._clock = clock

    def check_in(self, user: AuthenticatedUser, location: Optional[Location] = None) -> AttendanceRecord:
        return self._record(user, CheckIn(at=self._clock(), location=location))

    def check_out(self, user: AuthenticatedUser, location: Optional[Location] = None) -> AttendanceRecord:
        return self._record(user, CheckOut(at=self._clock(), location=location))

    def today_record(self, user: AuthenticatedUser) -> Optional[AttendanceRecord]:
        return self._store.get_attendance(user.id, self._store.today())

    def _record(self, user: AuthenticatedUser, event: AttendanceEvent) -> AttendanceRecord:
        return self._store.add_attendance(
            user_id=user.id,
            emp_id=user.emp_id,
            staff_name=user.staff_name,
            event=event,
        )
