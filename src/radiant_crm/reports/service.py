from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import end_of_day, parse_timestamp, start_of_day
from ..core.constants import ALL_CREATORS
from ..core.enums import AttendanceRangeMode, Role
from ..customers.model import CustomerData
from ..state.store import CrmStore
from ..users.model import AuthenticatedUser
from .model import AttendanceSummaryRow
from .rules import PunctualityRule, StandardPunctualityRule


def filter_customer_data(
    items: Sequence[CustomerData],
    *,
    viewer: AuthenticatedUser,
    start: Optional[date] = None,
    end: Optional[date] = None,
    created_by: str = ALL_CREATORS,
) -> list[CustomerData]:
    """Leads whose entry date lies in [start 00:00, end 23:59:59.999999], scoped by creator.

    Admins may pass a login id (or ``"all"``); everyone else only ever sees their own leads.
    """

    lower = start_of_day(start) if start else None
    upper = end_of_day(end) if end else None

    out: list[CustomerData] = []
    for item in items:
        if lower or upper:
            entered = parse_timestamp(item.date)
            if entered is None:
                continue
            if lower and entered < lower:
                continue
            if upper and entered > upper:
                continue

        if viewer.role == Role.ADMIN:
            if created_by != ALL_CREATORS and item.created_by != created_by:
                continue
        elif item.created_by != viewer.user_id:
            continue

        out.append(item)
    return out


def summarize_attendance(
    agents: Sequence[AuthenticatedUser],
    records: Sequence[AttendanceRecord],
    *,
    rule: PunctualityRule,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[AttendanceSummaryRow]:
    """Per-agent present days and late/early counts.

    ``start``/``end`` restrict records by their calendar date when given.
    """

    lower = start.isoformat() if start else None
    upper = end.isoformat() if end else None

    rows: list[AttendanceSummaryRow] = []
    for user in agents:
        mine = [
            r for r in records
            if r.user_id == user.id
            and (lower is None or r.date >= lower)
            and (upper is None or r.date <= upper)
        ]
        rows.append(
            AttendanceSummaryRow(
                staff_name=user.staff_name,
                emp_id=user.emp_id,
                salary=user.salary,
                present_days=len({r.date for r in mine}),
                late_check_ins=sum(1 for r in mine if rule.is_late_check_in(r)),
                early_check_outs=sum(1 for r in mine if rule.is_early_check_out(r)),
            )
        )
    return rows


class ReportService:
    """Read-only projections, recomputed from the store on every call."""

    def __init__(
        self,
        store: CrmStore,
        *,
        rule: Optional[PunctualityRule] = None,
        attendance_range: AttendanceRangeMode = AttendanceRangeMode.ALL_TIME,
    ):
        self._store = store
        self._rule = rule or StandardPunctualityRule()
        self._attendance_range = AttendanceRangeMode(attendance_range)

    @property
    def attendance_range(self) -> AttendanceRangeMode:
        return self._attendance_range

    def customer_report(
        self,
        *,
        viewer: AuthenticatedUser,
        start: Optional[date] = None,
        end: Optional[date] = None,
        created_by: str = ALL_CREATORS,
    ) -> list[CustomerData]:
        return filter_customer_data(
            self._store.customer_data,
            viewer=viewer,
            start=start,
            end=end,
            created_by=created_by or ALL_CREATORS,
        )

    def attendance_report(self, *, start: Optional[date] = None, end: Optional[date] = None) -> list[AttendanceSummaryRow]:
        agents = [u.public() for u in self._store.users if u.role == Role.AGENT]
        if self._attendance_range == AttendanceRangeMode.ALL_TIME:
            start = end = None
        return summarize_attendance(agents, self._store.attendance_records, rule=self._rule, start=start, end=end)
