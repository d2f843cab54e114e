from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from .attendance.service import AttendanceService
from .common.datetime_utils import now_local, parse_hhmm
from .core.constants import DEFAULT_EARLY_CHECK_OUT_BEFORE, DEFAULT_LATE_CHECK_IN_AFTER
from .core.enums import AttendanceRangeMode
from .customers.service import CustomerDataService
from .reports.rules import StandardPunctualityRule
from .reports.service import ReportService
from .state.store import CrmStore
from .storage import InMemoryStorage, JsonFileStorage, KeyValueStorage, PersistedStore
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    backend: KeyValueStorage
    store: CrmStore

    auth_service: AuthService
    user_service: UserService
    customer_service: CustomerDataService
    attendance_service: AttendanceService
    report_service: ReportService


def build_backend(settings: Any) -> KeyValueStorage:
    kind = str(getattr(settings, "STORAGE_BACKEND", "json")).lower()
    if kind == "memory":
        return InMemoryStorage()
    if kind == "json":
        return JsonFileStorage(getattr(settings, "DATA_DIR", "instance/data"))
    raise ValueError(f"Unknown STORAGE_BACKEND {kind!r}")


def build_container(
    settings: Any,
    *,
    backend: Optional[KeyValueStorage] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    backend = backend or build_backend(settings)
    store = CrmStore(
        PersistedStore(backend),
        clock=clock,
        seed_demo_users=bool(getattr(settings, "SEED_DEMO_USERS", True)),
    )

    rule = StandardPunctualityRule(
        late_after=parse_hhmm(getattr(settings, "LATE_CHECK_IN_AFTER", DEFAULT_LATE_CHECK_IN_AFTER)),
        early_before=parse_hhmm(getattr(settings, "EARLY_CHECK_OUT_BEFORE", DEFAULT_EARLY_CHECK_OUT_BEFORE)),
    )

    return Container(
        backend=backend,
        store=store,
        auth_service=AuthService(store),
        user_service=UserService(store),
        customer_service=CustomerDataService(store, clock=clock),
        attendance_service=AttendanceService(store, clock=clock),
        report_service=ReportService(
            store,
            rule=rule,
            attendance_range=AttendanceRangeMode(getattr(settings, "ATTENDANCE_REPORT_RANGE", "all_time")),
        ),
    )
