from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Optional, Sequence, TypeVar

from werkzeug.security import check_password_hash, generate_password_hash

from ..attendance.model import AttendanceEvent, AttendanceRecord, CheckIn, CheckOut
from ..common.datetime_utils import now_local
from ..common.ids import IdGenerator, UuidIdGenerator
from ..core.constants import ATTENDANCE_RECORDS_KEY, CURRENT_USER_KEY, CUSTOMER_DATA_KEY, USERS_KEY
from ..core.enums import Role
from ..customers.model import CustomerData
from ..storage.persisted_store import PersistedStore
from ..users.model import AuthenticatedUser, StoredUser

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEMO_PASSWORD = "123456"


def demo_users() -> list[StoredUser]:
    """Two accounts so a fresh install is usable out of the box."""

    return [
        StoredUser(
            id="user-1",
            staff_name="Admin User",
            designation="Manager",
            emp_id="E-001",
            joining_date="2023-01-01",
            mobile="9876543210",
            role=Role.ADMIN,
            salary=100000,
            user_id="Admin",
            password_hash=generate_password_hash(DEMO_PASSWORD),
        ),
        StoredUser(
            id="user-2",
            staff_name="Agent Smith",
            designation="Field Agent",
            emp_id="E-002",
            joining_date="2023-02-01",
            mobile="9876543211",
            role=Role.AGENT,
            salary=50000,
            user_id="Agent",
            password_hash=generate_password_hash(DEMO_PASSWORD),
        ),
    ]


def _verify_secret(password_hash: str, secret: str) -> bool:
    try:
        return check_password_hash(password_hash, secret)
    except ValueError:
        # e.g. an unknown hash method left behind by an older data file
        return False


class CrmStore:
    """In-memory owner of users, leads, attendance and the current session.

    Every successful mutation is written through to the persisted store; the
    persisted store is the only side effect.
    """

    def __init__(
        self,
        persisted: PersistedStore,
        *,
        ids: Optional[IdGenerator] = None,
        clock: Callable[[], datetime] = now_local,
        seed_demo_users: bool = True,
    ):
        self._persisted = persisted
        self._ids = ids or UuidIdGenerator()
        self._clock = clock

        self._users: list[StoredUser] = self._load_list(USERS_KEY, StoredUser.from_dict)
        self._customer_data: list[CustomerData] = self._load_list(CUSTOMER_DATA_KEY, CustomerData.from_dict)
        self._attendance: list[AttendanceRecord] = self._load_list(ATTENDANCE_RECORDS_KEY, AttendanceRecord.from_dict)
        self._current_user: Optional[AuthenticatedUser] = self._load_current_user()

        if seed_demo_users and not self._users:
            self._users = demo_users()
            self._save_users()
            logger.info("Seeded %d demo users", len(self._users))

    # -- loading -----------------------------------------------------------------

    def _load_list(self, key: str, parse: Callable[[Any], T]) -> list[T]:
        raw = self._persisted.read(key, [])
        if not isinstance(raw, list):
            logger.warning("Slot %r is not a list; starting empty", key)
            return []

        items: list[T] = []
        for entry in raw:
            if not isinstance(entry, dict):
                logger.warning("Skipping non-object entry in %r", key)
                continue
            try:
                items.append(parse(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed entry %r in %r: %s", entry.get("id"), key, e)
        return items

    def _load_current_user(self) -> Optional[AuthenticatedUser]:
        raw = self._persisted.read(CURRENT_USER_KEY, None)
        if not isinstance(raw, dict):
            return None
        try:
            return AuthenticatedUser.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring malformed session: %s", e)
            return None

    # -- persistence -------------------------------------------------------------

    def _save_users(self) -> None:
        self._persisted.write(USERS_KEY, [u.to_dict() for u in self._users])

    def _save_session(self) -> None:
        self._persisted.write(CURRENT_USER_KEY, self._current_user.to_dict() if self._current_user else None)

    def _save_customer_data(self) -> None:
        self._persisted.write(CUSTOMER_DATA_KEY, [d.to_dict() for d in self._customer_data])

    def _save_attendance(self) -> None:
        self._persisted.write(ATTENDANCE_RECORDS_KEY, [r.to_dict() for r in self._attendance])

    # -- snapshots ---------------------------------------------------------------

    @property
    def current_user(self) -> Optional[AuthenticatedUser]:
        return self._current_user

    @property
    def users(self) -> Sequence[StoredUser]:
        return tuple(self._users)

    @property
    def customer_data(self) -> Sequence[CustomerData]:
        return tuple(self._customer_data)

    @property
    def attendance_records(self) -> Sequence[AttendanceRecord]:
        return tuple(self._attendance)

    def get_user(self, id: str) -> Optional[StoredUser]:
        return next((u for u in self._users if u.id == id), None)

    def today(self) -> str:
        return self._clock().date().isoformat()

    def get_attendance(self, user_id: str, day: str) -> Optional[AttendanceRecord]:
        return next((r for r in self._attendance if r.user_id == user_id and r.date == day), None)

    # -- session -----------------------------------------------------------------

    def login(self, login_id: str, secret: str) -> bool:
        matches = [u for u in self._users if u.user_id == login_id and _verify_secret(u.password_hash, secret)]
        if len(matches) != 1:
            logger.info("Login rejected for %r", login_id)
            return False

        self._current_user = matches[0].public()
        self._save_session()
        logger.info("Login succeeded for %r", login_id)
        return True

    def logout(self) -> None:
        self._current_user = None
        self._save_session()

    # -- users -------------------------------------------------------------------

    def add_user(self, user: StoredUser) -> StoredUser:
        created = replace(user, id=self._ids.next_id("user"))
        self._users.append(created)
        self._save_users()
        logger.info("Added user %s (%s)", created.id, created.user_id)
        return created

    def update_user(self, user: StoredUser) -> bool:
        for i, existing in enumerate(self._users):
            if existing.id == user.id:
                self._users[i] = user
                self._save_users()
                if self._current_user and self._current_user.id == user.id:
                    self._current_user = user.public()
                    self._save_session()
                logger.info("Updated user %s", user.id)
                return True
        return False

    def delete_user(self, id: str) -> bool:
        remaining = [u for u in self._users if u.id != id]
        if len(remaining) == len(self._users):
            return False
        # Leads and attendance rows keep pointing at the removed user.
        self._users = remaining
        self._save_users()
        logger.info("Deleted user %s", id)
        return True

    # -- leads -------------------------------------------------------------------

    def add_customer_data(self, data: CustomerData) -> CustomerData:
        created = replace(data, id=self._ids.next_id("data"))
        self._customer_data.append(created)
        self._save_customer_data()
        logger.info("Added customer data %s by %r", created.id, created.created_by)
        return created

    # -- attendance --------------------------------------------------------------

    def add_attendance(self, *, user_id: str, emp_id: str, staff_name: str, event: AttendanceEvent) -> AttendanceRecord:
        """Upsert today's record for ``user_id``, merging the event's fields into it."""

        today = self.today()
        changes: dict[str, Any] = {"emp_id": emp_id, "staff_name": staff_name}
        if isinstance(event, CheckIn):
            changes["check_in_time"] = event.at
            if event.location is not None:
                changes["check_in_location"] = event.location
        elif isinstance(event, CheckOut):
            changes["check_out_time"] = event.at
            if event.location is not None:
                changes["check_out_location"] = event.location
        else:
            raise TypeError(f"unsupported attendance event: {event!r}")

        for i, existing in enumerate(self._attendance):
            if existing.user_id == user_id and existing.date == today:
                record = replace(existing, **changes)
                self._attendance[i] = record
                break
        else:
            record = AttendanceRecord(id=self._ids.next_id("att"), user_id=user_id, date=today, **changes)
            self._attendance.append(record)

        self._save_attendance()
        logger.info("Attendance %s for %s on %s", type(event).__name__, user_id, today)
        return record
