from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.validators import check_min_length, check_mobile, check_required, is_blank, parse_float
from ..core.constants import MIN_LOGIN_ID_LENGTH, MIN_SECRET_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..state.store import CrmStore
from .model import AuthenticatedUser, StoredUser

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login) and end the session."""

    def __init__(self, store: CrmStore):
        self._store = store

    def login(self, login_id: str, secret: str) -> AuthenticatedUser:
        if not self._store.login(login_id.strip(), secret):
            # Same message for unknown login id and wrong secret.
            raise AuthenticationError("Invalid credentials")
        return self._store.current_user

    def logout(self) -> None:
        self._store.logout()

    def current_user(self) -> Optional[AuthenticatedUser]:
        return self._store.current_user


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, store: CrmStore):
        self._store = store

    def list_users(self) -> Sequence[AuthenticatedUser]:
        return [u.public() for u in self._store.users]

    def list_agents(self) -> Sequence[AuthenticatedUser]:
        return [u.public() for u in self._store.users if u.role == Role.AGENT]

    def get_user(self, id: str) -> AuthenticatedUser:
        user = self._store.get_user(id)
        if not user:
            raise ValidationError("User does not exist")
        return user.public()

    def create_user(self, form: Mapping[str, str]) -> AuthenticatedUser:
        fields = self._validate(form, existing=None)
        created = self._store.add_user(StoredUser(id="", **fields))
        return created.public()

    def update_user(self, id: str, form: Mapping[str, str]) -> AuthenticatedUser:
        existing = self._store.get_user(id)
        if not existing:
            raise ValidationError("User does not exist")

        fields = self._validate(form, existing=existing)
        updated = StoredUser(id=existing.id, **fields)
        self._store.update_user(updated)
        return updated.public()

    def delete_user(self, *, current_role: Role, user_id: str) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to delete users")

        if not self._store.delete_user(user_id):
            raise ValidationError("User does not exist")

    def _validate(self, form: Mapping[str, str], *, existing: Optional[StoredUser]) -> dict:
        errors: dict[str, str] = {}

        staff_name = (form.get("staffName") or "").strip()
        designation = (form.get("designation") or "").strip()
        emp_id = (form.get("empId") or "").strip()
        mobile = (form.get("mobile") or "").strip()
        login_id = (form.get("userId") or "").strip()
        password = form.get("password") or ""

        check_required(errors, "staffName", staff_name, "Staff name is required")
        check_required(errors, "designation", designation, "Designation is required")
        check_required(errors, "empId", emp_id, "Employee ID is required")
        check_mobile(errors, "mobile", mobile)

        salary = parse_float(errors, "salary", form.get("salary"))
        if "salary" not in errors and salary <= 0:
            errors["salary"] = "Salary is required"

        check_required(errors, "userId", login_id, "User ID is required")
        check_min_length(
            errors, "userId", login_id, MIN_LOGIN_ID_LENGTH,
            f"User ID must be at least {MIN_LOGIN_ID_LENGTH} characters long.",
        )
        if "userId" not in errors:
            taken = any(u.user_id == login_id and (existing is None or u.id != existing.id) for u in self._store.users)
            if taken:
                errors["userId"] = "User ID is already taken"

        if existing is None and is_blank(password):
            errors["password"] = "Password is required"
        elif password:
            check_min_length(
                errors, "password", password, MIN_SECRET_LENGTH,
                f"Password must be at least {MIN_SECRET_LENGTH} characters long.",
            )

        role = None
        try:
            role = Role(form.get("role") or Role.AGENT.value)
        except ValueError:
            errors["role"] = "Invalid role"

        if errors:
            raise ValidationError(errors=errors)

        if password:
            password_hash = generate_password_hash(password)
        else:
            # Blank secret on edit keeps the existing one.
            password_hash = existing.password_hash

        return {
            "staff_name": staff_name,
            "designation": designation,
            "emp_id": emp_id,
            "joining_date": (form.get("joiningDate") or "").strip(),
            "mobile": mobile,
            "role": role,
            "salary": salary,
            "user_id": login_id,
            "password_hash": password_hash,
        }
