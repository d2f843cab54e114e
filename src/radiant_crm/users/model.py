from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping

from ..common.records import get_float, get_str, require_str
from ..core.enums import Role


@dataclass(frozen=True)
class AuthenticatedUser:
    """A user as seen by the session and the views: never carries a secret."""

    id: str
    staff_name: str
    designation: str
    emp_id: str
    joining_date: str
    mobile: str
    role: Role
    salary: float
    user_id: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "staffName": self.staff_name,
            "designation": self.designation,
            "empId": self.emp_id,
            "joiningDate": self.joining_date,
            "mobile": self.mobile,
            "role": self.role.value,
            "salary": self.salary,
            "userId": self.user_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuthenticatedUser":
        return cls(**_identity_fields(data))


@dataclass(frozen=True)
class StoredUser:
    """Domain entity: User as persisted, including the password hash.

    Note: plain data object (no storage access code).
    """

    id: str
    staff_name: str
    designation: str
    emp_id: str
    joining_date: str
    mobile: str
    role: Role
    salary: float
    user_id: str
    password_hash: str

    def public(self) -> AuthenticatedUser:
        fields = asdict(self)
        fields.pop("password_hash")
        return AuthenticatedUser(**fields)

    def to_dict(self) -> dict[str, Any]:
        data = self.public().to_dict()
        data["passwordHash"] = self.password_hash
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StoredUser":
        return cls(**_identity_fields(data), password_hash=get_str(data, "passwordHash"))


def _identity_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": require_str(data, "id"),
        "staff_name": get_str(data, "staffName"),
        "designation": get_str(data, "designation"),
        "emp_id": get_str(data, "empId"),
        "joining_date": get_str(data, "joiningDate"),
        "mobile": get_str(data, "mobile"),
        "role": Role(require_str(data, "role")),
        "salary": get_float(data, "salary"),
        "user_id": get_str(data, "userId"),
    }
