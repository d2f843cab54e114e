from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from ..common.datetime_utils import parse_timestamp
from ..common.records import drop_none, get_str, require_str


@dataclass(frozen=True)
class Location:
    lat: float
    lon: float

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Location"]:
        if not isinstance(data, Mapping):
            return None
        try:
            return cls(lat=float(data["lat"]), lon=float(data["lon"]))
        except (KeyError, TypeError, ValueError):
            return None


@dataclass(frozen=True)
class CheckIn:
    at: datetime
    location: Optional[Location] = None


@dataclass(frozen=True)
class CheckOut:
    at: datetime
    location: Optional[Location] = None


AttendanceEvent = Union[CheckIn, CheckOut]


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar date."""

    id: str
    user_id: str
    emp_id: str
    staff_name: str
    date: str
    check_in_time: Optional[datetime] = None
    check_in_location: Optional[Location] = None
    check_out_time: Optional[datetime] = None
    check_out_location: Optional[Location] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "empId": self.emp_id,
            "staffName": self.staff_name,
            "date": self.date,
            "checkInTime": self.check_in_time.isoformat() if self.check_in_time else None,
            "checkInLocation": self.check_in_location.to_dict() if self.check_in_location else None,
            "checkOutTime": self.check_out_time.isoformat() if self.check_out_time else None,
            "checkOutLocation": self.check_out_location.to_dict() if self.check_out_location else None,
        }
        return drop_none(data)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceRecord":
        return cls(
            id=require_str(data, "id"),
            user_id=require_str(data, "userId"),
            emp_id=get_str(data, "empId"),
            staff_name=get_str(data, "staffName"),
            date=require_str(data, "date"),
            check_in_time=parse_timestamp(data.get("checkInTime")),
            check_in_location=Location.from_dict(data.get("checkInLocation")),
            check_out_time=parse_timestamp(data.get("checkOutTime")),
            check_out_location=Location.from_dict(data.get("checkOutLocation")),
        )
