from __future__ import annotations

from dataclasses import dataclass

from ..customers.model import CustomerData


@dataclass(frozen=True)
class Column:
    key: str
    label: str


@dataclass(frozen=True)
class AttendanceSummaryRow:
    """Read-model for one agent in the attendance report."""

    staff_name: str
    emp_id: str
    salary: float
    present_days: int
    late_check_ins: int
    early_check_outs: int

    def as_row(self) -> dict:
        return {
            "staff_name": self.staff_name,
            "emp_id": self.emp_id,
            "salary": self.salary,
            "present_days": self.present_days,
            "late_check_ins": self.late_check_ins,
            "early_check_outs": self.early_check_outs,
        }


ATTENDANCE_COLUMNS = [
    Column("staff_name", "Staff Name"),
    Column("emp_id", "Emp ID"),
    Column("salary", "Salary"),
    Column("present_days", "Present Days"),
    Column("late_check_ins", "Late Check-ins"),
    Column("early_check_outs", "Early Check-outs"),
]

CUSTOMER_COLUMNS = [
    Column("date", "Date"),
    Column("customer_name", "Customer Name"),
    Column("mobile", "Mobile"),
    Column("status", "Status"),
    Column("created_by", "Created By"),
    Column("location", "Location"),
]


def customer_row(item: CustomerData) -> dict:
    return {
        "date": item.date,
        "customer_name": item.customer_name,
        "mobile": item.mobile,
        "status": item.status.value,
        "created_by": item.created_by,
        "location": f"{item.latitude:.4f}, {item.longitude:.4f}",
    }
