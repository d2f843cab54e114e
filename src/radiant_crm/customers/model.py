from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..common.records import drop_none, get_float, get_optional_str, get_str, require_str
from ..core.enums import ConnectionType, LeadStatus


@dataclass(frozen=True)
class Address:
    house_no: str = ""
    place: str = ""
    city: str = ""
    district: str = ""
    pincode: str = ""
    state: str = ""
    landmark: str = ""


@dataclass(frozen=True)
class BillFile:
    """Attached electricity bill; ``content`` is an inline data URL."""

    name: str
    content: str


@dataclass(frozen=True)
class CustomerData:
    """Domain entity: one lead captured in the field."""

    id: str
    date: str
    created_by: str
    customer_name: str
    mobile: str
    address: Address = field(default_factory=Address)
    connection_type: ConnectionType = ConnectionType.HOME
    kwa: str = ""
    status: LeadStatus = LeadStatus.INTERESTED
    latitude: float = 0.0
    longitude: float = 0.0
    remarks: str = ""
    bill_file: Optional[BillFile] = None
    appointment_date_time: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "date": self.date,
            "createdBy": self.created_by,
            "customerName": self.customer_name,
            "mobile": self.mobile,
            "houseNo": self.address.house_no,
            "place": self.address.place,
            "city": self.address.city,
            "district": self.address.district,
            "pincode": self.address.pincode,
            "state": self.address.state,
            "landmark": self.address.landmark,
            "connectionType": self.connection_type.value,
            "kwa": self.kwa,
            "status": self.status.value,
            "appointmentDateTime": self.appointment_date_time,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "remarks": self.remarks,
            "billFile": {"name": self.bill_file.name, "content": self.bill_file.content} if self.bill_file else None,
        }
        return drop_none(data)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CustomerData":
        bill = data.get("billFile")
        return cls(
            id=require_str(data, "id"),
            date=get_str(data, "date"),
            created_by=get_str(data, "createdBy"),
            customer_name=get_str(data, "customerName"),
            mobile=get_str(data, "mobile"),
            address=Address(
                house_no=get_str(data, "houseNo"),
                place=get_str(data, "place"),
                city=get_str(data, "city"),
                district=get_str(data, "district"),
                pincode=get_str(data, "pincode"),
                state=get_str(data, "state"),
                landmark=get_str(data, "landmark"),
            ),
            connection_type=ConnectionType(data.get("connectionType") or ConnectionType.HOME.value),
            kwa=get_str(data, "kwa"),
            status=LeadStatus(data.get("status") or LeadStatus.INTERESTED.value),
            latitude=get_float(data, "latitude"),
            longitude=get_float(data, "longitude"),
            remarks=get_str(data, "remarks"),
            bill_file=BillFile(name=get_str(bill, "name"), content=get_str(bill, "content")) if isinstance(bill, Mapping) else None,
            appointment_date_time=get_optional_str(data, "appointmentDateTime"),
        )
