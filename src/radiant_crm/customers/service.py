from __future__ import annotations

from datetime import datetime
from typing import Callable, Mapping, Optional

from ..common.datetime_utils import now_local
from ..common.validators import check_required, parse_float
from ..core.enums import ConnectionType, LeadStatus
from ..core.exceptions import ValidationError
from ..state.store import CrmStore
from ..users.model import AuthenticatedUser
from .model import Address, BillFile, CustomerData


class CustomerDataService:
    """Use case: capture a lead from the Create-Data form."""

    def __init__(self, store: CrmStore, *, clock: Callable[[], datetime] = now_local):
        self._store = store
        self._clock = clock

    def create(
        self,
        form: Mapping[str, str],
        *,
        creator: AuthenticatedUser,
        bill_file: Optional[BillFile] = None,
    ) -> CustomerData:
        errors: dict[str, str] = {}

        customer_name = (form.get("customerName") or "").strip()
        mobile = (form.get("mobile") or "").strip()
        check_required(errors, "customerName", customer_name, "Customer Name is required")
        check_required(errors, "mobile", mobile, "Mobile Number is required")

        try:
            connection_type = ConnectionType(form.get("connectionType") or ConnectionType.HOME.value)
        except ValueError:
            errors["connectionType"] = "Invalid connection type"
            connection_type = ConnectionType.HOME

        try:
            status = LeadStatus(form.get("status") or LeadStatus.INTERESTED.value)
        except ValueError:
            errors["status"] = "Invalid status"
            status = LeadStatus.INTERESTED

        latitude = parse_float(errors, "latitude", form.get("latitude"))
        longitude = parse_float(errors, "longitude", form.get("longitude"))

        if errors:
            raise ValidationError(errors=errors)

        appointment = None
        if status == LeadStatus.APPOINTMENT_FIXED:
            appointment = (form.get("appointmentDateTime") or "").strip() or None

        data = CustomerData(
            id="",
            date=self._clock().date().isoformat(),
            created_by=creator.user_id,
            customer_name=customer_name,
            mobile=mobile,
            address=Address(
                house_no=(form.get("houseNo") or "").strip(),
                place=(form.get("place") or "").strip(),
                city=(form.get("city") or "").strip(),
                district=(form.get("district") or "").strip(),
                pincode=(form.get("pincode") or "").strip(),
                state=(form.get("state") or "").strip(),
                landmark=(form.get("landmark") or "").strip(),
            ),
            connection_type=connection_type,
            kwa=(form.get("kwa") or "").strip(),
            status=status,
            latitude=latitude,
            longitude=longitude,
            remarks=(form.get("remarks") or "").strip(),
            bill_file=bill_file,
            appointment_date_time=appointment,
        )
        return self._store.add_customer_data(data)
