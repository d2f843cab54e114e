from __future__ import annotations

import pytest

from radiant_crm.core.enums import ConnectionType, LeadStatus
from radiant_crm.core.exceptions import ValidationError
from radiant_crm.customers.model import BillFile
from radiant_crm.customers.service import CustomerDataService


@pytest.fixture
def agent(store):
    store.login("Agent", "123456")
    return store.current_user


def test_create_defaults_date_and_creator(store, clock, agent):
    svc = CustomerDataService(store, clock=clock)

    lead = svc.create({"customerName": "Ravi Kumar", "mobile": "9123456780", "latitude": "9.93", "longitude": "76.26"}, creator=agent)

    assert lead.date == "2025-06-02"
    assert lead.created_by == "Agent"
    assert lead.connection_type == ConnectionType.HOME
    assert lead.status == LeadStatus.INTERESTED
    assert (lead.latitude, lead.longitude) == (9.93, 76.26)
    assert store.customer_data == (lead,)


def test_required_fields_and_bad_coordinates(store, clock, agent):
    svc = CustomerDataService(store, clock=clock)

    with pytest.raises(ValidationError) as exc:
        svc.create({"customerName": " ", "latitude": "north"}, creator=agent)

    assert set(exc.value.errors) == {"customerName", "mobile", "latitude"}
    assert store.customer_data == ()


def test_blank_coordinates_mean_manual_zero(store, clock, agent):
    lead = CustomerDataService(store, clock=clock).create({"customerName": "Ravi", "mobile": "9123456780"}, creator=agent)

    assert (lead.latitude, lead.longitude) == (0.0, 0.0)


def test_appointment_kept_only_when_fixed(store, clock, agent):
    svc = CustomerDataService(store, clock=clock)
    base = {"customerName": "Ravi", "mobile": "9123456780", "appointmentDateTime": "2025-06-05T10:30"}

    fixed = svc.create({**base, "status": "Appointment Fixed"}, creator=agent)
    interested = svc.create({**base, "status": "Interested"}, creator=agent)

    assert fixed.appointment_date_time == "2025-06-05T10:30"
    assert interested.appointment_date_time is None


def test_invalid_enum_values_are_field_errors(store, clock, agent):
    with pytest.raises(ValidationError) as exc:
        CustomerDataService(store, clock=clock).create(
            {"customerName": "Ravi", "mobile": "9123456780", "connectionType": "Industrial", "status": "Maybe"},
            creator=agent,
        )

    assert set(exc.value.errors) == {"connectionType", "status"}


def test_bill_file_round_trips_through_storage(store, clock, agent):
    bill = BillFile(name="bill.pdf", content="data:application/pdf;base64,JVBERi0=")

    CustomerDataService(store, clock=clock).create({"customerName": "Ravi", "mobile": "9123456780"}, creator=agent, bill_file=bill)

    stored = store.customer_data[0].to_dict()
    assert stored["billFile"] == {"name": "bill.pdf", "content": "data:application/pdf;base64,JVBERi0="}


def test_posted_date_is_ignored_in_favour_of_capture_day(store, clock, agent):
    svc = CustomerDataService(store, clock=clock)

    junk = svc.create({"customerName": "Ravi", "mobile": "9123456780", "date": "not-a-date"}, creator=agent)
    backdated = svc.create({"customerName": "Asha", "mobile": "9123456781", "date": "2020-01-01"}, creator=agent)

    assert junk.date == "2025-06-02"
    assert backdated.date == "2025-06-02"
