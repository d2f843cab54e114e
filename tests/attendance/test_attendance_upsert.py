from __future__ import annotations

import json
from datetime import datetime, timedelta

from radiant_crm.attendance.model import CheckIn, CheckOut, Location
from radiant_crm.attendance.service import AttendanceService


def _records_for(store, user_id, day):
    return [r for r in store.attendance_records if r.user_id == user_id and r.date == day]


def test_check_in_then_check_out_merges_into_one_record(store, clock, fixed_now):
    t1 = fixed_now
    t2 = fixed_now.replace(hour=17, minute=30)

    store.add_attendance(user_id="user-2", emp_id="E-002", staff_name="Agent Smith", event=CheckIn(at=t1, location=Location(9.93, 76.26)))
    clock.now = t2
    store.add_attendance(user_id="user-2", emp_id="E-002", staff_name="Agent Smith", event=CheckOut(at=t2, location=Location(9.94, 76.27)))

    records = _records_for(store, "user-2", "2025-06-02")
    assert len(records) == 1
    assert records[0].check_in_time == t1
    assert records[0].check_out_time == t2
    assert records[0].check_in_location == Location(9.93, 76.26)
    assert records[0].check_out_location == Location(9.94, 76.27)


def test_repeated_events_are_last_write_wins(store, clock, fixed_now):
    later = fixed_now + timedelta(minutes=20)

    store.add_attendance(user_id="user-2", emp_id="E-002", staff_name="Agent Smith", event=CheckIn(at=fixed_now))
    store.add_attendance(user_id="user-2", emp_id="E-002", staff_name="A. Smith", event=CheckIn(at=later))

    (record,) = _records_for(store, "user-2", "2025-06-02")
    assert record.check_in_time == later
    assert record.staff_name == "A. Smith"
    assert record.check_out_time is None


def test_event_without_location_keeps_previous_location(store, fixed_now):
    store.add_attendance(user_id="user-2", emp_id="E-002", staff_name="Agent Smith", event=CheckIn(at=fixed_now, location=Location(1.0, 2.0)))
    store.add_attendance(user_id="user-2", emp_id="E-002", staff_name="Agent Smith", event=CheckIn(at=fixed_now))

    (record,) = _records_for(store, "user-2", "2025-06-02")
    assert record.check_in_location == Location(1.0, 2.0)


def test_next_day_creates_a_new_record(store, clock, fixed_now):
    store.add_attendance(user_id="user-2", emp_id="E-002", staff_name="Agent Smith", event=CheckIn(at=fixed_now))
    clock.now = fixed_now + timedelta(days=1)
    store.add_attendance(user_id="user-2", emp_id="E-002", staff_name="Agent Smith", event=CheckIn(at=clock.now))

    assert sorted(r.date for r in store.attendance_records) == ["2025-06-02", "2025-06-03"]


def test_upsert_is_keyed_per_user(store, fixed_now):
    store.add_attendance(user_id="user-1", emp_id="E-001", staff_name="Admin User", event=CheckIn(at=fixed_now))
    store.add_attendance(user_id="user-2", emp_id="E-002", staff_name="Agent Smith", event=CheckIn(at=fixed_now))

    assert len(store.attendance_records) == 2


def test_attendance_is_persisted_in_camel_case(store, backend, fixed_now):
    store.add_attendance(user_id="user-2", emp_id="E-002", staff_name="Agent Smith", event=CheckIn(at=fixed_now, location=Location(1.5, 2.5)))

    (saved,) = json.loads(backend.get_item("attendanceRecords"))
    assert saved["userId"] == "user-2"
    assert saved["date"] == "2025-06-02"
    assert saved["checkInTime"] == "2025-06-02T08:55:00"
    assert saved["checkInLocation"] == {"lat": 1.5, "lon": 2.5}
    assert "checkOutTime" not in saved


def test_service_check_in_and_out_use_the_clock(store, clock, fixed_now):
    svc = AttendanceService(store, clock=clock)
    store.login("Agent", "123456")
    agent = store.current_user

    svc.check_in(agent, Location(9.9, 76.2))
    clock.now = datetime(2025, 6, 2, 16, 45)
    svc.check_out(agent, None)

    record = svc.today_record(agent)
    assert record.user_id == "user-2"
    assert record.emp_id == "E-002"
    assert record.check_in_time == fixed_now
    assert record.check_out_time == datetime(2025, 6, 2, 16, 45)
    assert record.check_out_location is None
