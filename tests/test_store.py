from __future__ import annotations

import json
from dataclasses import replace

from werkzeug.security import generate_password_hash

from radiant_crm.attendance.model import CheckIn
from radiant_crm.core.enums import Role
from radiant_crm.customers.model import CustomerData
from radiant_crm.state.store import CrmStore
from radiant_crm.storage import InMemoryStorage, PersistedStore
from radiant_crm.users.model import StoredUser

from conftest import SequentialIds


def _agent(user_id: str = "field1", secret: str = "secret1") -> StoredUser:
    return StoredUser(
        id="",
        staff_name="Priya Nair",
        designation="Field Agent",
        emp_id="E-010",
        joining_date="2024-04-01",
        mobile="9000000001",
        role=Role.AGENT,
        salary=42000,
        user_id=user_id,
        password_hash=generate_password_hash(secret),
    )


def test_seeds_admin_and_agent_when_empty(store, backend):
    users = {u.id: u for u in store.users}

    assert set(users) == {"user-1", "user-2"}
    assert users["user-1"].role == Role.ADMIN and users["user-1"].user_id == "Admin"
    assert users["user-2"].role == Role.AGENT and users["user-2"].user_id == "Agent"
    assert len(json.loads(backend.get_item("users"))) == 2


def test_does_not_reseed_existing_users(backend, clock):
    first = CrmStore(PersistedStore(backend), ids=SequentialIds(), clock=clock)
    first.delete_user("user-1")

    second = CrmStore(PersistedStore(backend), ids=SequentialIds(), clock=clock)

    assert [u.id for u in second.users] == ["user-2"]


def test_login_wrong_secret_leaves_session_unchanged(store, backend):
    assert store.login("Agent", "wrong") is False
    assert store.current_user is None
    assert backend.get_item("currentUser") is None


def test_login_success_sets_session_without_secret(store, backend):
    assert store.login("Agent", "123456") is True

    assert store.current_user.user_id == "Agent"
    assert not hasattr(store.current_user, "password_hash")

    persisted = json.loads(backend.get_item("currentUser"))
    assert persisted["userId"] == "Agent"
    assert "passwordHash" not in persisted
    assert "password" not in persisted


def test_login_unknown_user_fails(store):
    assert store.login("Nobody", "123456") is False


def test_login_requires_exactly_one_match(store):
    store.add_user(_agent(user_id="Agent", secret="123456"))

    assert store.login("Agent", "123456") is False
    assert store.current_user is None


def test_logout_clears_session(store, backend):
    store.login("Admin", "123456")
    store.logout()

    assert store.current_user is None
    assert json.loads(backend.get_item("currentUser")) is None


def test_session_survives_reload(backend, clock):
    CrmStore(PersistedStore(backend), clock=clock).login("Admin", "123456")

    reloaded = CrmStore(PersistedStore(backend), clock=clock)

    assert reloaded.current_user is not None
    assert reloaded.current_user.role == Role.ADMIN


def test_add_user_assigns_fresh_id(store):
    a = store.add_user(_agent(user_id="field1"))
    b = store.add_user(_agent(user_id="field2"))

    assert a.id != b.id
    assert a.id.startswith("user-")
    assert store.get_user(a.id) == a


def test_update_user_replaces_matching_record(store):
    agent = store.get_user("user-2")

    assert store.update_user(replace(agent, staff_name="Agent Smith Jr")) is True
    assert store.get_user("user-2").staff_name == "Agent Smith Jr"


def test_update_user_unknown_id_is_noop(store, backend):
    before = backend.get_item("users")

    assert store.update_user(replace(store.get_user("user-2"), id="user-999")) is False
    assert backend.get_item("users") == before


def test_update_current_user_refreshes_session(store):
    store.login("Agent", "123456")

    store.update_user(replace(store.get_user("user-2"), designation="Senior Agent"))

    assert store.current_user.designation == "Senior Agent"


def test_delete_user_leaves_other_collections_untouched(store, backend, clock):
    store.add_customer_data(CustomerData(id="", date="2025-06-02", created_by="Agent", customer_name="Ravi", mobile="9123456780"))
    store.add_attendance(user_id="user-2", emp_id="E-002", staff_name="Agent Smith", event=CheckIn(at=clock()))
    customer_before = backend.get_item("customerData")
    attendance_before = backend.get_item("attendanceRecords")

    assert store.delete_user("user-2") is True

    assert [u.id for u in store.users] == ["user-1"]
    assert len(store.customer_data) == 1
    assert store.attendance_records[0].user_id == "user-2"
    assert backend.get_item("customerData") == customer_before
    assert backend.get_item("attendanceRecords") == attendance_before


def test_delete_unknown_user_is_noop(store):
    assert store.delete_user("user-404") is False
    assert len(store.users) == 2


def test_add_customer_data_appends_without_dedup(store):
    lead = CustomerData(id="", date="2025-06-02", created_by="Agent", customer_name="Ravi", mobile="9123456780")

    first = store.add_customer_data(lead)
    second = store.add_customer_data(lead)

    assert first.id != second.id
    assert len(store.customer_data) == 2


def test_malformed_entries_are_skipped_on_load(clock):
    backend = InMemoryStorage(
        {
            "users": json.dumps([{"id": "user-9", "userId": "x", "role": "Admin"}, "junk", {"userId": "no-id"}]),
            "attendanceRecords": "not json",
        }
    )

    store = CrmStore(PersistedStore(backend), clock=clock)

    assert [u.id for u in store.users] == ["user-9"]
    assert store.attendance_records == ()
