from __future__ import annotations

from datetime import datetime

import pytest

from radiant_crm.state.store import CrmStore
from radiant_crm.storage import InMemoryStorage, PersistedStore


class FakeClock:
    """Callable clock whose time tests can move."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class SequentialIds:
    def __init__(self):
        # seeded users already own user-1 and user-2
        self._n = 100

    def next_id(self, prefix: str) -> str:
        self._n += 1
        return f"{prefix}-{self._n}"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 6, 2, 8, 55, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def backend() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(backend, clock) -> CrmStore:
    return CrmStore(PersistedStore(backend), ids=SequentialIds(), clock=clock)
