from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.cleaning_tracker.cleaning_tracker.container import build_container
from src.cleaning_tracker.cleaning_tracker.core.constants import CLEANINGS_COLLECTION
from src.cleaning_tracker.cleaning_tracker.core.enums import Role
from src.cleaning_tracker.cleaning_tracker.core.exceptions import StoreError
from src.cleaning_tracker.cleaning_tracker.database.memory_document_store import InMemoryDocumentStore

ROLE_MAP = {
    "boss@example.com": Role.SUPERIOR_ADMIN,
    "admin@example.com": Role.ADMIN,
}


class TickingClock:
    """Deterministic clock: each call is one second after the previous one."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now) -> TickingClock:
    return TickingClock(fixed_now)


@pytest.fixture
def store(clock) -> InMemoryDocumentStore:
    return InMemoryDocumentStore(clock=clock)


@pytest.fixture
def container(store):
    return build_container(store=store, role_map=ROLE_MAP, emailjs={"enabled": False})


class FlakyDeleteStore(InMemoryDocumentStore):
    """Fails the first ``failures`` deletes from the cleanings collection."""

    def __init__(self, *, failures: int, **kwargs):
        super().__init__(**kwargs)
        self.failures = failures

    def delete_by_id(self, collection, doc_id):
        if collection == CLEANINGS_COLLECTION and self.failures > 0:
            self.failures -= 1
            raise StoreError("connection reset")
        return super().delete_by_id(collection, doc_id)


@pytest.fixture
def flaky_store(clock) -> FlakyDeleteStore:
    return FlakyDeleteStore(failures=1, clock=clock)


@pytest.fixture
def make_container(store):
    """Container factory for tests that swap in their own store or email client."""

    def _make(**overrides):
        kwargs = {"store": store, "role_map": ROLE_MAP, "emailjs": {"enabled": False}}
        kwargs.update(overrides)
        return build_container(**kwargs)

    return _make
