from datetime import datetime, timedelta, timezone
from typing import Iterable

import mongomock
import pytest
from fastapi.testclient import TestClient

from college_id.db.student_store import StudentStore
from college_id.main import create_application
from college_id.services.identifier_service import IdentifierGenerator
from college_id.services.student_service import StudentService

FIXED_MILLIS = 1730000123456


class ScriptedRandom:
    """Stands in for random.Random, answering randint from a fixed script."""

    def __init__(self, values: Iterable[int]):
        self.values = list(values)

    def randint(self, a: int, b: int) -> int:
        value = self.values.pop(0)
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        return value


class TickingClock:
    """Returns a later UTC datetime on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now


@pytest.fixture
def mongo_client():
    client = mongomock.MongoClient(tz_aware=True)
    yield client
    client.close()


@pytest.fixture
def student_store(mongo_client) -> StudentStore:
    """Store over an empty mongomock collection with the unique indexes in place."""
    store = StudentStore(mongo_client["college_id_test"]["students"])
    store.ensure_indexes()
    return store


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def make_service(student_store, clock):
    """Factory for services sharing the test store and clock."""

    def _make(random_values=None, max_attempts: int = 3, store=None) -> StudentService:
        generator = IdentifierGenerator(
            rng=ScriptedRandom(random_values) if random_values is not None else None,
            clock=lambda: FIXED_MILLIS,
        )
        return StudentService(
            store if store is not None else student_store,
            generator=generator,
            clock=clock,
            max_attempts=max_attempts,
        )

    return _make


@pytest.fixture
def student_service(make_service) -> StudentService:
    return make_service()


@pytest.fixture
def client(student_store):
    application = create_application(store=student_store)
    with TestClient(application) as test_client:
        yield test_client
