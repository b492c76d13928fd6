"""
Pytest configuration and fixtures.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from db.local_store import MemoryKeyValueStore
from main import app
from services.incident_state import IncidentStateManager


class FakeClock:
    """Deterministic clock; call advance() to move time forward."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def manager(store, clock, notifications):
    return IncidentStateManager(store, notify=notifications.append, clock=clock)


@pytest.fixture
def client():
    # entering the context runs the lifespan, which seeds fresh mock data
    with TestClient(app) as c:
        yield c


@pytest.fixture
def lot_a():
    return {"lat": 0, "lng": 0, "name": "Lot A"}
