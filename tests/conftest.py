from datetime import datetime, timedelta, timezone

import pytest

from spinwin.application.offer_history import OfferHistory
from spinwin.application.services.cooldown_service import CooldownService
from spinwin.infrastructure.kv.memory_store import InMemoryKeyValueStore


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def epoch(self) -> float:
        return self.now.timestamp()

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class ScriptedRandom:
    """Returns queued values from random(); randint() picks the low bound plus offset."""

    def __init__(self, values=None, ints=None):
        self.values = list(values or [])
        self.ints = list(ints or [])

    def random(self) -> float:
        return self.values.pop(0)

    def randint(self, a: int, b: int) -> int:
        return self.ints.pop(0) if self.ints else a


class FakeAudit:
    def __init__(self):
        self.entries = []

    def log(self, action, contact, success=True, details=None):
        self.entries.append((action, contact, success, details or {}))


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 1, 13, 5, tzinfo=timezone.utc))


@pytest.fixture
def store(clock):
    return InMemoryKeyValueStore(clock=clock.epoch)


@pytest.fixture
def history(store):
    return OfferHistory(store, limit=10)


@pytest.fixture
def cooldown(store, history, clock):
    return CooldownService(store=store, history=history, clock=clock)


@pytest.fixture
def audit():
    return FakeAudit()


@pytest.fixture
def make_rng():
    return ScriptedRandom
