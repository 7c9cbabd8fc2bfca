"""
Shared fixtures: a controllable clock, a scriptable rate provider and a
snapshot factory.
"""

import asyncio
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from domain.models.currency import RateSnapshot

TEST_RATES = {'USD': '1', 'EUR': '0.9', 'GBP': '0.8', 'JPY': '150.25', 'NGN': '1530.5'}


class FakeClock:
    def __init__(self, start: datetime = datetime(2025, 11, 5, 10, 0, tzinfo=UTC)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeProvider:
    """In-memory provider. Queued ``failures`` are raised first, one per call;
    ``always_fail`` then applies to every later call. ``gate`` holds fetches open."""

    name = 'fake'

    def __init__(self, clock: FakeClock, rates: dict[str, str] | None = None):
        self.clock = clock
        self.rates = dict(rates or TEST_RATES)
        self.calls = 0
        self.failures: list[Exception] = []
        self.always_fail: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def fetch(self, base_code: str) -> RateSnapshot:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.failures:
            raise self.failures.pop(0)
        if self.always_fail is not None:
            raise self.always_fail
        return RateSnapshot(
            base_code=base_code,
            rates={code: Decimal(rate) for code, rate in self.rates.items()},
            fetched_at=self.clock(),
        )

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_provider(clock):
    return FakeProvider(clock)


@pytest.fixture
def make_snapshot(clock):
    """Build a snapshot from string rates, defaulting to the shared test table."""
    def _make(rates: dict[str, str] | None = None, base_code: str = 'USD') -> RateSnapshot:
        return RateSnapshot(
            base_code=base_code,
            rates={code: Decimal(rate) for code, rate in (rates or TEST_RATES).items()},
            fetched_at=clock(),
        )
    return _make
