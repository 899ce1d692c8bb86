"""
Shared fixtures: a fixed rate table, a controllable clock and a
call-counting rate source standing in for the HTTP providers.
"""

import asyncio
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from domain.models.currency import RateSnapshot
from domain.models.units import CurrencyUnit
from infrastructure.cache.rate_cache import RateCache

TEST_RATES = {
    CurrencyUnit.USD: Decimal("1.0"),
    CurrencyUnit.EUR: Decimal("0.932001"),
    CurrencyUnit.CAD: Decimal("1.344352"),
    CurrencyUnit.RUB: Decimal("71.510096"),
    CurrencyUnit.JPY: Decimal("132.626755"),
    CurrencyUnit.AUD: Decimal("1.451866"),
    CurrencyUnit.AMD: Decimal("396.62057"),
    CurrencyUnit.GBP: Decimal("0.82"),
    CurrencyUnit.PKR: Decimal("278.5"),
}

START = datetime(2025, 11, 5, 10, 0, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class FakeRateSource:
    """Counts fetches; can be told to fail or to take a while."""

    def __init__(self, clock: FakeClock, rates: dict, name: str = "fake"):
        self.clock = clock
        self.rates = dict(rates)
        self._name = name
        self.calls = 0
        self.error: Exception | None = None
        self.delay = 0.0
        self.closed = False

    @property
    def name(self) -> str:
        return self._name

    async def fetch_rates(self) -> RateSnapshot:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return RateSnapshot(fetched_at=self.clock(), rates=self.rates, source=self.name)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def rates():
    return dict(TEST_RATES)


@pytest.fixture
def clock():
    return FakeClock(START)


@pytest.fixture
def snapshot(clock, rates):
    return RateSnapshot(fetched_at=clock(), rates=rates, source="fake")


@pytest.fixture
def rate_source(clock, rates):
    return FakeRateSource(clock, rates)


@pytest.fixture
def rate_cache(rate_source, snapshot, clock):
    """Cache primed with `snapshot`, no fetch performed yet."""
    return RateCache(source=rate_source, snapshot=snapshot, max_age=timedelta(hours=24), clock=clock)
