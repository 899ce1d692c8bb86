import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from domain.models.currency import RateSnapshot
from domain.models.units import CurrencyUnit
from infrastructure.providers.base import ExchangeRateProvider

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
	return datetime.now(UTC)


class RateCache:
	"""
	Holds the latest rate snapshot and refreshes it once it is older than max_age.

	Only one refresh runs at a time. Callers arriving while a refresh is in
	flight keep using the current snapshot instead of waiting for it. A failed
	refresh leaves the previous snapshot in place.
	"""

	def __init__(
		self,
		source: ExchangeRateProvider,
		snapshot: RateSnapshot,
		max_age: timedelta,
		clock: Clock = utc_now,
	):
		if max_age < timedelta(0):
			raise ValueError('max_age must not be negative')
		self.source = source
		self.max_age = max_age
		self._snapshot = snapshot
		self._clock = clock
		self._refresh_lock = asyncio.Lock()

	@classmethod
	async def create(
		cls,
		source: ExchangeRateProvider,
		max_age: timedelta,
		clock: Clock = utc_now,
	) -> 'RateCache':
		"""Build a cache around a first, blocking fetch. Fetch errors propagate."""
		if max_age < timedelta(0):
			raise ValueError('max_age must not be negative')
		snapshot = await source.fetch_rates()
		logger.info(f'Rate cache initialised from {source.name} ({len(snapshot.rates)} rates)')
		return cls(source=source, snapshot=snapshot, max_age=max_age, clock=clock)

	@property
	def units(self) -> list[CurrencyUnit]:
		return self._snapshot.units

	def current(self) -> RateSnapshot:
		return self._snapshot

	def age(self) -> timedelta:
		return self._snapshot.age(self._clock())

	def is_stale(self) -> bool:
		return self.age() > self.max_age

	@property
	def refreshing(self) -> bool:
		return self._refresh_lock.locked()

	async def ensure_fresh(self) -> None:
		if not self.is_stale():
			return
		if self._refresh_lock.locked():
			logger.debug('Refresh already in flight, serving current snapshot')
			return

		async with self._refresh_lock:
			# Another caller may have refreshed while we were scheduled
			if not self.is_stale():
				return
			await self._refresh()

	async def refresh(self) -> RateSnapshot:
		"""Fetch regardless of age, unless a refresh is already running."""
		if self._refresh_lock.locked():
			return self._snapshot
		async with self._refresh_lock:
			await self._refresh()
		return self._snapshot

	async def _refresh(self) -> None:
		stale_age = self.age()
		try:
			snapshot = await self.source.fetch_rates()
		except Exception:
			logger.warning(
				f'Refreshing rates from {self.source.name} failed, keeping snapshot aged {stale_age}'
			)
			raise

		self._snapshot = snapshot
		logger.info(f'Rates refreshed from {self.source.name} (previous snapshot aged {stale_age})')

	async def close(self) -> None:
		await self.source.close()
