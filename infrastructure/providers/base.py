import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable

import httpx
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from domain.exceptions.currency import JsonParseError, RequestError
from domain.models.currency import RateSnapshot
from domain.models.units import CurrencyUnit

logger = logging.getLogger(__name__)


@runtime_checkable
class ExchangeRateProvider(Protocol):
	"""Source of fresh rate snapshots. Fetch failures raise ProviderError."""

	@property
	def name(self) -> str: ...

	async def fetch_rates(self) -> RateSnapshot: ...

	async def close(self) -> None: ...


def _is_transient(exc: BaseException) -> bool:
	if not isinstance(exc, RequestError):
		return False
	return exc.status_code is None or exc.status_code >= 500


class HTTPRateProvider(ABC):
	"""Common HTTP handling for providers quoting rates against 1 USD."""

	BASE_URL: str

	def __init__(
		self,
		api_key: str,
		units: Iterable[CurrencyUnit] | None = None,
		client: httpx.AsyncClient | None = None,
		timeout: float = 10,
		retry_attempts: int = 3,
		retry_backoff: float = 1.0,
	):
		self.api_key = api_key
		units = list(units) if units is not None else list(CurrencyUnit)
		if CurrencyUnit.USD not in units:
			units.insert(0, CurrencyUnit.USD)
		self.units = units
		self.timeout = timeout
		self.retry_attempts = max(1, retry_attempts)
		self.retry_backoff = retry_backoff
		self._client = client or httpx.AsyncClient(
			timeout=httpx.Timeout(timeout),
			headers={'accept': 'application/json'},
		)

	@property
	@abstractmethod
	def name(self) -> str: ...

	@abstractmethod
	async def _fetch_values(self) -> Mapping[str, Any]:
		"""Return the raw rate value for every currency code in the response."""

	@property
	def currency_codes(self) -> str:
		return ','.join(unit.code for unit in self.units)

	async def fetch_rates(self) -> RateSnapshot:
		async for attempt in AsyncRetrying(
			stop=stop_after_attempt(self.retry_attempts),
			wait=wait_exponential(multiplier=self.retry_backoff, max=10),
			retry=retry_if_exception(_is_transient),
			reraise=True,
		):
			with attempt:
				if attempt.retry_state.attempt_number > 1:
					logger.warning(
						f'Retrying {self.name} (attempt {attempt.retry_state.attempt_number}'
						f'/{self.retry_attempts})'
					)
				values = await self._fetch_values()

		snapshot = self._build_snapshot(values)
		logger.info(f'Fetched {len(snapshot.rates)} rates from {self.name}')
		return snapshot

	async def _get_json(
		self, endpoint: str, params: dict | None = None, headers: dict | None = None
	) -> dict:
		url = f'{self.BASE_URL}/{endpoint}'
		try:
			response = await self._client.get(url, params=params, headers=headers)
			response.raise_for_status()
		except httpx.HTTPStatusError as e:
			logger.error(f'{self.name} returned HTTP {e.response.status_code}')
			raise RequestError(
				f'{self.name} HTTP error {e.response.status_code}: {e.response.text[:200]}',
				status_code=e.response.status_code,
			) from e
		except httpx.RequestError as e:
			logger.error(f'{self.name} request failed: {e.__class__.__name__}')
			raise RequestError(f'{self.name} request failed: {e.__class__.__name__}') from e

		try:
			data = response.json()
		except ValueError as e:
			raise JsonParseError(f'{self.name} returned a body that is not JSON') from e

		if not isinstance(data, dict):
			raise JsonParseError(f'{self.name} returned {type(data).__name__} instead of an object')
		return data

	def _build_snapshot(self, values: Mapping[str, Any]) -> RateSnapshot:
		missing = [unit.code for unit in self.units if unit.code not in values]
		if missing:
			raise JsonParseError(f'{self.name} response has no rate for {", ".join(missing)}')

		try:
			return RateSnapshot(
				fetched_at=datetime.now(UTC),
				rates={unit: values[unit.code] for unit in self.units},
				source=self.name,
			)
		except ValueError as e:
			raise JsonParseError(f'{self.name} returned unusable rates: {e}') from e

	async def close(self) -> None:
		await self._client.aclose()
