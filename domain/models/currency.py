from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from types import MappingProxyType

from domain.models.units import CurrencyUnit


@dataclass(frozen=True)
class RateSnapshot:
	"""One fetch worth of rates, each being the value of 1 USD in that currency."""

	fetched_at: datetime
	rates: Mapping[CurrencyUnit, Decimal]
	source: str = 'unknown'

	def __post_init__(self):
		if self.fetched_at.tzinfo is None:
			raise ValueError('fetched_at must be timezone-aware')

		try:
			rates = {unit: Decimal(str(value)) for unit, value in self.rates.items()}
		except InvalidOperation as e:
			raise ValueError(f'Rates must be numeric: {dict(self.rates)}') from e

		for unit, rate in rates.items():
			if not rate.is_finite() or rate <= 0:
				raise ValueError(f'Rate for {unit.code} must be a finite positive number, got {rate}')
		if rates.get(CurrencyUnit.USD) != Decimal(1):
			raise ValueError('USD rate must be present and equal to 1')

		# Ordered by enum declaration so iteration is stable
		ordered = {unit: rates[unit] for unit in CurrencyUnit if unit in rates}
		object.__setattr__(self, 'rates', MappingProxyType(ordered))

	@property
	def units(self) -> list[CurrencyUnit]:
		return list(self.rates)

	def rate(self, unit: CurrencyUnit) -> Decimal:
		try:
			return self.rates[unit]
		except KeyError as e:
			raise KeyError(f'No rate for {unit.code} in snapshot') from e

	def age(self, now: datetime) -> timedelta:
		return now - self.fetched_at


@dataclass(frozen=True)
class Money:
	amount_usd: Decimal
	unit: CurrencyUnit

	@classmethod
	def from_amount(cls, amount: Decimal, unit: CurrencyUnit, snapshot: RateSnapshot) -> 'Money':
		"""Normalize a magnitude expressed in `unit` to USD."""
		return cls(amount_usd=amount / snapshot.rate(unit), unit=unit)

	def with_unit(self, unit: CurrencyUnit) -> 'Money':
		return Money(amount_usd=self.amount_usd, unit=unit)

	def amount_in(self, snapshot: RateSnapshot) -> Decimal:
		return self.amount_usd * snapshot.rate(self.unit)

	def render(self, snapshot: RateSnapshot) -> str:
		return f'{self.amount_in(snapshot):.2f} {self.unit.label}'


@dataclass(frozen=True)
class ConversionResult:
	original: str
	converted: str
	source: Money = field(repr=False)
	target: Money = field(repr=False)
	rates: RateSnapshot = field(repr=False)

	@property
	def rates_fetched_at(self) -> datetime:
		return self.rates.fetched_at

	@property
	def converted_amount(self) -> Decimal:
		return self.target.amount_in(self.rates)

	def __str__(self) -> str:
		return f'{self.original} -> {self.converted}'
