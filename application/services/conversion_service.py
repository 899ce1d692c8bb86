import logging
from decimal import DecimalException

from domain.exceptions.currency import CurrencyException, InvalidTargetError, ParseError, ProviderError
from domain.models.currency import ConversionResult, Money
from domain.models.units import CurrencyUnit
from domain.parsers.amount import AmountParser
from infrastructure.cache.rate_cache import RateCache

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = 'Error: conversion failed'


class ConversionService:
	def __init__(self, cache: RateCache, parser: AmountParser | None = None):
		self.cache = cache
		self.parser = parser or AmountParser(cache.units)

	def supported_units(self) -> list[CurrencyUnit]:
		return list(self.parser.units)

	async def convert(self, input: str, target: str) -> ConversionResult:
		amount, source_unit = self.parser.parse(input)

		target_unit = self.parser.resolve_unit(target)
		if target_unit is None:
			raise InvalidTargetError(target)

		try:
			await self.cache.ensure_fresh()
		except ProviderError as e:
			logger.warning(f'Using stale rates (age {self.cache.age()}): {e}')

		snapshot = self.cache.current()

		try:
			original = Money.from_amount(amount, source_unit, snapshot)
			converted = original.with_unit(target_unit)
			original_text = original.render(snapshot)
			converted_text = converted.render(snapshot)
		except DecimalException as e:
			raise ParseError(input, 'number out of range') from e

		return ConversionResult(
			original=original_text,
			converted=converted_text,
			source=original,
			target=converted,
			rates=snapshot,
		)

	async def convert_currency(self, input: str, target: str) -> str:
		"""Chat-facing entry point: every outcome, including failures, is a display string."""
		try:
			result = await self.convert(input, target)
		except CurrencyException as e:
			logger.info(f'Conversion of {input!r} to {target!r} rejected: {e}')
			return str(e)
		except Exception:
			logger.exception(f'Unexpected error converting {input!r} to {target!r}')
			return UNEXPECTED_ERROR_MESSAGE

		return str(result)
