import re
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import IntEnum

from domain.exceptions.currency import ParseError
from domain.models.units import UNIT_ALIASES, CurrencyUnit, UnitAliases

INVALID_UNIT_MESSAGE = 'Invalid unit provided.'

# Largest accepted power of ten, keeps conversions within the default decimal context
MAX_MAGNITUDE_EXPONENT = 15

_NUMBER_LITERAL = re.compile(
	r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?|[+-]?(?:inf(?:inity)?|nan)'
)


class AliasKind(IntEnum):
	CODE = 0
	WORD = 1
	SYMBOL = 2


@dataclass(frozen=True)
class AliasRule:
	alias: str
	unit: CurrencyUnit
	kind: AliasKind

	def matches(self, text: str) -> bool:
		if self.kind is AliasKind.SYMBOL:
			return text.startswith(self.alias)
		return text.endswith(self.alias)


def alias_priority(units: Iterable[CurrencyUnit] | None = None) -> list[AliasRule]:
	"""
	Order in which aliases are tried against an input.

	Longer aliases come first so that e.g. 'canadian dollars' wins over
	'dollars' and 'dollars' wins over the rupee shorthand 'rs'. At equal
	length codes beat words, words beat symbols, and remaining ties follow
	enum declaration order.
	"""
	allowed = set(units) if units is not None else set(CurrencyUnit)
	order = {unit: index for index, unit in enumerate(CurrencyUnit)}

	rules = []
	for unit, aliases in UNIT_ALIASES.items():
		if unit not in allowed:
			continue
		rules.extend(AliasRule(alias, unit, AliasKind.CODE) for alias in aliases.codes)
		rules.extend(AliasRule(alias, unit, AliasKind.WORD) for alias in aliases.words)
		rules.extend(AliasRule(alias, unit, AliasKind.SYMBOL) for alias in aliases.symbols)

	return sorted(rules, key=lambda r: (-len(r.alias), r.kind, order[r.unit]))


def _strip_aliases(text: str, aliases: UnitAliases) -> str:
	for suffix in sorted(aliases.suffixes, key=len, reverse=True):
		text = text.rstrip()
		if text.endswith(suffix):
			text = text[: -len(suffix)]

	for symbol in sorted(aliases.symbols, key=len, reverse=True):
		text = text.lstrip()
		if text.startswith(symbol):
			text = text[len(symbol) :]

	return text.strip()


def _parse_number(raw: str, text: str) -> Decimal:
	if not text:
		raise ParseError(raw, 'cannot parse number from empty string')
	# Decimal() alone would also take '1_000' and non-ASCII digits
	if not _NUMBER_LITERAL.fullmatch(text):
		raise ParseError(text, 'invalid number literal')
	try:
		value = Decimal(text)
	except InvalidOperation as e:
		raise ParseError(text, 'invalid number literal') from e
	if not value.is_finite():
		raise ParseError(text, 'number must be finite')
	if value and value.adjusted() > MAX_MAGNITUDE_EXPONENT:
		raise ParseError(text, 'number too large')
	return value


class AmountParser:
	"""Splits free-form text like '$45.9' or '20 quid' into (magnitude, unit)."""

	def __init__(self, units: Iterable[CurrencyUnit] | None = None):
		self.units = list(units) if units is not None else list(CurrencyUnit)
		self._rules = alias_priority(self.units)
		self._lookup = {
			alias: unit for unit in self.units for alias in UNIT_ALIASES[unit].all()
		}

	def recognize(self, text: str) -> CurrencyUnit | None:
		text = text.strip().lower()
		for rule in self._rules:
			if rule.matches(text):
				return rule.unit
		return None

	def parse(self, raw: str) -> tuple[Decimal, CurrencyUnit]:
		text = raw.strip().lower()

		unit = self.recognize(text)
		if unit is None:
			raise ParseError(raw, INVALID_UNIT_MESSAGE)

		remainder = _strip_aliases(text, UNIT_ALIASES[unit])
		return _parse_number(raw, remainder), unit

	def resolve_unit(self, token: str) -> CurrencyUnit | None:
		"""Exact, case-insensitive lookup of a bare target token such as 'yen' or '£'."""
		return self._lookup.get(token.strip().lower())


def resolve_unit(token: str, units: Iterable[CurrencyUnit] | None = None) -> CurrencyUnit | None:
	return AmountParser(units).resolve_unit(token)
