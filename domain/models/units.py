from dataclasses import dataclass
from enum import Enum


class CurrencyUnit(Enum):
	USD = ('USD', 'Dollar(s) [USD]')
	EUR = ('EUR', 'Euro(s) [EUR]')
	CAD = ('CAD', 'Canadian Dollar(s) [CAD]')
	RUB = ('RUB', 'Ruble(s) [RUB]')
	JPY = ('JPY', 'Yen [JPY]')
	AUD = ('AUD', 'Australian Dollar(s) [AUD]')
	AMD = ('AMD', 'Dram [AMD]')
	GBP = ('GBP', 'Pound(s) [GBP]')
	PKR = ('PKR', 'Rupee(s) [PKR]')

	def __init__(self, code: str, label: str):
		self.code = code
		self.label = label

	def __str__(self) -> str:
		return self.label

	@classmethod
	def from_code(cls, code: str) -> 'CurrencyUnit':
		try:
			return cls[code.strip().upper()]
		except KeyError as e:
			raise ValueError(f'Unsupported currency code: {code}') from e


@dataclass(frozen=True)
class UnitAliases:
	codes: tuple[str, ...]
	words: tuple[str, ...]
	symbols: tuple[str, ...]

	@property
	def suffixes(self) -> tuple[str, ...]:
		return self.codes + self.words

	def all(self) -> tuple[str, ...]:
		return self.codes + self.words + self.symbols


# Every alias is lowercase. Codes and words are matched at the end of the
# input, symbols at the start.
UNIT_ALIASES: dict[CurrencyUnit, UnitAliases] = {
	CurrencyUnit.USD: UnitAliases(
		codes=('usd',),
		words=('dollar', 'dollars', 'bucks'),
		symbols=('$',),
	),
	CurrencyUnit.EUR: UnitAliases(
		codes=('eur',),
		words=('euro', 'euros'),
		symbols=('€',),
	),
	CurrencyUnit.CAD: UnitAliases(
		codes=('cad',),
		words=('canadian dollar', 'canadian dollars'),
		symbols=('c$',),
	),
	CurrencyUnit.RUB: UnitAliases(
		codes=('rub',),
		words=('ruble', 'rubles', 'rouble', 'roubles'),
		symbols=('₽',),
	),
	CurrencyUnit.JPY: UnitAliases(
		codes=('jpy',),
		words=('yen',),
		symbols=('¥',),
	),
	CurrencyUnit.AUD: UnitAliases(
		codes=('aud',),
		words=('australian dollar', 'australian dollars'),
		symbols=('a$',),
	),
	CurrencyUnit.AMD: UnitAliases(
		codes=('amd',),
		words=('dram', 'drams'),
		symbols=('֏',),
	),
	CurrencyUnit.GBP: UnitAliases(
		codes=('gbp',),
		words=('pound', 'pounds', 'quid', 'sterling'),
		symbols=('£',),
	),
	CurrencyUnit.PKR: UnitAliases(
		codes=('pkr',),
		words=('pakistani rupee', 'pakistani rupees', 'rupee', 'rupees', 'rs'),
		symbols=('₨',),
	),
}
