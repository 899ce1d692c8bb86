from .responses import (
	ConversionDetailResponse,
	CurrencyConversionResponse,
	CurrencyInfo,
	RateSnapshotResponse,
	SupportedCurrenciesResponse,
)

__all__ = [
	'ConversionDetailResponse',
	'CurrencyConversionResponse',
	'CurrencyInfo',
	'RateSnapshotResponse',
	'SupportedCurrenciesResponse',
]
