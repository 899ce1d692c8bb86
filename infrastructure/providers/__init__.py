from collections.abc import Iterable

from config.settings import Settings
from domain.models.units import CurrencyUnit

from .base import ExchangeRateProvider, HTTPRateProvider
from .currencyapi import CurrencyAPIProvider
from .openexchange import OpenExchangeProvider

PROVIDERS: dict[str, type[HTTPRateProvider]] = {
	'currencyapi': CurrencyAPIProvider,
	'openexchange': OpenExchangeProvider,
}


def build_provider(
	name: str, settings: Settings, units: Iterable[CurrencyUnit] | None = None
) -> ExchangeRateProvider:
	provider_cls = PROVIDERS.get(name.lower())
	if provider_cls is None:
		raise ValueError(f"Unknown rate provider '{name}'. Expected one of: {', '.join(PROVIDERS)}")

	api_key = (
		settings.CURRENCYAPI_API_KEY if provider_cls is CurrencyAPIProvider else settings.OPENEXCHANGE_APP_ID
	)
	return provider_cls(
		api_key=api_key,
		units=units if units is not None else settings.supported_units,
		timeout=settings.RATE_FETCH_TIMEOUT,
		retry_attempts=settings.RATE_FETCH_RETRIES,
	)


__all__ = [
	'ExchangeRateProvider',
	'HTTPRateProvider',
	'CurrencyAPIProvider',
	'OpenExchangeProvider',
	'PROVIDERS',
	'build_provider',
]
