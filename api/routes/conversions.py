from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_conversion_service, get_rate_cache
from api.schemas import (
	ConversionDetailResponse,
	CurrencyConversionResponse,
	CurrencyInfo,
	RateSnapshotResponse,
	SupportedCurrenciesResponse,
)
from application.services import ConversionService
from domain.models.units import UNIT_ALIASES
from infrastructure.cache.rate_cache import RateCache

router = APIRouter(prefix='/api/conversions', tags=['conversions'])


@router.get(
	'/currency',
	response_model=CurrencyConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert from one currency to another',
)
async def convert_currency(
	input: Annotated[
		str,
		Query(min_length=1, max_length=100, description="The input currency (e.g. '$74', '80.90 CAD', '20 quid')"),
	],
	target: Annotated[
		str,
		Query(min_length=1, max_length=50, description="The currency to convert to (e.g. 'rubles', 'usd', 'yen')"),
	],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> CurrencyConversionResponse:
	result = await service.convert_currency(input, target)
	return CurrencyConversionResponse(input=input, target=target, result=result)


@router.get(
	'/currency/details',
	response_model=ConversionDetailResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert and return the structured result',
)
async def convert_currency_details(
	input: Annotated[str, Query(min_length=1, max_length=100)],
	target: Annotated[str, Query(min_length=1, max_length=50)],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ConversionDetailResponse:
	result = await service.convert(input, target)
	return ConversionDetailResponse(
		original=result.original,
		converted=result.converted,
		from_currency=result.source.unit.code,
		to_currency=result.target.unit.code,
		amount_usd=result.source.amount_usd,
		converted_amount=round(result.converted_amount, 2),
		rates_fetched_at=result.rates_fetched_at,
	)


@router.get(
	'/currencies',
	response_model=SupportedCurrenciesResponse,
	status_code=status.HTTP_200_OK,
	summary='List supported currencies and their aliases',
)
async def get_supported_currencies(
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> SupportedCurrenciesResponse:
	return SupportedCurrenciesResponse(
		currencies=[
			CurrencyInfo(code=unit.code, label=unit.label, aliases=list(UNIT_ALIASES[unit].all()))
			for unit in service.supported_units()
		]
	)


@router.get(
	'/rates',
	response_model=RateSnapshotResponse,
	status_code=status.HTTP_200_OK,
	summary='Current rate snapshot',
)
async def get_rates(
	cache: Annotated[RateCache, Depends(get_rate_cache)],
) -> RateSnapshotResponse:
	return _snapshot_response(cache)


@router.post(
	'/rates/refresh',
	response_model=RateSnapshotResponse,
	status_code=status.HTTP_200_OK,
	summary='Fetch new rates now',
)
async def refresh_rates(
	cache: Annotated[RateCache, Depends(get_rate_cache)],
) -> RateSnapshotResponse:
	await cache.refresh()
	return _snapshot_response(cache)


def _snapshot_response(cache: RateCache) -> RateSnapshotResponse:
	snapshot = cache.current()
	return RateSnapshotResponse(
		source=snapshot.source,
		fetched_at=snapshot.fetched_at,
		age_seconds=cache.age().total_seconds(),
		stale=cache.is_stale(),
		rates={unit.code: rate for unit, rate in snapshot.rates.items()},
	)
