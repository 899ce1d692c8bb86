from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class CurrencyConversionResponse(BaseModel):
	input: str = Field(..., description='Amount as typed by the user')
	target: str = Field(..., description='Requested target currency')
	result: str = Field(..., description='Rendered conversion or error message')

	model_config = {
		'json_schema_extra': {
			'example': {
				'input': '$45.9',
				'target': 'dram',
				'result': '45.90 Dollar(s) [USD] -> 18204.88 Dram [AMD]',
			}
		}
	}


class ConversionDetailResponse(BaseModel):
	original: str = Field(..., description='Input amount rendered in its own currency')
	converted: str = Field(..., description='Amount rendered in the target currency')
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	amount_usd: Decimal = Field(..., description='Amount normalized to USD')
	converted_amount: Decimal = Field(..., description='Amount in the target currency')
	rates_fetched_at: datetime = Field(..., description='When the rates used were fetched')


class CurrencyInfo(BaseModel):
	code: str
	label: str
	aliases: list[str]


class SupportedCurrenciesResponse(BaseModel):
	currencies: list[CurrencyInfo] = Field(description='Currencies accepted as input or target')


class RateSnapshotResponse(BaseModel):
	source: str = Field(..., description='Provider the rates came from')
	fetched_at: datetime = Field(..., description='When the snapshot was fetched')
	age_seconds: float = Field(..., description='Age of the snapshot')
	stale: bool = Field(..., description='Whether the snapshot is older than the max age')
	rates: dict[str, Decimal] = Field(..., description='Value of 1 USD in each currency')
