import json
from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from domain.models.units import CurrencyUnit


class Settings(BaseSettings):
	# Application
	APP_NAME: str = 'Currency Conversions API'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_DIRECTORY: str | None = None

	# Rate source
	RATE_PROVIDER: str = 'currencyapi'
	CURRENCYAPI_API_KEY: str = ''
	OPENEXCHANGE_APP_ID: str = ''
	RATE_FETCH_TIMEOUT: float = Field(default=10, gt=0)
	RATE_FETCH_RETRIES: int = Field(default=3, ge=1)

	# Cache
	RATE_MAX_AGE_HOURS: float = Field(default=24, ge=0)
	SUPPORTED_CURRENCIES: Annotated[list[str], NoDecode] = [unit.code for unit in CurrencyUnit]

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	@field_validator('SUPPORTED_CURRENCIES', mode='before')
	@classmethod
	def split_currency_list(cls, v):
		if isinstance(v, str):
			v = v.strip()
			if v.startswith('['):
				return json.loads(v)
			return [code for code in v.split(',') if code.strip()]
		return v

	@field_validator('SUPPORTED_CURRENCIES')
	@classmethod
	def currencies_must_be_known(cls, v: list[str]) -> list[str]:
		codes = [CurrencyUnit.from_code(code).code for code in v]
		if CurrencyUnit.USD.code not in codes:
			codes.insert(0, CurrencyUnit.USD.code)
		return list(dict.fromkeys(codes))

	@field_validator('RATE_PROVIDER')
	@classmethod
	def lowercase_provider(cls, v: str) -> str:
		return v.strip().lower()

	@property
	def max_age(self) -> timedelta:
		return timedelta(hours=self.RATE_MAX_AGE_HOURS)

	@property
	def supported_units(self) -> list[CurrencyUnit]:
		return [CurrencyUnit.from_code(code) for code in self.SUPPORTED_CURRENCIES]


@lru_cache
def get_settings() -> Settings:
	return Settings()
