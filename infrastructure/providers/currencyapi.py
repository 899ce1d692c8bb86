from collections.abc import Mapping

from pydantic import BaseModel, ValidationError

from domain.exceptions.currency import JsonParseError
from infrastructure.providers.base import HTTPRateProvider


class CurrencyAPIRate(BaseModel):
	code: str
	value: float


class CurrencyAPIMeta(BaseModel):
	last_updated_at: str


class CurrencyAPIResponse(BaseModel):
	meta: CurrencyAPIMeta
	data: dict[str, CurrencyAPIRate]


class CurrencyAPIProvider(HTTPRateProvider):
	BASE_URL = 'https://api.currencyapi.com/v3'

	@property
	def name(self) -> str:
		return 'currencyapi.com'

	async def _fetch_values(self) -> Mapping[str, float]:
		data = await self._get_json(
			'latest', {'currencies': self.currency_codes}, headers={'apikey': self.api_key}
		)

		if 'error' in data or 'errors' in data:
			message = data.get('message') or data.get('error') or 'Unknown error'
			raise JsonParseError(f'CurrencyAPI error: {message}')

		try:
			parsed = CurrencyAPIResponse.model_validate(data)
		except ValidationError as e:
			raise JsonParseError(
				f'CurrencyAPI response has unexpected shape ({e.error_count()} errors)'
			) from e

		return {code: info.value for code, info in parsed.data.items()}
