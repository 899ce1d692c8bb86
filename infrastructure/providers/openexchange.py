from collections.abc import Mapping

from pydantic import BaseModel, ValidationError

from domain.exceptions.currency import JsonParseError
from infrastructure.providers.base import HTTPRateProvider


class OpenExchangeResponse(BaseModel):
	base: str
	timestamp: int | None = None
	rates: dict[str, float]


class OpenExchangeProvider(HTTPRateProvider):
	"""
	openexchangerates.org latest rates.

	The free plan only quotes against USD, which is the base the rest of the
	application expects, so any other base is rejected rather than rebased.
	"""

	BASE_URL = 'https://openexchangerates.org/api'

	@property
	def name(self) -> str:
		return 'OpenExchange'

	async def _fetch_values(self) -> Mapping[str, float]:
		data = await self._get_json(
			'latest.json', {'app_id': self.api_key, 'symbols': self.currency_codes}
		)

		if data.get('error'):
			description = data.get('description') or data.get('message') or 'Unknown error'
			raise JsonParseError(f'OpenExchange error: {description}')

		try:
			parsed = OpenExchangeResponse.model_validate(data)
		except ValidationError as e:
			raise JsonParseError(
				f'OpenExchange response has unexpected shape ({e.error_count()} errors)'
			) from e

		if parsed.base.upper() != 'USD':
			raise JsonParseError(f'OpenExchange quoted against {parsed.base}, expected USD')

		return parsed.rates
