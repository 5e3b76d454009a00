from typing import Any

import httpx

from domain.models.currency import RateSet, TimeSeries
from infrastructure.providers.base import BaseRateProvider, today


class ExchangeRateHostProvider(BaseRateProvider):
	BASE_URL = 'https://api.exchangerate.host'

	def __init__(
		self,
		access_key: str = '',
		base_url: str = BASE_URL,
		client: httpx.AsyncClient | None = None,
		timeout: float = 20,
	):
		super().__init__(base_url, client=client, timeout=timeout)
		self.access_key = access_key

	@property
	def name(self) -> str:
		return 'exchangeratehost'

	async def _fetch(self, endpoint: str, params: dict[str, Any]) -> dict:
		if self.access_key:
			params = {'access_key': self.access_key, **params}

		data = await self._request(endpoint, params)
		if data.get('success') is False:
			error = data.get('error')
			info = error.get('info') or error.get('type') if isinstance(error, dict) else error
			raise self._error(f'API error: {info or "Unknown error"}')
		return data

	async def fetch_latest(self, base: str, symbols: list[str]) -> RateSet:
		data = await self._fetch('latest', {'base': base, 'symbols': ','.join(symbols) or None})
		native_base = str(data.get('base') or base).upper()

		return RateSet(
			base=base,
			date=self._parse_date(data.get('date'), today()),
			rates=self._normalize_rates(data.get('rates'), native_base, base, symbols),
			provider=self.name,
		)

	async def fetch_timeseries(
		self, base: str, symbols: list[str], start: str, end: str
	) -> TimeSeries:
		data = await self._fetch(
			'timeseries',
			{
				'base': base,
				'symbols': ','.join(symbols) or None,
				'start_date': start,
				'end_date': end,
			},
		)
		native_base = str(data.get('base') or base).upper()

		return TimeSeries(
			base=base,
			start_date=self._parse_date(data.get('start_date'), start),
			end_date=self._parse_date(data.get('end_date'), end),
			series=self._normalize_series(data.get('rates'), native_base, base, symbols),
			provider=self.name,
		)
