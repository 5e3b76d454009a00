import httpx

from domain.models.currency import TimeSeries
from infrastructure.providers.base import BaseRateProvider


class FrankfurterProvider(BaseRateProvider):
	BASE_URL = 'https://api.frankfurter.app'

	def __init__(
		self, base_url: str = BASE_URL, client: httpx.AsyncClient | None = None, timeout: float = 20
	):
		super().__init__(base_url, client=client, timeout=timeout)

	@property
	def name(self) -> str:
		return 'frankfurter'

	async def fetch_timeseries(
		self, base: str, symbols: list[str], start: str, end: str
	) -> TimeSeries:
		data = await self._request(
			f'{start}..{end}', {'from': base, 'to': ','.join(symbols) or None}
		)
		native_base = str(data.get('base') or base).upper()

		return TimeSeries(
			base=base,
			start_date=self._parse_date(data.get('start_date'), start),
			end_date=self._parse_date(data.get('end_date'), end),
			series=self._normalize_series(data.get('rates'), native_base, base, symbols),
			provider=self.name,
		)
