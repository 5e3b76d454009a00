import httpx

from domain.models.currency import RateSet
from infrastructure.providers.base import BaseRateProvider, today


class ECBProvider(BaseRateProvider):
	"""European Central Bank reference rates, served through the Frankfurter API."""

	BASE_URL = 'https://api.frankfurter.app'
	NATIVE_BASE = 'EUR'

	def __init__(
		self, base_url: str = BASE_URL, client: httpx.AsyncClient | None = None, timeout: float = 20
	):
		super().__init__(base_url, client=client, timeout=timeout)

	@property
	def name(self) -> str:
		return 'ecb'

	async def fetch_latest(self, base: str, symbols: list[str]) -> RateSet:
		data = await self._request('latest', {'from': self.NATIVE_BASE})
		native_base = str(data.get('base') or self.NATIVE_BASE).upper()

		return RateSet(
			base=base,
			date=self._parse_date(data.get('date'), today()),
			rates=self._normalize_rates(data.get('rates'), native_base, base, symbols),
			provider=self.name,
		)
