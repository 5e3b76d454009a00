import logging
from datetime import date

from application.services.provider_pipeline import ProviderPipeline
from domain.currency_codes import normalize_code
from domain.exceptions.currency import EmptyResultError, MissingDateRangeError
from domain.models.currency import RateSet, TimeSeries
from infrastructure.cache.base import CacheStore
from infrastructure.providers.base import LatestRatesProvider, TimeSeriesProvider

logger = logging.getLogger(__name__)


class RateService:
	def __init__(
		self,
		cache: CacheStore,
		latest_pipeline: ProviderPipeline[LatestRatesProvider],
		timeseries_pipeline: ProviderPipeline[TimeSeriesProvider],
		latest_ttl: int = 120,
		timeseries_ttl: int = 3600,
	):
		self.cache = cache
		self.latest_pipeline = latest_pipeline
		self.timeseries_pipeline = timeseries_pipeline
		self.latest_ttl = latest_ttl
		self.timeseries_ttl = timeseries_ttl

	@staticmethod
	def _symbols_key(symbols: list[str]) -> str:
		return ','.join(sorted(symbols)) or '*'

	def _latest_key(self, base: str, symbols: list[str]) -> str:
		return f'fx:latest:{base}:{self._symbols_key(symbols)}'

	def _timeseries_key(self, base: str, symbols: list[str], start: str, end: str) -> str:
		return f'fx:ts:{base}:{self._symbols_key(symbols)}:{start}:{end}'

	async def get_latest_rates(self, base: str, symbols: list[str] | None = None) -> RateSet:
		base = normalize_code(base)
		symbols = [normalize_code(symbol) for symbol in symbols or []]
		key = self._latest_key(base, symbols)

		cached = await self.cache.get(key)
		if cached is not None:
			logger.debug(f'Cache hit for {key}', extra={'cache_key': key})
			return RateSet.from_dict(cached)

		logger.debug(f'Cache miss for {key}', extra={'cache_key': key})
		result = await self.latest_pipeline.run(lambda provider: provider.fetch_latest(base, symbols))
		if not result.rates:
			raise EmptyResultError(f'No rates returned for {base}')

		await self.cache.set(key, result.to_dict(), self.latest_ttl)
		return result

	async def get_timeseries(
		self,
		base: str,
		symbols: list[str] | None,
		start: str | None,
		end: str | None,
	) -> TimeSeries:
		base = normalize_code(base)
		symbols = [normalize_code(symbol) for symbol in symbols or []]
		start, end = self._validate_range(start, end)
		key = self._timeseries_key(base, symbols, start, end)

		cached = await self.cache.get(key)
		if cached is not None:
			logger.debug(f'Cache hit for {key}', extra={'cache_key': key})
			return TimeSeries.from_dict(cached)

		logger.debug(f'Cache miss for {key}', extra={'cache_key': key})
		result = await self.timeseries_pipeline.run(
			lambda provider: provider.fetch_timeseries(base, symbols, start, end)
		)

		await self.cache.set(key, result.to_dict(), self.timeseries_ttl)
		return result

	@staticmethod
	def _validate_range(start: str | None, end: str | None) -> tuple[str, str]:
		if not start or not end:
			raise MissingDateRangeError('start and end are required (YYYY-MM-DD)')

		try:
			start_date = date.fromisoformat(start.strip())
			end_date = date.fromisoformat(end.strip())
		except ValueError as e:
			raise MissingDateRangeError('start and end must be dates formatted as YYYY-MM-DD') from e

		if start_date > end_date:
			raise MissingDateRangeError('start must not be after end')
		return start_date.isoformat(), end_date.isoformat()
