import math
import re
from abc import ABC, abstractmethod
from datetime import UTC, date, datetime
from typing import Any, Protocol

import httpx

from domain.exceptions.currency import ProviderError
from domain.models.currency import RateSet, TimeSeries

_DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}')


class LatestRatesProvider(Protocol):
	name: str

	async def fetch_latest(self, base: str, symbols: list[str]) -> RateSet:
		...


class TimeSeriesProvider(Protocol):
	name: str

	async def fetch_timeseries(
		self, base: str, symbols: list[str], start: str, end: str
	) -> TimeSeries:
		...


def pick(rates: dict[str, float], symbols: list[str]) -> dict[str, float]:
	"""Restrict rates to the requested symbols. Symbols the provider did not quote are skipped."""
	if not symbols:
		return dict(rates)
	return {code: rates[code] for code in symbols if code in rates}


def today() -> str:
	return datetime.now(UTC).date().isoformat()


class BaseRateProvider(ABC):
	"""A base class for rate providers, handling common HTTP and payload logic."""

	def __init__(self, base_url: str, client: httpx.AsyncClient | None = None, timeout: float = 20):
		self.base_url = base_url.rstrip('/')
		self.timeout = timeout
		self._client = client or httpx.AsyncClient(
			timeout=httpx.Timeout(timeout),
			headers={'accept': 'application/json'},
		)

	@property
	@abstractmethod
	def name(self) -> str:
		...

	def _error(self, message: str) -> ProviderError:
		return ProviderError(message, provider=self.name)

	async def _request(self, endpoint: str, params: dict[str, Any] | None = None) -> dict:
		"""Single GET with no retries. Every failure surfaces as ProviderError."""
		url = f'{self.base_url}/{endpoint}'
		query = {key: value for key, value in (params or {}).items() if value is not None}

		try:
			response = await self._client.get(url, params=query)
			response.raise_for_status()
			data = response.json()
		except httpx.HTTPStatusError as e:
			raise self._error(
				f'HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.TimeoutException as e:
			raise self._error(f'request timed out after {self.timeout}s') from e
		except httpx.RequestError as e:
			raise self._error(f'request failed: {e.__class__.__name__}') from e
		except ValueError as e:
			raise self._error(f'response parsing error: {e}') from e

		if not isinstance(data, dict):
			raise self._error('bad payload: expected a JSON object')
		return data

	def _parse_rates(self, raw: Any) -> dict[str, float]:
		if not isinstance(raw, dict):
			raise self._error('bad payload: missing rates mapping')

		rates: dict[str, float] = {}
		for code, value in raw.items():
			if isinstance(value, bool) or not isinstance(value, int | float):
				raise self._error(f'bad payload: non-numeric rate for {code}')
			value = float(value)
			if not math.isfinite(value) or value <= 0:
				raise self._error(f'bad payload: invalid rate {value} for {code}')
			rates[str(code).upper()] = value
		return rates

	def _parse_date(self, value: Any, default: str) -> str:
		"""Validate a YYYY-MM-DD payload field. Absent fields fall back to default."""
		if value is None or value == '':
			return default
		if not isinstance(value, str) or not _DATE_PATTERN.fullmatch(value):
			raise self._error(f'bad payload: invalid date {value!r}')
		try:
			return date.fromisoformat(value).isoformat()
		except ValueError as e:
			raise self._error(f'bad payload: invalid date {value!r}') from e

	def _rebase(self, rates: dict[str, float], native_base: str, base: str) -> dict[str, float]:
		"""Express a rate table quoted against native_base in terms of base."""
		if base == native_base:
			return {code: rate for code, rate in rates.items() if code != base}
		if base not in rates:
			raise self._error(f'cannot rebase to {base}')

		table = {native_base: 1.0, **rates}
		base_rate = table[base]
		return {code: rate / base_rate for code, rate in table.items() if code != base}

	def _normalize_rates(
		self, raw: Any, native_base: str, base: str, symbols: list[str]
	) -> dict[str, float]:
		return pick(self._rebase(self._parse_rates(raw), native_base, base), symbols)

	def _normalize_series(
		self, raw: Any, native_base: str, base: str, symbols: list[str]
	) -> dict[str, dict[str, float]]:
		if not isinstance(raw, dict):
			raise self._error('bad payload: missing series mapping')
		return {
			str(day): self._normalize_rates(day_rates, native_base, base, symbols)
			for day, day_rates in raw.items()
		}

	async def close(self) -> None:
		"""Cleanly close the HTTP client."""
		await self._client.aclose()
