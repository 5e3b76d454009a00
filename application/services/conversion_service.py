import logging
import math
import re
from collections.abc import Iterable
from typing import Any

from application.services.rate_service import RateService
from domain.currency_codes import normalize_code
from domain.exceptions.currency import InvalidAmountError, MissingRateError
from domain.models.currency import ConversionResult, RateSet

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_BASES = ('USD', 'EUR', 'JPY', 'GBP')

# Plain decimal or exponent notation; non-finite words are caught after parsing.
_AMOUNT_PATTERN = re.compile(
	r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|[+-]?(?:inf|infinity|nan)',
	re.IGNORECASE | re.ASCII,
)


class ConversionService:
	def __init__(
		self,
		rate_service: RateService,
		primary_bases: Iterable[str] = DEFAULT_PRIMARY_BASES,
		default_pivot: str = 'USD',
	):
		self.rate_service = rate_service
		self.primary_bases = frozenset(normalize_code(code) for code in primary_bases)
		self.default_pivot = normalize_code(default_pivot)

	async def convert(self, from_currency: str, to_currency: str, amount: Any) -> ConversionResult:
		from_currency = normalize_code(from_currency)
		to_currency = normalize_code(to_currency)
		value = self.parse_amount(amount)

		if from_currency == to_currency:
			return ConversionResult(
				from_currency=from_currency,
				to_currency=to_currency,
				amount=value,
				rate=1.0,
				result=value,
			)

		pivot = self.choose_pivot(from_currency)
		rate_set = await self.rate_service.get_latest_rates(pivot, [from_currency, to_currency])

		if pivot == from_currency:
			rate = self._rate_for(rate_set, to_currency)
		else:
			rate = (1 / self._rate_for(rate_set, from_currency)) * self._rate_for(rate_set, to_currency)

		logger.debug(f'Converted {from_currency}->{to_currency} via {pivot} at {rate}')
		return ConversionResult(
			from_currency=from_currency,
			to_currency=to_currency,
			amount=value,
			rate=rate,
			result=value * rate,
			as_of=rate_set.date,
		)

	def choose_pivot(self, from_currency: str) -> str:
		"""Base to fetch rates through: the source itself when it is primary, else the default pivot."""
		if from_currency in self.primary_bases:
			return from_currency
		if self.default_pivot in self.primary_bases:
			return self.default_pivot
		return from_currency

	@staticmethod
	def parse_amount(amount: Any) -> float:
		if amount is None or isinstance(amount, bool):
			raise InvalidAmountError('Amount must be a number')
		if isinstance(amount, str):
			amount = amount.strip()
			if not _AMOUNT_PATTERN.fullmatch(amount):
				raise InvalidAmountError('Amount must be a number')
		try:
			value = float(amount)
		except (TypeError, ValueError) as e:
			raise InvalidAmountError('Amount must be a number') from e

		if not math.isfinite(value):
			raise InvalidAmountError('Amount must be a finite number')
		return value

	@staticmethod
	def _rate_for(rate_set: RateSet, code: str) -> float:
		if code == rate_set.base:
			return 1.0
		rate = rate_set.rates.get(code)
		if not rate:
			raise MissingRateError(f'Missing rate for {code} against {rate_set.base}')
		return rate
