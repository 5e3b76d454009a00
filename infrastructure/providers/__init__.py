from .base import BaseRateProvider, LatestRatesProvider, TimeSeriesProvider
from .ecb import ECBProvider
from .exchangeratehost import ExchangeRateHostProvider
from .frankfurter import FrankfurterProvider
from .openexchange import OpenExchangeProvider

__all__ = [
	'BaseRateProvider',
	'ECBProvider',
	'ExchangeRateHostProvider',
	'FrankfurterProvider',
	'LatestRatesProvider',
	'OpenExchangeProvider',
	'TimeSeriesProvider',
]
