from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Application
	APP_NAME: str = 'FX Rates API'
	DEBUG: bool = False
	HOST: str = '0.0.0.0'
	PORT: int = 3000

	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	# Cache
	CACHE_BACKEND: Literal['memory', 'redis'] = 'memory'
	REDIS_URL: str = 'redis://localhost:6379'
	CACHE_MAX_ENTRIES: int = 5000
	CACHE_TTL_SEC: int = 120
	HIST_TTL_SEC: int = 3600

	REQUEST_TIMEOUT_MS: int = 20000
	RATE_LIMIT_PER_MINUTE: int = 90

	# Providers
	EXCHANGERATE_HOST_URL: str = 'https://api.exchangerate.host'
	EXCHANGERATE_HOST_ACCESS_KEY: str = ''
	OPENEXCHANGE_URL: str = 'https://openexchangerates.org/api'
	OPENEXCHANGE_APP_ID: str = ''
	FRANKFURTER_URL: str = 'https://api.frankfurter.app'

	LATEST_PROVIDERS: list[str] = ['exchangeratehost', 'openexchange', 'ecb']
	TIMESERIES_PROVIDERS: list[str] = ['frankfurter', 'exchangeratehost']

	# Conversion
	PRIMARY_BASES: list[str] = ['USD', 'EUR', 'JPY', 'GBP']
	DEFAULT_PIVOT: str = 'USD'

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	@property
	def request_timeout(self) -> float:
		return self.REQUEST_TIMEOUT_MS / 1000


@lru_cache
def get_settings() -> Settings:
	return Settings()
