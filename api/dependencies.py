import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from application.services import ConversionService, ProviderPipeline, RateService
from config.settings import Settings
from infrastructure.cache import CacheStore, MemoryCache, RedisCache
from infrastructure.providers import (
	BaseRateProvider,
	ECBProvider,
	ExchangeRateHostProvider,
	FrankfurterProvider,
	OpenExchangeProvider,
)

logger = logging.getLogger(__name__)


@dataclass
class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	cache: CacheStore
	providers: dict[str, BaseRateProvider]
	rate_service: RateService
	conversion_service: ConversionService


def build_cache(settings: Settings) -> CacheStore:
	if settings.CACHE_BACKEND == 'redis':
		logger.info('Using Redis cache')
		return RedisCache.from_url(settings.REDIS_URL)

	logger.info(f'Using in-memory cache (max {settings.CACHE_MAX_ENTRIES} entries)')
	return MemoryCache(max_entries=settings.CACHE_MAX_ENTRIES)


def build_providers(settings: Settings) -> dict[str, BaseRateProvider]:
	timeout = settings.request_timeout
	return {
		'exchangeratehost': ExchangeRateHostProvider(
			settings.EXCHANGERATE_HOST_ACCESS_KEY,
			base_url=settings.EXCHANGERATE_HOST_URL,
			timeout=timeout,
		),
		'openexchange': OpenExchangeProvider(
			settings.OPENEXCHANGE_APP_ID, base_url=settings.OPENEXCHANGE_URL, timeout=timeout
		),
		'ecb': ECBProvider(base_url=settings.FRANKFURTER_URL, timeout=timeout),
		'frankfurter': FrankfurterProvider(base_url=settings.FRANKFURTER_URL, timeout=timeout),
	}


def build_pipeline(
	operation: str, method: str, names: list[str], providers: dict[str, BaseRateProvider]
) -> ProviderPipeline:
	chain = []
	for name in names:
		provider = providers.get(name)
		if provider is None or not hasattr(provider, method):
			raise ValueError(f'Provider {name!r} does not support {operation}')
		chain.append(provider)

	logger.info(f'{operation} provider order: {", ".join(names)}')
	return ProviderPipeline(operation, chain)


def init_dependencies(settings: Settings) -> AppDependencies:
	"""Build all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')

	providers = build_providers(settings)
	cache = build_cache(settings)
	rate_service = RateService(
		cache=cache,
		latest_pipeline=build_pipeline('latest', 'fetch_latest', settings.LATEST_PROVIDERS, providers),
		timeseries_pipeline=build_pipeline(
			'timeseries', 'fetch_timeseries', settings.TIMESERIES_PROVIDERS, providers
		),
		latest_ttl=settings.CACHE_TTL_SEC,
		timeseries_ttl=settings.HIST_TTL_SEC,
	)
	conversion_service = ConversionService(
		rate_service,
		primary_bases=settings.PRIMARY_BASES,
		default_pivot=settings.DEFAULT_PIVOT,
	)

	logger.info('Dependencies initialized')
	return AppDependencies(
		cache=cache,
		providers=providers,
		rate_service=rate_service,
		conversion_service=conversion_service,
	)


async def cleanup_dependencies(deps: AppDependencies) -> None:
	logger.info('Cleaning up dependencies...')

	for provider in deps.providers.values():
		await provider.close()
	await deps.cache.close()

	logger.info('Cleanup complete')


def get_dependencies(request: Request) -> AppDependencies:
	deps = getattr(request.app.state, 'deps', None)
	if deps is None:
		raise RuntimeError('Dependencies not initialized')
	return deps


def get_rate_service(
	deps: Annotated[AppDependencies, Depends(get_dependencies)],
) -> RateService:
	return deps.rate_service


def get_conversion_service(
	deps: Annotated[AppDependencies, Depends(get_dependencies)],
) -> ConversionService:
	return deps.conversion_service
