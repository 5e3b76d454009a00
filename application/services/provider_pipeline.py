import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Generic, TypeVar

from domain.exceptions.currency import AllProvidersFailedError, ProviderError

logger = logging.getLogger(__name__)

P = TypeVar('P')
R = TypeVar('R')


class ProviderPipeline(Generic[P]):
	"""
	Ordered fallback chain over providers of one capability.

	Providers are tried one at a time in the configured order and the first
	successful result wins. A failing provider is never retried.
	"""

	def __init__(self, operation: str, providers: Sequence[P]):
		self.operation = operation
		self.providers = list(providers)

	@property
	def provider_names(self) -> list[str]:
		return [getattr(provider, 'name', type(provider).__name__) for provider in self.providers]

	async def run(self, call: Callable[[P], Awaitable[R]]) -> R:
		errors: list[str] = []

		for provider, name in zip(self.providers, self.provider_names, strict=True):
			try:
				result = await call(provider)
			except ProviderError as e:
				logger.warning(
					f'Provider {name} failed for {self.operation}: {e}',
					extra={'operation': self.operation, 'provider': name},
				)
				errors.append(f'{name}: {e}')
				continue

			if errors:
				logger.info(
					f'{self.operation} served by fallback provider {name}',
					extra={'operation': self.operation, 'provider': name},
				)
			return result

		logger.error(
			f'All providers failed for {self.operation}: {errors}', extra={'operation': self.operation}
		)
		raise AllProvidersFailedError(errors)
