from .conversion_service import ConversionService
from .provider_pipeline import ProviderPipeline
from .rate_service import RateService

__all__ = ['ConversionService', 'ProviderPipeline', 'RateService']
