import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_conversion_service, get_rate_service
from api.main import create_app
from application.services import ConversionService, ProviderPipeline, RateService
from config.settings import Settings
from infrastructure.cache.memory_cache import MemoryCache


@pytest.fixture
def settings():
    return Settings(_env_file=None, RATE_LIMIT_PER_MINUTE=0)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def build_services():
    """Wire real services around the given provider chains."""
    def factory(latest=(), timeseries=(), cache=None):
        rate_service = RateService(
            cache=cache or MemoryCache(),
            latest_pipeline=ProviderPipeline('latest', list(latest)),
            timeseries_pipeline=ProviderPipeline('timeseries', list(timeseries)),
        )
        return rate_service, ConversionService(rate_service)
    return factory


@pytest.fixture
def client_for(app):
    """Create a test client whose routes use the given services."""
    def factory(rate_service, conversion_service=None, raise_server_exceptions=True):
        app.dependency_overrides[get_rate_service] = lambda: rate_service
        app.dependency_overrides[get_conversion_service] = lambda: (
            conversion_service or ConversionService(rate_service)
        )
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    yield factory
    app.dependency_overrides.clear()
