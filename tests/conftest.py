from unittest.mock import AsyncMock

import pytest

from domain.exceptions.currency import ProviderError
from domain.models.currency import RateSet, TimeSeries


def _make_provider(name: str, method: str, result=None, error: str | None = None) -> AsyncMock:
    provider = AsyncMock()
    provider.name = name
    fetch = getattr(provider, method)
    if error is not None:
        fetch.side_effect = ProviderError(error, provider=name)
    else:
        fetch.return_value = result
    return provider


@pytest.fixture
def latest_provider():
    """Factory for mocked latest-rates providers."""
    def factory(name: str, result: RateSet | None = None, error: str | None = None) -> AsyncMock:
        return _make_provider(name, 'fetch_latest', result, error)
    return factory


@pytest.fixture
def timeseries_provider():
    """Factory for mocked time-series providers."""
    def factory(name: str, result: TimeSeries | None = None, error: str | None = None) -> AsyncMock:
        return _make_provider(name, 'fetch_timeseries', result, error)
    return factory


@pytest.fixture
def usd_rates():
    return RateSet(
        base='USD',
        date='2025-01-01',
        rates={'EUR': 0.9, 'JPY': 150.0},
        provider='exchangeratehost',
    )


@pytest.fixture
def usd_series():
    return TimeSeries(
        base='USD',
        start_date='2025-01-01',
        end_date='2025-01-03',
        series={
            '2025-01-02': {'EUR': 0.96, 'JPY': 157.2},
            '2025-01-03': {'EUR': 0.97, 'JPY': 157.8},
        },
        provider='frankfurter',
    )
