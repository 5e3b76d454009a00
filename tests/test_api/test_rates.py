# nosec B101


from unittest.mock import AsyncMock, Mock

import httpx
from fastapi.testclient import TestClient

from api.main import create_app
from application.services import RateService
from config.settings import Settings
from domain.exceptions.currency import CacheError
from infrastructure.providers.exchangeratehost import ExchangeRateHostProvider


def test_rates_success(build_services, client_for, latest_provider, usd_rates):
    provider = latest_provider('exchangeratehost', result=usd_rates)
    rate_service, _ = build_services(latest=[provider])
    client = client_for(rate_service)

    response = client.get('/v1/rates', params={'base': 'usd', 'symbols': 'eur,jpy'})

    assert response.status_code == 200
    assert response.json() == {
        'success': True,
        'base': 'USD',
        'date': '2025-01-01',
        'rates': {'EUR': 0.9, 'JPY': 150},
    }
    provider.fetch_latest.assert_awaited_once_with('USD', ['EUR', 'JPY'])


def test_rates_default_base_is_usd(build_services, client_for, latest_provider, usd_rates):
    provider = latest_provider('exchangeratehost', result=usd_rates)
    rate_service, _ = build_services(latest=[provider])
    client = client_for(rate_service)

    response = client.get('/v1/rates')

    assert response.status_code == 200
    provider.fetch_latest.assert_awaited_once_with('USD', [])


def test_rates_repeated_request_uses_cache(build_services, client_for, latest_provider, usd_rates):
    provider = latest_provider('exchangeratehost', result=usd_rates)
    rate_service, _ = build_services(latest=[provider])
    client = client_for(rate_service)

    first = client.get('/v1/rates', params={'base': 'USD', 'symbols': 'EUR,JPY'})
    second = client.get('/v1/rates', params={'base': 'USD', 'symbols': 'JPY,EUR'})

    assert first.content == second.content
    assert provider.fetch_latest.await_count == 1


def test_rates_fallback_provider_answers(build_services, client_for, latest_provider, usd_rates):
    rate_service, _ = build_services(latest=[
        latest_provider('exchangeratehost', error='HTTP error 503: unavailable'),
        latest_provider('openexchange', result=usd_rates),
    ])
    client = client_for(rate_service)

    response = client.get('/v1/rates', params={'base': 'USD'})

    assert response.status_code == 200
    assert response.json()['rates'] == {'EUR': 0.9, 'JPY': 150}


def test_rates_invalid_base(build_services, client_for):
    rate_service, _ = build_services()
    client = client_for(rate_service)

    response = client.get('/v1/rates', params={'base': 'DOLLAR'})

    assert response.status_code == 400
    data = response.json()
    assert data['success'] is False
    assert 'Invalid currency code' in data['error']


def test_rates_invalid_symbol(build_services, client_for):
    rate_service, _ = build_services()
    client = client_for(rate_service)

    response = client.get('/v1/rates', params={'symbols': 'EUR,E1'})

    assert response.status_code == 400


def test_rates_all_providers_failed(build_services, client_for, latest_provider):
    rate_service, _ = build_services(latest=[
        latest_provider('exchangeratehost', error='bad payload: missing rates mapping'),
        latest_provider('ecb', error='request timed out after 20.0s'),
    ])
    client = client_for(rate_service)

    response = client.get('/v1/rates')

    assert response.status_code == 400
    assert response.json() == {
        'success': False,
        'error': 'All providers failed: exchangeratehost: bad payload: missing rates mapping'
                 ' | ecb: request timed out after 20.0s',
    }


def test_rates_cache_failure_is_internal_error(build_services, client_for, latest_provider, usd_rates):
    cache = AsyncMock()
    cache.get.side_effect = CacheError('Redis get failed for fx:latest:USD:*: Connection refused')
    rate_service, _ = build_services(latest=[latest_provider('ecb', result=usd_rates)], cache=cache)
    client = client_for(rate_service)

    response = client.get('/v1/rates')

    assert response.status_code == 500
    assert response.json() == {'error': 'Internal error'}


def test_unexpected_failure_is_internal_error(client_for):
    rate_service = AsyncMock(spec=RateService)
    rate_service.get_latest_rates.side_effect = RuntimeError('database exploded')
    client = client_for(rate_service, raise_server_exceptions=False)

    response = client.get('/v1/rates')

    assert response.status_code == 500
    assert response.json() == {'error': 'Internal error'}


def test_unknown_route_returns_not_found(app):
    client = TestClient(app)

    response = client.get('/v2/whatever')

    assert response.status_code == 404
    assert response.json() == {'error': 'Not found'}


def test_rate_limit_per_client():
    app = create_app(Settings(_env_file=None, RATE_LIMIT_PER_MINUTE=2))
    client = TestClient(app)

    assert client.get('/health').status_code == 200
    assert client.get('/health').status_code == 200
    assert client.get('/health').status_code == 429


def test_rates_malformed_date_falls_back_to_next_provider(build_services, client_for, latest_provider, usd_rates):
    upstream = AsyncMock(spec=httpx.AsyncClient)
    upstream_response = Mock()
    upstream_response.json.return_value = {'base': 'USD', 'date': 20250101, 'rates': {'EUR': 0.9}}
    upstream_response.raise_for_status = Mock()
    upstream.get.return_value = upstream_response
    fallback = latest_provider('openexchange', result=usd_rates)
    rate_service, _ = build_services(latest=[ExchangeRateHostProvider(client=upstream), fallback])
    client = client_for(rate_service)

    first = client.get('/v1/rates', params={'base': 'USD'})
    second = client.get('/v1/rates', params={'base': 'USD'})

    assert first.status_code == 200
    assert first.json()['date'] == '2025-01-01'
    assert second.json() == first.json()
    fallback.fetch_latest.assert_awaited_once_with('USD', [])


def test_rates_empty_base_defaults_to_usd(build_services, client_for, latest_provider, usd_rates):
    provider = latest_provider('exchangeratehost', result=usd_rates)
    rate_service, _ = build_services(latest=[provider])
    client = client_for(rate_service)

    response = client.get('/v1/rates', params={'base': '', 'symbols': 'EUR'})

    assert response.status_code == 200
    provider.fetch_latest.assert_awaited_once_with('USD', ['EUR'])
