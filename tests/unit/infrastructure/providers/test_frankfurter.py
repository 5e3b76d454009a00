# nosec B101


from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from domain.exceptions.currency import ProviderError
from infrastructure.providers.frankfurter import FrankfurterProvider


def make_client(payload) -> AsyncMock:
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_response = Mock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status = Mock()
    mock_client.get.return_value = mock_response
    return mock_client


@pytest.mark.asyncio
async def test_fetch_timeseries_success():
    mock_client = make_client({
        'amount': 1.0,
        'base': 'USD',
        'start_date': '2025-01-02',
        'end_date': '2025-01-03',
        'rates': {
            '2025-01-02': {'EUR': 0.96, 'JPY': 157.2},
            '2025-01-03': {'EUR': 0.97, 'JPY': 157.8}
        }
    })
    provider = FrankfurterProvider(client=mock_client)

    result = await provider.fetch_timeseries('USD', ['EUR', 'JPY'], '2025-01-01', '2025-01-03')

    assert result.base == 'USD'
    assert result.start_date == '2025-01-02'
    assert result.end_date == '2025-01-03'
    assert result.series['2025-01-03'] == {'EUR': 0.97, 'JPY': 157.8}
    assert result.provider == 'frankfurter'

    call_args = mock_client.get.call_args
    assert call_args[0][0] == 'https://api.frankfurter.app/2025-01-01..2025-01-03'
    assert call_args[1]['params'] == {'from': 'USD', 'to': 'EUR,JPY'}


@pytest.mark.asyncio
async def test_fetch_timeseries_without_symbols_omits_to_param():
    mock_client = make_client({'base': 'USD', 'rates': {}})
    provider = FrankfurterProvider(client=mock_client)

    result = await provider.fetch_timeseries('USD', [], '2025-01-04', '2025-01-05')

    assert mock_client.get.call_args[1]['params'] == {'from': 'USD'}
    assert result.start_date == '2025-01-04'
    assert result.end_date == '2025-01-05'
    assert result.series == {}


@pytest.mark.asyncio
async def test_fetch_timeseries_not_found():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    error_response = Mock()
    error_response.status_code = 404
    error_response.text = '{"message":"not found"}'
    mock_client.get.side_effect = httpx.HTTPStatusError(
        'Not found',
        request=Mock(),
        response=error_response
    )
    provider = FrankfurterProvider(client=mock_client)

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_timeseries('XXX', [], '2025-01-01', '2025-01-03')

    assert 'HTTP error 404' in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_timeseries_invalid_start_date_is_bad_payload():
    mock_client = make_client({
        'base': 'USD',
        'start_date': 20250102,
        'end_date': '2025-01-03',
        'rates': {'2025-01-03': {'EUR': 0.97}}
    })
    provider = FrankfurterProvider(client=mock_client)

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_timeseries('USD', ['EUR'], '2025-01-01', '2025-01-03')

    assert 'invalid date 20250102' in str(exc_info.value)
