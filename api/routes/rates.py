from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_conversion_service, get_rate_service
from api.schemas import ConversionResponse, ErrorResponse, RatesResponse, TimeSeriesResponse
from application.services import ConversionService, RateService
from domain.currency_codes import normalize_code, parse_symbols

router = APIRouter(prefix='/v1', tags=['rates'])

ERROR_RESPONSES = {400: {'model': ErrorResponse, 'description': 'Invalid request or upstream failure'}}


@router.get(
	'/rates',
	response_model=RatesResponse,
	status_code=status.HTTP_200_OK,
	responses=ERROR_RESPONSES,
	summary='Latest exchange rates',
)
async def get_rates(
	service: Annotated[RateService, Depends(get_rate_service)],
	base: Annotated[str, Query(description='Base currency code')] = 'USD',
	symbols: Annotated[str, Query(description='Comma separated target currencies')] = '',
) -> RatesResponse:
	rate_set = await service.get_latest_rates(normalize_code(base or 'USD'), parse_symbols(symbols))
	return RatesResponse(base=rate_set.base, date=rate_set.date, rates=rate_set.rates)


@router.get(
	'/convert',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	responses=ERROR_RESPONSES,
	summary='Convert an amount between two currencies',
)
async def convert_currency(
	service: Annotated[ConversionService, Depends(get_conversion_service)],
	from_currency: Annotated[str | None, Query(alias='from')] = None,
	to_currency: Annotated[str | None, Query(alias='to')] = None,
	amount: Annotated[str | None, Query()] = None,
) -> ConversionResponse:
	result = await service.convert(from_currency, to_currency, amount)
	return ConversionResponse(
		from_currency=result.from_currency,
		to_currency=result.to_currency,
		amount=result.amount,
		rate=result.rate,
		result=result.result,
		as_of=result.as_of,
	)


@router.get(
	'/timeseries',
	response_model=TimeSeriesResponse,
	status_code=status.HTTP_200_OK,
	responses=ERROR_RESPONSES,
	summary='Historical rates over a date range',
)
async def get_timeseries(
	service: Annotated[RateService, Depends(get_rate_service)],
	base: Annotated[str, Query(description='Base currency code')] = 'USD',
	symbols: Annotated[str, Query(description='Comma separated target currencies')] = '',
	start: Annotated[str | None, Query(description='YYYY-MM-DD')] = None,
	end: Annotated[str | None, Query(description='YYYY-MM-DD')] = None,
) -> TimeSeriesResponse:
	series = await service.get_timeseries(
		normalize_code(base or 'USD'), parse_symbols(symbols), start, end
	)
	return TimeSeriesResponse(
		base=series.base,
		start_date=series.start_date,
		end_date=series.end_date,
		series=series.series,
	)
