from pydantic import BaseModel, ConfigDict, Field


class RatesResponse(BaseModel):
	success: bool = True
	base: str = Field(..., description='Base currency code')
	date: str = Field(..., description='Date the rates apply to (YYYY-MM-DD)')
	rates: dict[str, float] = Field(..., description='Rates keyed by target currency code')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'success': True,
				'base': 'USD',
				'date': '2025-01-01',
				'rates': {'EUR': 0.9, 'JPY': 150},
			}
		}
	)


class ConversionResponse(BaseModel):
	success: bool = True
	from_currency: str = Field(..., alias='from', description='Source currency code')
	to_currency: str = Field(..., alias='to', description='Target currency code')
	amount: float = Field(..., description='Original amount requested')
	rate: float = Field(..., description='Exchange rate used for conversion')
	result: float = Field(..., description='Converted amount')
	as_of: str | None = Field(None, alias='asOf', description='Date of the underlying rates')

	model_config = ConfigDict(
		populate_by_name=True,
		json_schema_extra={
			'example': {
				'success': True,
				'from': 'EUR',
				'to': 'JPY',
				'amount': 10,
				'rate': 166.6667,
				'result': 1666.667,
				'asOf': '2025-01-01',
			}
		},
	)


class TimeSeriesResponse(BaseModel):
	success: bool = True
	base: str = Field(..., description='Base currency code')
	start_date: str = Field(..., description='First date of the range')
	end_date: str = Field(..., description='Last date of the range')
	series: dict[str, dict[str, float]] = Field(..., description='Rates keyed by date, then currency')


class HealthResponse(BaseModel):
	status: str = Field('ok', description='Always ok while the process is serving')
	uptime: float = Field(..., description='Seconds since startup')


class ErrorResponse(BaseModel):
	success: bool = False
	error: str = Field(..., description='Human-readable error message')
