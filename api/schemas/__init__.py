from .responses import (
	ConversionResponse,
	ErrorResponse,
	HealthResponse,
	RatesResponse,
	TimeSeriesResponse,
)

__all__ = [
	'ConversionResponse',
	'ErrorResponse',
	'HealthResponse',
	'RatesResponse',
	'TimeSeriesResponse',
]
