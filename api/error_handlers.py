import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.exceptions.currency import (
	AllProvidersFailedError,
	CacheError,
	CurrencyException,
	ProviderError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(CacheError)
	async def cache_error_handler(request: Request, exc: CacheError):
		logger.error(f'Cache error on {request.url.path}: {exc}', exc_info=exc)
		return JSONResponse(status_code=500, content={'error': 'Internal error'})

	@app.exception_handler(CurrencyException)
	async def currency_error_handler(request: Request, exc: CurrencyException):
		if isinstance(exc, ProviderError | AllProvidersFailedError):
			logger.error(f'Provider error on {request.url.path}: {exc}')
		return JSONResponse(status_code=400, content={'success': False, 'error': str(exc)})

	@app.exception_handler(StarletteHTTPException)
	async def http_exception_handler(request: Request, exc: StarletteHTTPException):
		if exc.status_code == 404:
			return JSONResponse(status_code=404, content={'error': 'Not found'})
		return JSONResponse(
			status_code=exc.status_code, content={'error': exc.detail}, headers=exc.headers
		)

	@app.exception_handler(Exception)
	async def global_exception_handler(request: Request, exc: Exception):
		logger.error(f'Unhandled exception: {exc}', exc_info=exc)
		return JSONResponse(status_code=500, content={'error': 'Internal error'})
