import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from api.dependencies import cleanup_dependencies, init_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import health, rates
from config.logging_config import setup_logging
from config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
	'X-Content-Type-Options': 'nosniff',
	'X-Frame-Options': 'SAMEORIGIN',
	'Referrer-Policy': 'no-referrer',
	'Strict-Transport-Security': 'max-age=15552000; includeSubDomains',
	'X-DNS-Prefetch-Control': 'off',
}


@asynccontextmanager
async def lifespan(app: FastAPI):
	settings: Settings = app.state.settings
	setup_logging(settings.LOG_LEVEL, json_format=settings.LOG_JSON)
	logger.info(f'Starting {settings.APP_NAME}...')

	app.state.deps = init_dependencies(settings)
	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies(app.state.deps)


def create_app(settings: Settings | None = None) -> FastAPI:
	settings = settings or get_settings()

	app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)
	app.state.settings = settings
	app.state.started_at = time.monotonic()

	app.state.limiter = Limiter(
		key_func=get_remote_address,
		default_limits=[f'{settings.RATE_LIMIT_PER_MINUTE}/minute'],
		enabled=settings.RATE_LIMIT_PER_MINUTE > 0,
	)
	app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
	app.add_middleware(SlowAPIMiddleware)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=['*'],
		allow_methods=['*'],
		allow_headers=['*'],
	)

	@app.middleware('http')
	async def security_headers(request: Request, call_next):
		response = await call_next(request)
		for header, value in SECURITY_HEADERS.items():
			response.headers.setdefault(header, value)
		return response

	@app.middleware('http')
	async def log_requests(request: Request, call_next):
		start_time = time.perf_counter()
		response = await call_next(request)
		duration_ms = (time.perf_counter() - start_time) * 1000
		logger.info(
			f'{request.method} {request.url.path} {response.status_code} ({duration_ms:.2f}ms)',
			extra={
				'method': request.method,
				'path': request.url.path,
				'status_code': response.status_code,
				'duration_ms': round(duration_ms, 2),
				'client_ip': request.client.host if request.client else None,
			},
		)
		return response

	app.include_router(health.router)
	app.include_router(rates.router)
	register_exception_handlers(app)

	return app


app = create_app()


if __name__ == '__main__':
	import uvicorn

	settings = get_settings()
	uvicorn.run('api.main:app', host=settings.HOST, port=settings.PORT, log_level='info')
