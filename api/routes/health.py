import time

from fastapi import APIRouter, Request

from api.schemas import HealthResponse

router = APIRouter(tags=['health'])


@router.get('/health', response_model=HealthResponse, summary='Liveness check')
async def health_check(request: Request) -> HealthResponse:
	"""Always 200 while the process is serving; reports seconds since startup."""
	started_at = getattr(request.app.state, 'started_at', time.monotonic())
	return HealthResponse(status='ok', uptime=round(time.monotonic() - started_at, 3))
