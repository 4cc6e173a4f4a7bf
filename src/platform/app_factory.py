"""
Shared FastAPI App Factory

Production (`src.main`) and the test app build the same application here;
only the lifespan and the title differ.
"""

from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
import time
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.metrics.booking_metrics import metrics
from src.service.booking.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.booking.driving_adapter.http_controller.event_controller import (
    router as event_router,
)


_UNMATCHED_ROUTE = 'unmatched'


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Event Booking System',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    app.middleware('http')(_record_request_latency)

    register_exception_handlers(app)

    app.include_router(event_router, prefix='/api/event', tags=['event'])
    app.include_router(booking_router, prefix='/api/booking', tags=['booking'])

    _register_operational_endpoints(app)

    return app


async def _record_request_latency(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    started = time.perf_counter()
    response = await call_next(request)

    # Route template keeps label cardinality bounded (/api/event/{event_id}, not /api/event/42)
    route = request.scope.get('route')
    metrics.record_http_request(
        method=request.method,
        route=getattr(route, 'path', _UNMATCHED_ROUTE),
        status=response.status_code,
        duration=time.perf_counter() - started,
    )
    return response


def _register_operational_endpoints(app: FastAPI) -> None:
    @app.get('/health')
    async def health_check() -> dict[str, str]:
        """Liveness check; also reports which storage and notifier backends are configured."""
        return {
            'status': 'healthy',
            'service': 'Event Booking System',
            'storage_backend': settings.STORAGE_BACKEND,
            'notification_backend': settings.NOTIFICATION_BACKEND,
        }

    @app.get('/metrics', include_in_schema=False)
    async def get_metrics() -> PlainTextResponse:
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
