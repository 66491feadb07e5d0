# src/services/trip_tracking/app.py
"""
FastAPI приложение Trip Tracking.

Endpoints:
- POST  /api/trips - создать поездку
- PATCH /api/trips/{tripId}/start - начать поездку
- POST  /api/trips/{tripId}/location - отправить координаты водителя
- GET   /api/trips/{tripId}/location - последняя позиция водителя
- GET   /api/trips/{tripId} - детали поездки
- PATCH /api/trips/{tripId}/complete - завершить поездку
- PATCH /api/trips/{tripId}/cancel - отменить поездку
- GET   /health - состояние сервиса и Redis
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.common.exceptions import TripTrackingError
from src.common.logger import log_error, log_info, log_warning
from src.config.loader import Settings
from src.infra.redis_client import RedisClient
from src.services.trip_tracking.location_cache import LocationCache
from src.services.trip_tracking.registry import TripRegistry
from src.services.trip_tracking.routes import router
from src.services.trip_tracking.state_machine import TripStateMachine
from src.shared.models.common import HealthStatus

SERVICE_NAME = "trip_tracking"


def _format_validation_error(exc: RequestValidationError) -> str:
    """Сводит ошибки pydantic в одну строку: 'body.from.latitude: Field required; ...'."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts) or "Invalid request"


# === LIFESPAN ===

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Жизненный цикл: подключение к Redis до приёма запросов, закрытие при остановке."""
    store: RedisClient = app.state.store
    await store.connect()

    await log_info(
        "Trip Tracking API готов к приёму запросов",
        extra={"routes": [f"{','.join(sorted(r.methods))} /api{r.path}" for r in router.routes]},
    )

    try:
        yield
    finally:
        await log_info("Остановка Trip Tracking API...")
        await store.disconnect()


# === APP ===

def create_app(store: RedisClient | None = None, app_settings: Settings | None = None) -> FastAPI:
    """
    Собирает приложение.

    Args:
        store: Клиент хранилища (по умолчанию Redis из настроек; в тестах — подмена)
        app_settings: Настройки (по умолчанию глобальные)
    """
    if app_settings is None:
        from src.config import settings as app_settings

    if store is None:
        store = RedisClient.from_settings(app_settings.redis)

    app = FastAPI(
        title="Trip Tracking API",
        description="Отслеживание поездки и последней позиции водителя в реальном времени.",
        version=app_settings.system.VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.store = store
    app.state.started_at = time.monotonic()
    app.state.trip_registry = TripRegistry(
        store,
        trip_ttl=app_settings.redis_ttl.TRIP_TTL,
        state_machine=TripStateMachine(strict=app_settings.trips.STRICT_TRANSITIONS),
    )
    app.state.location_cache = LocationCache(
        store,
        location_ttl=app_settings.redis_ttl.LOCATION_TTL,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.server.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # === ERROR HANDLERS ===

    @app.exception_handler(TripTrackingError)
    async def trip_tracking_error_handler(request: Request, exc: TripTrackingError) -> JSONResponse:
        if exc.status_code >= 500:
            await log_error(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _format_validation_error(exc)
        await log_warning(f"{request.method} {request.url.path}: {message}")
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        await log_error(f"{request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    # === HEALTH CHECK ===

    @app.get("/health", response_model=HealthStatus, tags=["Health"])
    async def health_check() -> HealthStatus:
        """Проверка здоровья сервиса и подключения к Redis."""
        redis_ok = await app.state.store.health_check()
        return HealthStatus(
            service=SERVICE_NAME,
            status="healthy" if redis_ok else "degraded",
            version=app_settings.system.VERSION,
            uptime_seconds=round(time.monotonic() - app.state.started_at, 3),
            dependencies={"redis": "healthy" if redis_ok else "unhealthy"},
        )

    app.include_router(router, prefix="/api")

    return app


app = create_app()
