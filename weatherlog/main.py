from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from weatherlog.api import api_router
from weatherlog.api.routes import health
from weatherlog.core.config import Settings, settings as default_settings
from weatherlog.core.exceptions import BaseAppError
from weatherlog.core.logging import ROOT_LOGGER_NAME, setup_logging
from weatherlog.db.store import WeatherStore
from weatherlog.services.weather import OpenWeatherClient


def create_app(
        settings: Optional[Settings] = None,
        store: Optional[WeatherStore] = None,
        weather_client: Optional[OpenWeatherClient] = None,
) -> FastAPI:
    """
    Build the application.

    ``store`` and ``weather_client`` default to ones built from settings; pass
    your own to point the service at another database or provider.
    """
    settings = settings or default_settings
    logger = setup_logging(ROOT_LOGGER_NAME, settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store = store or WeatherStore(settings.DATABASE_URL)
        # A store that cannot be initialized is fatal: let the error stop startup
        app.state.store.initialize()
        app.state.weather_client = weather_client or OpenWeatherClient(
            api_key=settings.OPENWEATHER_API_KEY,
            weather_url=settings.OPENWEATHER_WEATHER_URL,
            geocoding_url=settings.OPENWEATHER_GEOCODING_URL,
            timeout=settings.HTTP_TIMEOUT,
        )
        if not settings.OPENWEATHER_API_KEY and weather_client is None:
            logger.warning("OPENWEATHER_API_KEY is not set; weather lookups will fail")

        logger.info(
            f"Server running at http://localhost:{settings.PORT}",
            extra={"environment": settings.ENVIRONMENT},
        )
        yield
        app.state.store.close()
        logger.info("Weather store closed")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Current weather lookups by coordinates or place name, with a per-location history.",
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = str(uuid.uuid4())
        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "client_ip": request.client.host if request.client else None,
            },
        )

        # Add request_id to request state for use in route handlers
        request.state.request_id = request_id

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Request-ID"] = request_id

        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(process_time * 1000),
            },
        )

        return response

    @app.exception_handler(BaseAppError)
    async def app_error_handler(request: Request, exc: BaseAppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled error",
            extra={"request_id": getattr(request.state, "request_id", None), "path": request.url.path},
        )
        return JSONResponse(status_code=500, content={"error": str(exc)})

    app.include_router(api_router, prefix="/api")
    app.include_router(health.router)

    # Front-end page and its assets; mounted last so API routes win
    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning("Static directory not found", extra={"static_dir": str(static_dir)})

    return app


app = create_app()
