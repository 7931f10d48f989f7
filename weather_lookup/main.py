import logging
import sys
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weather_lookup.api.routes import router
from weather_lookup.config.settings import Settings, settings
from weather_lookup.config.utils import get_config_summary
from weather_lookup.services.weather_service import create_weather_service
from weather_lookup.utils.exceptions import WeatherAPIError


def setup_logging(settings_obj: Settings) -> None:
    """Configure structured logging for the application."""

    log_level = getattr(logging, settings_obj.log_level.upper())

    if settings_obj.log_format == "json" and not settings_obj.is_development:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifespan - startup and shutdown events.
    """
    logger = structlog.get_logger(__name__)
    app_settings: Settings = app.state.settings

    logger.info(
        "Starting weather lookup service", **get_config_summary(app_settings)
    )

    try:
        app.state.weather_service = await create_weather_service(app_settings)
    except Exception as e:
        logger.error(
            "Failed to initialize weather service during startup", error=str(e)
        )
        raise

    health_status = await app.state.weather_service.health_check()
    if health_status["service"] != "healthy":
        logger.warning("Service startup health check failed", status=health_status)
    else:
        logger.info("Service startup health check passed")

    yield

    logger.info("Shutting down weather lookup service")
    await app.state.weather_service.cleanup()


def create_app(settings_obj: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app_settings = settings_obj or settings
    setup_logging(app_settings)

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="Current weather lookup by city and optional country code",
        docs_url="/docs" if app_settings.is_development else None,
        redoc_url="/redoc" if app_settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if app_settings.is_development else [],
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next) -> Response:
        """Log requests and add processing time headers."""
        logger = structlog.get_logger(__name__)

        start_time = time.time()
        request_id = f"req_{int(start_time * 1000000)}"

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        logger.info("Request started")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                process_time=time.time() - start_time,
            )
            raise

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "Request completed",
            status_code=response.status_code,
            process_time=process_time,
        )

        return response

    @app.exception_handler(WeatherAPIError)
    async def weather_api_error_handler(
        _request: Request, exc: WeatherAPIError
    ) -> JSONResponse:
        """Render domain errors as a typed JSON error body."""
        logger = structlog.get_logger(__name__)
        logger.error(
            "Weather lookup error",
            error=exc.message,
            error_type=type(exc).__name__,
            error_code=exc.error_code,
        )

        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def general_exception_handler(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors gracefully."""
        logger = structlog.get_logger(__name__)
        logger.error(
            "Unhandled exception", error=str(exc), error_type=type(exc).__name__
        )

        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
                "details": str(exc) if app_settings.is_development else None,
            },
        )

    app.include_router(router, prefix="/api/v1")

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint providing basic service information."""
        return {
            "service": app_settings.app_name,
            "version": app_settings.app_version,
            "status": "running",
            "docs": "/docs" if app_settings.is_development else "disabled",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weather_lookup.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
