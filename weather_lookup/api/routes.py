from datetime import datetime, timezone
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request
from fastapi.responses import JSONResponse

from weather_lookup.presentation.flags import country_flag
from weather_lookup.presentation.view import build_page_view
from weather_lookup.services.query_builder import is_valid_country_code
from weather_lookup.services.weather_service import WeatherService
from weather_lookup.utils.exceptions import WeatherAPIError

logger = structlog.get_logger(__name__)
router = APIRouter()

CityParam = Annotated[
    str,
    Query(
        description="City name to get weather data for",
        max_length=100,
        examples=["London"],
    ),
]
CountryCodeParam = Annotated[
    str | None,
    Query(
        description="Optional ISO 3166-1 alpha-2 country code",
        examples=["GB"],
    ),
]


def get_weather_service(request: Request) -> WeatherService:
    """
    Dependency injection for weather service.

    Retrieves the weather service instance from the application state.
    This service is initialized during application startup.
    """
    if not hasattr(request.app.state, "weather_service"):
        raise HTTPException(status_code=503, detail="Weather service not available")

    return request.app.state.weather_service


@router.get(
    "/weather",
    response_model=dict[str, Any],
    summary="Get current weather data",
    description="""
    Retrieve current weather for a city, optionally restricted to a country.

    **Query Parameters:**
    - `city`: Name of the city (required, must not be blank)
    - `country_code`: ISO 3166-1 alpha-2 code (optional, case-insensitive)

    The response mirrors the OpenWeatherMap current weather payload in
    metric units. Errors are returned as `{"error", "message", "details"}`.
    """,
    responses={
        400: {"description": "Blank city or invalid country code"},
        401: {"description": "Upstream rejected the configured API key"},
        404: {"description": "City not found"},
        500: {"description": "API key not configured"},
        502: {"description": "Upstream failure or unexpected upstream data"},
    },
    tags=["Weather"],
)
async def get_weather(
    city: CityParam,
    country_code: CountryCodeParam = None,
    weather_service: WeatherService = Depends(get_weather_service),
) -> dict[str, Any]:
    """Get current weather data for a specified city."""
    logger.info("Weather request received", city=city, country_code=country_code)

    try:
        reading = await weather_service.get_weather(city, country_code)
    except WeatherAPIError as e:
        logger.warning(
            "Weather request failed",
            city=city,
            country_code=country_code,
            error_code=e.error_code,
            error=e.message,
        )
        raise

    logger.info(
        "Weather request completed successfully",
        city=city,
        resolved_name=reading.name,
        resolved_country=reading.country,
    )
    return reading.to_payload()


@router.get(
    "/weather/view",
    response_model=dict[str, Any],
    summary="Get a render-ready weather card",
    description="""
    Same lookup as `/weather`, returned as a view model: rounded
    temperatures, flag glyph, background theme and a warning when the
    resolved country differs from the requested one. Failures are returned
    as an error state carrying a user-facing message.
    """,
    tags=["Weather"],
)
async def get_weather_view(
    city: CityParam,
    country_code: CountryCodeParam = None,
    weather_service: WeatherService = Depends(get_weather_service),
) -> Any:
    try:
        reading = await weather_service.get_weather(city, country_code)
    except WeatherAPIError as e:
        logger.warning("Weather view failed", city=city, error_code=e.error_code)
        page = build_page_view(e)
        return JSONResponse(status_code=e.status_code, content=page.model_dump())

    page = build_page_view(reading, country_code)
    if page.weather.country_warning:
        logger.info(
            "Resolved country differs from requested",
            requested=country_code,
            resolved=reading.country,
        )
    return page.model_dump()


@router.get(
    "/country-codes/{code}",
    response_model=dict[str, Any],
    summary="Validate a country code",
    description="Check a country code as the user types it.",
    tags=["Weather"],
)
async def check_country_code(
    code: Annotated[str, Path(max_length=2)],
) -> dict[str, Any]:
    valid = is_valid_country_code(code)
    return {
        "code": code.upper(),
        "valid": valid,
        "flag": country_flag(code) if valid else "",
    }


@router.get(
    "/health",
    response_model=dict[str, Any],
    summary="Service health check",
    description="""
    Health check reporting service initialization and configuration status.
    The external weather API is not called.
    """,
    tags=["Health"],
)
async def health_check(
    weather_service: WeatherService = Depends(get_weather_service),
) -> Any:
    logger.info("Health check requested")

    try:
        health_status = await weather_service.health_check()
    except Exception as e:
        logger.error("Health check failed", error=str(e), error_type=type(e).__name__)
        return JSONResponse(
            status_code=503,
            content={
                "service": "unhealthy",
                "error": str(e),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    # Degraded still serves traffic
    status_code = 503 if health_status["service"] == "unhealthy" else 200

    logger.info(
        "Health check completed",
        status=health_status["service"],
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content=health_status)


@router.get(
    "/health/ready",
    response_model=dict[str, Any],
    summary="Readiness probe",
    tags=["Health"],
)
async def readiness_check(
    weather_service: WeatherService = Depends(get_weather_service),
) -> Any:
    """
    Simple readiness check for container orchestration.

    Returns basic service status without detailed component checking.
    """
    if not weather_service._initialized:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "message": "Service not initialized"},
        )

    return {"status": "ready"}
