"""
Weather service exposing the single lookup operation of the application.

The service validates the input, runs one upstream call through the
weather client and returns the validated reading. Nothing is cached,
persisted or retried here.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any

from weather_lookup.config.settings import Settings
from weather_lookup.config.utils import validate_configuration
from weather_lookup.models.weather import WeatherReading
from weather_lookup.services.query_builder import parse_query
from weather_lookup.services.weather_client import WeatherClient
from weather_lookup.utils.exceptions import WeatherAPIError, WeatherServiceError

logger = logging.getLogger(__name__)


class WeatherService:
    """
    Main weather service.

    This service handles the complete flow:
    1. Validate the city and optional country code
    2. Fetch from the external API
    3. Validate the payload into a WeatherReading
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize service components"""
        if self._initialized:
            return

        validation = validate_configuration(self.settings)
        if not validation["valid"]:
            logger.error(f"Invalid configuration: {validation['errors']}")
            raise WeatherServiceError(
                "Service initialization failed: " + "; ".join(validation["errors"])
            )
        for warning in validation["warnings"]:
            logger.warning(warning)

        logger.info("Weather service initialized successfully")
        self._initialized = True

    async def cleanup(self) -> None:
        """Cleanup resources"""
        self._initialized = False
        logger.info("Weather service cleanup completed")

    async def get_weather(
        self, city: str, country_code: str | None = None
    ) -> WeatherReading:
        """
        Get current weather for a city, optionally restricted to a country.

        Raises:
            EmptyCityError, InvalidCountryCodeError: before any network call
            ConfigurationError: when no API key is configured
            NotFoundError, AuthError, UpstreamError: upstream failures
            SchemaError: when the upstream payload is malformed
        """
        if not self._initialized:
            raise WeatherServiceError("Weather service not initialized")

        query = parse_query(city, country_code)
        start_time = time.monotonic()

        logger.info(f"Processing weather request for: {query.term}")

        try:
            async with WeatherClient(self.settings) as client:
                reading = await client.fetch_weather(query)
        except WeatherAPIError as e:
            logger.warning(
                f"Weather request for {query.term} failed with "
                f"{type(e).__name__}: {e.message}"
            )
            raise

        processing_time_ms = (time.monotonic() - start_time) * 1000
        logger.info(
            f"Successfully processed weather request for {query.term} "
            f"in {processing_time_ms:.1f}ms"
        )
        return reading

    async def health_check(self) -> dict[str, Any]:
        """Report service and configuration status without calling upstream"""
        validation = validate_configuration(self.settings)

        components = {
            "weather_service": {
                "status": "healthy" if self._initialized else "unhealthy"
            },
            "configuration": {
                "status": "healthy" if validation["valid"] else "unhealthy",
                "api_key_configured": self.settings.has_api_key,
                "errors": validation["errors"],
                "warnings": validation["warnings"],
            },
        }

        if not self._initialized or not validation["valid"]:
            service_status = "unhealthy"
        elif not self.settings.has_api_key:
            service_status = "degraded"
        else:
            service_status = "healthy"

        return {
            "service": service_status,
            "components": components,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


async def create_weather_service(settings: Settings) -> WeatherService:
    """
    Factory function to create and initialize a weather service.

    Usage:
        service = await create_weather_service(settings)
        try:
            reading = await service.get_weather("London", "GB")
        finally:
            await service.cleanup()
    """
    service = WeatherService(settings)
    await service.initialize()
    return service
