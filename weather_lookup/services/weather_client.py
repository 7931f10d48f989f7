import logging
from typing import Any

import httpx

from weather_lookup.config.settings import Settings
from weather_lookup.models.weather import (
    WeatherQuery,
    WeatherReading,
    parse_weather_reading,
)
from weather_lookup.utils.exceptions import (
    AuthError,
    ConfigurationError,
    NotFoundError,
    SchemaError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

UNITS = "metric"


class WeatherClient:
    """
    Async weather client for fetching data from external weather API (OpenWeatherMap)
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: httpx.AsyncClient | None = None

    def _require_api_key(self) -> str:
        """Return the configured API key or fail before any network call"""
        if not self.settings.has_api_key:
            raise ConfigurationError("OpenWeather API key not configured")
        return self.settings.openweather_api_key.strip()

    async def __aenter__(self) -> "WeatherClient":
        """Async context manager entry"""
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.weather_api_timeout),
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit"""
        if self.client:
            await self.client.aclose()
            self.client = None

    async def fetch_weather(self, query: WeatherQuery) -> WeatherReading:
        """Fetch current weather for a validated query from the external API"""
        api_key = self._require_api_key()

        if not self.client:
            raise ConfigurationError(
                "Weather client not initialized. Use async context manager."
            )

        logger.info(f"Fetching weather data for: {query.term}")

        response = await self._make_api_request(query, api_key)
        reading = self._parse_response(response, query)

        logger.info(
            f"Fetched weather for {query.term}: {reading.name}, {reading.country}"
        )
        return reading

    async def _make_api_request(
        self, query: WeatherQuery, api_key: str
    ) -> httpx.Response:
        """Make HTTP request to weather API and map failure statuses"""
        params = {
            "q": query.term,
            "units": UNITS,
            "appid": api_key,
        }

        try:
            response = await self.client.get(
                str(self.settings.weather_api_url), params=params
            )
        except httpx.TimeoutException as e:
            logger.error(f"API request timed out for: {query.term}")
            raise UpstreamError(
                f"Weather API request timed out after "
                f"{self.settings.weather_api_timeout} seconds"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request error for {query.term}: {e}")
            raise UpstreamError() from e

        if 200 <= response.status_code < 300:
            return response
        elif response.status_code == 404:
            logger.info(f"City not found upstream: {query.term}")
            raise NotFoundError(query.city, query.country_code)
        elif response.status_code == 401:
            logger.error("Weather API rejected the configured API key")
            raise AuthError()
        else:
            logger.error(f"Weather API returned status {response.status_code}")
            raise UpstreamError(
                upstream_status=response.status_code, response_body=response.text
            )

    def _parse_response(
        self, response: httpx.Response, query: WeatherQuery
    ) -> WeatherReading:
        """Parse API response into a WeatherReading"""
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse JSON response for {query.term}: {e}")
            raise SchemaError(details={"reason": "response body is not JSON"}) from e

        try:
            return parse_weather_reading(data)
        except SchemaError as e:
            logger.error(
                f"Weather data for {query.term} failed validation: "
                f"{e.details.get('fields')}"
            )
            raise

