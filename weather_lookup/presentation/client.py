import logging
from typing import Any

import httpx

from weather_lookup.models.weather import WeatherQuery, WeatherReading, parse_weather_reading
from weather_lookup.utils.exceptions import SchemaError, UpstreamError, error_from_payload

logger = logging.getLogger(__name__)

WEATHER_PATH = "/api/v1/weather"


class WeatherAppClient:
    """
    Async client for this service's own weather endpoint.

    Error responses are turned back into the typed exceptions raised on the
    server side, keyed by the machine error code in the body.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "WeatherAppClient":
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None

    async def get_weather(self, query: WeatherQuery) -> WeatherReading:
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        params = {"city": query.city}
        if query.country_code:
            params["country_code"] = query.country_code

        try:
            response = await self.client.get(WEATHER_PATH, params=params)
        except httpx.RequestError as e:
            logger.error(f"Weather service request failed: {e}")
            raise UpstreamError("Weather service is unreachable") from e

        if response.is_success:
            try:
                data = response.json()
            except ValueError as e:
                raise SchemaError(details={"reason": "response body is not JSON"}) from e
            return parse_weather_reading(data)

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict) or "error" not in payload:
            raise UpstreamError(upstream_status=response.status_code)

        raise error_from_payload(payload)
