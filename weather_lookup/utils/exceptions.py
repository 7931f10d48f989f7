from typing import Any


class WeatherAPIError(Exception):
    """Base exception for weather lookup errors"""

    status_code = 500
    error_code = "WEATHER_API_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details or None,
        }


class EmptyCityError(WeatherAPIError):
    """Exception raised when the city name is blank after trimming"""

    status_code = 400
    error_code = "EMPTY_CITY"

    def __init__(self, message: str = "City name is required"):
        super().__init__(message)


class InvalidCountryCodeError(WeatherAPIError):
    """Exception raised when a country code is not an ISO 3166 alpha-2 code"""

    status_code = 400
    error_code = "INVALID_COUNTRY_CODE"
    country_code: str | None = None

    def __init__(self, country_code: str, message: str | None = None):
        super().__init__(
            message or "Please enter a valid country code (e.g., US, GB, CA)",
            {"country_code": country_code},
        )
        self.country_code = country_code


class ConfigurationError(WeatherAPIError):
    """Exception raised when configuration is invalid"""

    status_code = 500
    error_code = "CONFIGURATION_ERROR"


class NotFoundError(WeatherAPIError):
    """Exception raised when the upstream API does not know the city"""

    status_code = 404
    error_code = "NOT_FOUND"
    city: str | None = None
    country_code: str | None = None

    def __init__(self, city: str, country_code: str | None = None):
        if country_code:
            message = (
                f'City "{city}" not found in country {country_code}. '
                "Please check the spelling and try again."
            )
        else:
            message = (
                f'City "{city}" not found. Please check the spelling or try '
                'adding a country code (e.g., "London,GB").'
            )
        details: dict[str, Any] = {"city": city}
        if country_code:
            details["country_code"] = country_code
        super().__init__(message, details)
        self.city = city
        self.country_code = country_code


class AuthError(WeatherAPIError):
    """Exception raised when the upstream API rejects the API key"""

    status_code = 401
    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Invalid API key configuration"):
        super().__init__(message)


class UpstreamError(WeatherAPIError):
    """Exception raised when the external weather API fails"""

    status_code = 502
    error_code = "UPSTREAM_ERROR"
    upstream_status: int | None = None
    response_body: str | None = None

    def __init__(
        self,
        message: str = "Failed to fetch weather data. Please try again later.",
        upstream_status: int | None = None,
        response_body: str | None = None,
    ):
        details = {"upstream_status": upstream_status} if upstream_status else None
        super().__init__(message, details)
        self.upstream_status = upstream_status
        self.response_body = response_body


class SchemaError(WeatherAPIError):
    """Exception raised when the upstream payload does not match the schema"""

    status_code = 502
    error_code = "SCHEMA_ERROR"

    def __init__(
        self,
        message: str = "Invalid weather data received from API",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)


class WeatherServiceError(WeatherAPIError):
    """Exception raised when the weather service itself is unusable"""

    status_code = 503
    error_code = "WEATHER_SERVICE_ERROR"


ERROR_TYPES: dict[str, type[WeatherAPIError]] = {
    error_type.error_code: error_type
    for error_type in (
        EmptyCityError,
        InvalidCountryCodeError,
        ConfigurationError,
        NotFoundError,
        AuthError,
        UpstreamError,
        SchemaError,
        WeatherServiceError,
    )
}


def error_from_payload(payload: dict[str, Any]) -> WeatherAPIError:
    """
    Rebuild a typed error from the JSON error body produced by the API.

    The message and details are restored verbatim; unknown codes fall back
    to the base WeatherAPIError.
    """
    error_type = ERROR_TYPES.get(payload.get("error", ""), WeatherAPIError)
    message = payload.get("message") or "An unexpected error occurred"

    # Bypass the subclass constructors, which compose their own messages.
    error = error_type.__new__(error_type)
    WeatherAPIError.__init__(error, message, payload.get("details"))
    for key, value in error.details.items():
        setattr(error, key, value)
    return error
