from weather_lookup.utils.exceptions import (
    AuthError,
    ConfigurationError,
    EmptyCityError,
    InvalidCountryCodeError,
    NotFoundError,
    SchemaError,
    WeatherAPIError,
)

GENERIC_MESSAGE = (
    "An error occurred while fetching weather data. Please try again later."
)

USER_MESSAGES: dict[type[WeatherAPIError], str] = {
    EmptyCityError: "Please enter a city name",
    InvalidCountryCodeError: "Please enter a valid country code (e.g., US, GB, CA)",
    AuthError: "There's an issue with the weather service configuration.",
    ConfigurationError: "There's an issue with the weather service configuration.",
    SchemaError: "The weather service returned unexpected data. Please try again later.",
}


def user_message(error: BaseException) -> str:
    """Pick the user-facing message for an error by its type"""
    if isinstance(error, NotFoundError):
        # Already phrased for the user and mentions the requested country.
        return error.message
    for error_type in type(error).__mro__:
        if error_type in USER_MESSAGES:
            return USER_MESSAGES[error_type]
    return GENERIC_MESSAGE
