import math
from typing import Literal

from pydantic import BaseModel, Field

from weather_lookup.models.weather import WeatherReading
from weather_lookup.presentation.flags import country_flag
from weather_lookup.presentation.messages import user_message
from weather_lookup.presentation.themes import DEFAULT_BACKGROUND, weather_background
from weather_lookup.utils.exceptions import WeatherAPIError


class WeatherView(BaseModel):
    """Render-ready weather card"""

    title: str = Field(..., description="Location name, flag and country code")
    location: str
    country: str
    flag: str
    temperature: int = Field(..., description="Rounded temperature in Celsius")
    feels_like: int = Field(..., description="Rounded feels-like temperature in Celsius")
    condition: str
    description: str
    humidity: float
    pressure: float
    wind_speed: float
    rain_last_hour: float | None = None
    background: str
    country_warning: str | None = Field(
        None, description="Set when the resolved country differs from the requested one"
    )


class ErrorView(BaseModel):
    error: str = Field(..., description="Machine error code")
    message: str = Field(..., description="User-facing message")
    background: str = DEFAULT_BACKGROUND


class PageView(BaseModel):
    state: Literal["success", "error"]
    weather: WeatherView | None = None
    error: ErrorView | None = None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity"""
    return math.floor(value + 0.5)


def country_mismatch(reading: WeatherReading, requested_country: str | None) -> bool:
    """True when a country was requested and upstream resolved a different one"""
    if not requested_country:
        return False
    return reading.country.lower() != requested_country.strip().lower()


def build_weather_view(
    reading: WeatherReading, requested_country: str | None = None
) -> WeatherView:
    flag = country_flag(reading.country)
    title = " ".join(part for part in (reading.name, flag, reading.country) if part)

    warning = None
    if country_mismatch(reading, requested_country):
        warning = (
            f"Note: Weather data is for {reading.name} {flag or reading.country} "
            f"instead of {country_flag(requested_country) or requested_country.upper()}"
        )

    return WeatherView(
        title=title,
        location=reading.name,
        country=reading.country,
        flag=flag,
        temperature=round_half_up(reading.main.temp),
        feels_like=round_half_up(reading.main.feels_like),
        condition=reading.condition.main,
        description=reading.condition.description,
        humidity=reading.main.humidity,
        pressure=reading.main.pressure,
        wind_speed=reading.wind.speed,
        rain_last_hour=reading.rain.one_hour if reading.rain else None,
        background=weather_background(reading.condition.main),
        country_warning=warning,
    )


def build_error_view(error: WeatherAPIError) -> ErrorView:
    return ErrorView(error=error.error_code, message=user_message(error))


def build_page_view(
    result: WeatherReading | WeatherAPIError, requested_country: str | None = None
) -> PageView:
    if isinstance(result, WeatherAPIError):
        return PageView(state="error", error=build_error_view(result))
    return PageView(
        state="success", weather=build_weather_view(result, requested_country)
    )
