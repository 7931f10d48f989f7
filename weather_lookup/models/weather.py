from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, Strict, ValidationError

from weather_lookup.utils.exceptions import SchemaError

# Upstream scalars are taken as sent: no "15.5" -> 15.5 or True -> 1.0 coercion.
# Ints are still accepted where a float is expected.
Number = Annotated[float, Strict()]
Integer = Annotated[int, Strict()]
Text = Annotated[str, Strict()]


class UpstreamModel(BaseModel):
    """Base for the upstream payload: immutable, finite numbers, extra keys ignored"""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        allow_inf_nan=False,
        populate_by_name=True,
    )


class Coordinates(UpstreamModel):
    lon: Number = Field(..., description="Longitude")
    lat: Number = Field(..., description="Latitude")


class WeatherCondition(UpstreamModel):
    id: Integer = Field(..., description="Condition code")
    main: Text = Field(..., description="Short condition label, e.g. 'Rain'")
    description: Text = Field(..., description="Long condition description")
    icon: Text = Field(..., description="Icon code")


class MainMetrics(UpstreamModel):
    temp: Number = Field(..., description="Temperature in Celsius")
    feels_like: Number = Field(..., description="Feels-like temperature in Celsius")
    temp_min: Number = Field(..., description="Minimum temperature in Celsius")
    temp_max: Number = Field(..., description="Maximum temperature in Celsius")
    pressure: Number = Field(..., description="Atmospheric pressure in hPa")
    humidity: Number = Field(..., description="Humidity percentage")


class Wind(UpstreamModel):
    speed: Number = Field(..., description="Wind speed in m/s")


class Rain(UpstreamModel):
    one_hour: Number | None = Field(
        None, alias="1h", description="Precipitation for the last hour in mm"
    )


class Clouds(UpstreamModel):
    all: Number = Field(..., description="Cloud cover percentage")


class CountryInfo(UpstreamModel):
    country: Text = Field(..., description="Resolved ISO alpha-2 country code")


class WeatherReading(UpstreamModel):
    """Current conditions for one location, as returned by OpenWeatherMap"""

    coord: Coordinates
    weather: list[WeatherCondition] = Field(..., min_length=1)
    base: Text
    main: MainMetrics
    visibility: Number = Field(..., description="Visibility in metres")
    wind: Wind
    rain: Rain | None = None
    clouds: Clouds
    name: Text = Field(..., description="Resolved location name")
    id: Integer = Field(..., description="Upstream city id")
    timezone: Integer = Field(..., description="Offset from UTC in seconds")
    sys: CountryInfo

    @property
    def condition(self) -> WeatherCondition:
        return self.weather[0]

    @property
    def country(self) -> str:
        return self.sys.country

    def to_payload(self) -> dict[str, Any]:
        """Serialize using the upstream key names"""
        return self.model_dump(by_alias=True, exclude_none=True)


class WeatherQuery(BaseModel):
    """Validated lookup input"""

    model_config = ConfigDict(frozen=True)

    city: str = Field(..., min_length=1, description="Trimmed city name")
    country_code: str | None = Field(
        None, min_length=2, max_length=2, description="Uppercase ISO alpha-2 code"
    )

    @property
    def term(self) -> str:
        """Upstream `q` parameter"""
        if self.country_code:
            return f"{self.city},{self.country_code}"
        return self.city


def parse_weather_reading(payload: Any) -> WeatherReading:
    """
    Validate an upstream JSON body into a WeatherReading.

    Raises:
        SchemaError: if a required field is missing, has the wrong type,
            or a number is not finite
    """
    try:
        return WeatherReading.model_validate(payload)
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise SchemaError(details={"fields": fields}) from e
