from typing import Literal

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Weather Lookup Service"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: Literal["development", "production"] = "development"

    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Checked per request so the service can start without a key.
    openweather_api_key: str | None = Field(
        default=None, description="OpenWeatherMap API key"
    )
    weather_api_url: HttpUrl = Field(
        default="https://api.openweathermap.org/data/2.5/weather",
        description="Weather API base URL",
    )
    weather_api_timeout: int = Field(
        default=30, description="Weather API request timeout in seconds"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def has_api_key(self) -> bool:
        return bool(self.openweather_api_key and self.openweather_api_key.strip())


settings = Settings()
