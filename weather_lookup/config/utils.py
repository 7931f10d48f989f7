from .settings import Settings, settings


def validate_configuration(
    settings_obj: Settings = settings,
) -> dict[str, list[str] | bool]:
    """Validate configuration and return validation results."""
    errors = []
    warnings = []

    if not settings_obj.has_api_key:
        # Requests fail with a configuration error, but the service can start.
        warnings.append(
            "OPENWEATHER_API_KEY is not set; weather lookups will be rejected"
        )

    if settings_obj.weather_api_timeout <= 0:
        errors.append("WEATHER_API_TIMEOUT must be a positive integer")

    if not (1 <= settings_obj.port <= 65535):
        errors.append("PORT must be between 1 and 65535")

    if settings_obj.workers < 1:
        errors.append("WORKERS must be at least 1")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def get_config_summary(settings_obj: Settings = settings) -> dict[str, str | int | bool]:
    """Get a summary of current configuration for logging/debugging."""
    return {
        "app_name": settings_obj.app_name,
        "version": settings_obj.app_version,
        "environment": settings_obj.environment,
        "debug": settings_obj.debug,
        "log_level": settings_obj.log_level,
        "api_endpoint": f"{settings_obj.host}:{settings_obj.port}",
        "weather_api_url": str(settings_obj.weather_api_url),
        "weather_api_configured": settings_obj.has_api_key,
    }
