DEFAULT_BACKGROUND = "from-[#2e026d] to-[#15162c]"

# Keyed by the short condition label (WeatherCondition.main).
WEATHER_BACKGROUNDS: dict[str, str] = {
    "Clear": "from-[#f59e0b] to-[#0ea5e9]",
    "Clouds": "from-[#64748b] to-[#1e293b]",
    "Rain": "from-[#1e3a8a] to-[#0f172a]",
    "Drizzle": "from-[#3b82f6] to-[#1e3a8a]",
    "Thunderstorm": "from-[#312e81] to-[#020617]",
    "Snow": "from-[#e2e8f0] to-[#64748b]",
}

ATMOSPHERE_LABELS = frozenset(
    {"Mist", "Smoke", "Haze", "Dust", "Fog", "Sand", "Ash", "Squall", "Tornado"}
)
ATMOSPHERE_BACKGROUND = "from-[#94a3b8] to-[#334155]"


def weather_background(condition_label: str | None) -> str:
    """Gradient theme for a condition label, the default theme when unknown"""
    if not condition_label:
        return DEFAULT_BACKGROUND
    if condition_label in ATMOSPHERE_LABELS:
        return ATMOSPHERE_BACKGROUND
    return WEATHER_BACKGROUNDS.get(condition_label, DEFAULT_BACKGROUND)
