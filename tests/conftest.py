import copy

import pytest

LONDON_PAYLOAD = {
    "coord": {"lon": -0.1257, "lat": 51.5085},
    "weather": [
        {"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}
    ],
    "base": "stations",
    "main": {
        "temp": 15.5,
        "feels_like": 14.8,
        "temp_min": 14.1,
        "temp_max": 16.9,
        "pressure": 1013,
        "humidity": 65,
    },
    "visibility": 10000,
    "wind": {"speed": 3.2, "deg": 180},
    "clouds": {"all": 75},
    "dt": 1700492400,
    "sys": {"type": 2, "id": 2075535, "country": "GB"},
    "timezone": 0,
    "id": 2643743,
    "name": "London",
    "cod": 200,
}


@pytest.fixture
def sample_api_response():
    """Sample current weather response from OpenWeatherMap"""
    return copy.deepcopy(LONDON_PAYLOAD)


@pytest.fixture
def springfield_api_response():
    """Springfield resolved by upstream to a country other than the US"""
    payload = copy.deepcopy(LONDON_PAYLOAD)
    payload.update(
        {
            "coord": {"lon": 144.8, "lat": -37.9},
            "weather": [
                {"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}
            ],
            "rain": {"1h": 0.42},
            "sys": {"country": "AU"},
            "timezone": 36000,
            "id": 2147714,
            "name": "Springfield",
        }
    )
    return payload
