import pytest

from weather_lookup.models.weather import parse_weather_reading
from weather_lookup.presentation.flags import country_flag
from weather_lookup.presentation.form import SearchForm
from weather_lookup.presentation.messages import GENERIC_MESSAGE, user_message
from weather_lookup.presentation.themes import (
    ATMOSPHERE_BACKGROUND,
    DEFAULT_BACKGROUND,
    WEATHER_BACKGROUNDS,
    weather_background,
)
from weather_lookup.presentation.view import (
    build_page_view,
    build_weather_view,
    country_mismatch,
    round_half_up,
)
from weather_lookup.utils.exceptions import (
    AuthError,
    ConfigurationError,
    EmptyCityError,
    InvalidCountryCodeError,
    NotFoundError,
    SchemaError,
    UpstreamError,
    error_from_payload,
)


class TestWeatherView:
    """Test suite for the weather card view model"""

    def test_london_without_country_code(self, sample_api_response):
        view = build_weather_view(parse_weather_reading(sample_api_response))

        assert view.title == "London \U0001f1ec\U0001f1e7 GB"
        assert view.country == "GB"
        assert view.temperature == 16
        assert view.feels_like == 15
        assert view.condition == "Clouds"
        assert view.description == "broken clouds"
        assert view.background == WEATHER_BACKGROUNDS["Clouds"]
        assert view.country_warning is None

    def test_matching_country_code_any_case(self, sample_api_response):
        reading = parse_weather_reading(sample_api_response)

        assert build_weather_view(reading, "gb").country_warning is None
        assert not country_mismatch(reading, "Gb")

    def test_country_mismatch_warning(self, springfield_api_response):
        reading = parse_weather_reading(springfield_api_response)

        view = build_weather_view(reading, "US")

        assert country_mismatch(reading, "US")
        assert view.country_warning == (
            "Note: Weather data is for Springfield \U0001f1e6\U0001f1fa "
            "instead of \U0001f1fa\U0001f1f8"
        )
        assert view.rain_last_hour == 0.42
        assert view.background == WEATHER_BACKGROUNDS["Rain"]

    @pytest.mark.parametrize(
        "value, expected",
        [(2.5, 3), (-2.5, -2), (15.5, 16), (16.5, 17), (-0.4, 0), (14.49, 14)],
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_half_degree_temperatures_round_up(self, sample_api_response):
        sample_api_response["main"]["temp"] = 16.5
        sample_api_response["main"]["feels_like"] = -2.5

        view = build_weather_view(parse_weather_reading(sample_api_response))

        assert view.temperature == 17
        assert view.feels_like == -2

    def test_page_view_error_state(self):
        page = build_page_view(AuthError())

        assert page.state == "error"
        assert page.weather is None
        assert page.error.error == "UNAUTHORIZED"
        assert page.error.background == DEFAULT_BACKGROUND


class TestFlagsAndThemes:
    @pytest.mark.parametrize(
        "code, flag",
        [
            ("GB", "\U0001f1ec\U0001f1e7"),
            ("us", "\U0001f1fa\U0001f1f8"),
            ("FR", "\U0001f1eb\U0001f1f7"),
        ],
    )
    def test_country_flag(self, code, flag):
        assert country_flag(code) == flag

    @pytest.mark.parametrize("code", [None, "", "UK", "G", "GBR"])
    def test_country_flag_unknown(self, code):
        assert country_flag(code) == ""

    def test_weather_background(self):
        assert weather_background("Clear") == WEATHER_BACKGROUNDS["Clear"]
        assert weather_background("Fog") == ATMOSPHERE_BACKGROUND
        assert weather_background("Volcano") == DEFAULT_BACKGROUND
        assert weather_background(None) == DEFAULT_BACKGROUND


class TestUserMessages:
    """User messages are chosen by error type, not by message text"""

    def test_not_found_uses_error_message(self):
        error = NotFoundError("Atlantis", "GR")
        assert user_message(error) == error.message

    def test_auth_and_configuration_errors(self):
        expected = "There's an issue with the weather service configuration."
        assert user_message(AuthError()) == expected
        assert user_message(ConfigurationError("anything")) == expected

    def test_message_text_does_not_drive_selection(self):
        # Mentions "API key" and "City not found" but is neither kind
        error = UpstreamError("City not found: API key rotated")
        assert user_message(error) == GENERIC_MESSAGE

    def test_schema_error(self):
        assert "unexpected data" in user_message(SchemaError())

    def test_validation_errors(self):
        assert user_message(EmptyCityError()) == "Please enter a city name"
        assert "valid country code" in user_message(InvalidCountryCodeError("XX"))

    def test_unrelated_exception(self):
        assert user_message(RuntimeError("boom")) == GENERIC_MESSAGE

    def test_rebuilt_error_keeps_type(self):
        error = error_from_payload(
            {
                "error": "NOT_FOUND",
                "message": 'City "Atlantis" not found.',
                "details": {"city": "Atlantis"},
            }
        )

        assert isinstance(error, NotFoundError)
        assert error.city == "Atlantis"
        assert user_message(error) == 'City "Atlantis" not found.'


class TestSearchForm:
    """Test suite for search form state"""

    def test_blank_city_blocks_submit(self):
        form = SearchForm(city="   ")

        assert form.city_missing
        assert not form.can_submit
        with pytest.raises(EmptyCityError):
            form.submit()

    def test_country_code_checked_once_two_characters_entered(self):
        form = SearchForm(city="London")

        form.set_country_code("u")
        assert form.country_code == "U"
        assert not form.show_country_error
        assert form.flag == ""

        form.set_country_code("uk")
        assert form.country_code == "UK"
        assert form.show_country_error
        assert not form.can_submit

        form.set_country_code("gb")
        assert not form.show_country_error
        assert form.flag == "\U0001f1ec\U0001f1e7"
        assert form.can_submit

    def test_country_code_not_uppercased_into_a_valid_code(self):
        form = SearchForm(city="Juba")

        form.set_country_code("\u00df")
        assert form.country_code == "\u00df"
        assert form.flag == ""
        with pytest.raises(InvalidCountryCodeError):
            form.submit()
        assert form.show_country_error

    def test_country_code_limited_to_two_characters(self):
        form = SearchForm(city="London")
        form.set_country_code("gbr")
        assert form.country_code == "GB"

    def test_in_flight_blocks_submit(self):
        form = SearchForm(city="London", in_flight=True)
        assert not form.can_submit

    def test_submit_rechecks_country_code(self):
        form = SearchForm(city="London", country_code="ZZ")

        with pytest.raises(InvalidCountryCodeError):
            form.submit()
        assert form.show_country_error

    def test_submit_returns_query(self):
        form = SearchForm()
        form.set_city("  Paris ")
        form.set_country_code("fr")

        query = form.submit()

        assert query.term == "Paris,FR"
        assert not form.show_country_error


class TestRebuiltErrors:
    """Errors rebuilt from a JSON body without matching details"""

    def test_upstream_error_attributes_default_to_none(self):
        error = error_from_payload({"error": "UPSTREAM_ERROR", "message": "down"})

        assert isinstance(error, UpstreamError)
        assert error.upstream_status is None
        assert error.response_body is None

    def test_country_code_error_attributes_default_to_none(self):
        error = error_from_payload(
            {"error": "INVALID_COUNTRY_CODE", "message": "bad code"}
        )

        assert isinstance(error, InvalidCountryCodeError)
        assert error.country_code is None

    def test_not_found_attributes_default_to_none(self):
        error = error_from_payload({"error": "NOT_FOUND", "message": "missing"})

        assert error.city is None
        assert error.country_code is None
        assert user_message(error) == "missing"
