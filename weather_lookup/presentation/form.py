from dataclasses import dataclass

from weather_lookup.models.weather import WeatherQuery
from weather_lookup.presentation.flags import country_flag
from weather_lookup.services.query_builder import is_valid_country_code, parse_query
from weather_lookup.utils.exceptions import InvalidCountryCodeError

COUNTRY_CODE_LENGTH = 2


@dataclass
class SearchForm:
    """
    Search form state.

    The country code is checked as the user types, once two characters are
    entered, and again on submit. Submitting is blocked while a request is
    in flight, while the city is blank, or while the country code is flagged.
    """

    city: str = ""
    country_code: str = ""
    show_country_error: bool = False
    in_flight: bool = False

    def set_city(self, value: str) -> None:
        self.city = value

    def set_country_code(self, value: str) -> None:
        value = value[:COUNTRY_CODE_LENGTH]
        if value.isascii():
            value = value.upper()
        self.country_code = value
        if len(value) == COUNTRY_CODE_LENGTH:
            self.show_country_error = not is_valid_country_code(value)
        else:
            self.show_country_error = False

    @property
    def city_missing(self) -> bool:
        return not self.city.strip()

    @property
    def flag(self) -> str:
        if len(self.country_code) != COUNTRY_CODE_LENGTH:
            return ""
        return country_flag(self.country_code)

    @property
    def can_submit(self) -> bool:
        return not (self.in_flight or self.city_missing or self.show_country_error)

    def submit(self) -> WeatherQuery:
        """
        Validate the fields and return the query to run.

        Raises:
            EmptyCityError: if the city is blank
            InvalidCountryCodeError: if the country code is not ISO alpha-2
        """
        try:
            query = parse_query(self.city, self.country_code)
        except InvalidCountryCodeError:
            self.show_country_error = True
            raise

        self.show_country_error = False
        return query
