import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from weather_lookup.models.weather import WeatherQuery, WeatherReading
from weather_lookup.presentation.view import PageView, build_page_view
from weather_lookup.utils.exceptions import UpstreamError, WeatherAPIError

logger = logging.getLogger(__name__)

Fetcher = Callable[[WeatherQuery], Awaitable[WeatherReading]]

MAX_RETRIES = 1


class QueryState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    SUCCESS = "success"


class WeatherSession:
    """
    Single query/result slot for one user.

    A failed fetch is retried once without looking at the error. Failures
    that are not domain errors end the query as an UpstreamError. Submitting
    a new query supersedes the previous one: its call keeps running, but a
    result that arrives after a newer submission is discarded.
    """

    def __init__(self, fetch: Fetcher, max_retries: int = MAX_RETRIES):
        self._fetch = fetch
        self.max_retries = max_retries
        self.state = QueryState.IDLE
        self.query: WeatherQuery | None = None
        self.reading: WeatherReading | None = None
        self.error: WeatherAPIError | None = None
        self._generation = 0

    @property
    def is_loading(self) -> bool:
        return self.state is QueryState.LOADING

    async def submit(self, query: WeatherQuery) -> QueryState:
        self._generation += 1
        generation = self._generation

        self.query = query
        self.state = QueryState.LOADING
        self.reading = None
        self.error = None

        reading: WeatherReading | None = None
        error: WeatherAPIError | None = None
        for attempt in range(self.max_retries + 1):
            try:
                reading = await self._fetch(query)
                error = None
                break
            except WeatherAPIError as e:
                error = e
                logger.info(f"Attempt {attempt + 1} for {query.term} failed: {e.message}")
            except Exception as e:
                error = UpstreamError()
                error.__cause__ = e
                logger.warning(
                    f"Attempt {attempt + 1} for {query.term} failed unexpectedly: {e!r}"
                )

        if generation != self._generation:
            logger.debug(f"Discarding superseded result for {query.term}")
            return self.state

        if error is not None:
            self.state = QueryState.ERROR
            self.error = error
        else:
            self.state = QueryState.SUCCESS
            self.reading = reading
        return self.state

    def view(self) -> PageView | None:
        """Render the current slot; None while idle or loading"""
        if self.state is QueryState.SUCCESS:
            return build_page_view(self.reading, self.query.country_code)
        if self.state is QueryState.ERROR:
            return build_page_view(self.error)
        return None
