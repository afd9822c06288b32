"""TMDb API integration for series and movie title/year lookup."""
import typing

import requests

from plexup.errors import MetadataUnavailableError
from plexup.utils import constants, file_util, logger
from plexup.utils.logger import LogLevel


class TMDbResolver:
    """
    Resolve a TMDb identifier to a ``(title, year)`` pair.

    The download path carries the TMDb id of the series or movie, so no search
    is needed: a single details request gives the canonical name and the first
    air/release date. Every failure is surfaced as ``MetadataUnavailableError``
    so that the caller can fail the item without crashing the process.
    """

    def __init__(
            self,
            api_key: str,
            base_url: str = constants.TMDB_BASE_URL,
            timeout: float = constants.HTTP_TIMEOUT,
            session: typing.Optional[requests.Session] = None,
    ):
        if not api_key:
            raise MetadataUnavailableError("-", "TMDb API key is not configured")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.params = {"api_key": api_key, "language": constants.TMDB_LANGUAGE}

    def _get(self, endpoint: str, identifier: str) -> dict:
        url = f"{self.base_url}/{endpoint}/{identifier}"
        logger.log("tmdb.request", LogLevel.DEBUG, endpoint=endpoint, tmdb_id=identifier)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.RequestException as e:
            raise MetadataUnavailableError(identifier, f"request failed: {e}") from e
        except ValueError as e:
            raise MetadataUnavailableError(identifier, f"invalid JSON response: {e}") from e
        if not isinstance(data, dict):
            raise MetadataUnavailableError(identifier, "unexpected response body")
        return data

    @staticmethod
    def _title_and_year(data: dict, identifier: str, title_key: str, date_key: str) -> tuple[str, str]:
        title = data.get(title_key)
        if not isinstance(title, str) or not title.strip():
            raise MetadataUnavailableError(identifier, f"response has no '{title_key}'")
        date = data.get(date_key)
        if not isinstance(date, str) or len(date) < 4 or not date[:4].isdigit():
            raise MetadataUnavailableError(identifier, f"response has no usable '{date_key}'")
        return file_util.sanitize_filename(title), date[:4]

    def resolve_series(self, identifier: str) -> tuple[str, str]:
        """Return ``(name, first air year)`` for a TMDb TV id."""
        data = self._get("tv", identifier)
        title, year = self._title_and_year(data, identifier, "name", "first_air_date")
        logger.log("tmdb.match", LogLevel.DEBUG, type="tv", tmdb_id=identifier, title=title, year=year)
        return title, year

    def resolve_movie(self, identifier: str) -> tuple[str, str]:
        """Return ``(title, release year)`` for a TMDb movie id."""
        data = self._get("movie", identifier)
        title, year = self._title_and_year(data, identifier, "title", "release_date")
        logger.log("tmdb.match", LogLevel.DEBUG, type="movie", tmdb_id=identifier, title=title, year=year)
        return title, year
