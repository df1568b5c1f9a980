"""Read-only show library backed by Trakt."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from ..library import LibraryNotFoundError, LibraryUnavailableError, parse_show_id
from ..models import Episode, Season, Show
from .adapter import TraktAdapter
from .client import TraktClient, TraktError, TraktNotFoundError

LOGGER = logging.getLogger(__name__)


@contextmanager
def _library_errors(what: str) -> Iterator[None]:
    try:
        yield
    except TraktNotFoundError as exc:
        raise LibraryNotFoundError(f"{what} not found") from exc
    except TraktError as exc:
        raise LibraryUnavailableError(f"Trakt lookup failed for {what}: {exc}") from exc


class TraktLibrary:
    """``ShowLibrary`` over the Trakt API.

    Search order is Trakt's own relevance ranking.
    """

    def __init__(self, client: TraktClient, adapter: TraktAdapter | None = None) -> None:
        self.client = client
        self.adapter = adapter or TraktAdapter()

    def query_shows_by_title(self, title: str) -> list[Show]:
        with _library_errors(f"search {title!r}"):
            responses = self.client.search_shows(title)
        shows = [self.adapter.to_show(response) for response in responses]
        LOGGER.debug("Trakt search %r returned %d show(s)", title, len(shows))
        return shows

    def get_show(self, show_id: str) -> Show:
        trakt_id = parse_show_id(show_id)
        with _library_errors(f"show {show_id}"):
            response = self.client.get_show(trakt_id)
        return self.adapter.to_show(response)

    def get_seasons_by_show(self, show_id: str) -> list[Season]:
        trakt_id = parse_show_id(show_id)
        with _library_errors(f"seasons of show {show_id}"):
            responses = self.client.get_seasons(trakt_id)
        return [self.adapter.to_season(str(trakt_id), response) for response in responses]

    def get_season_by_number(self, show_id: str, season_number: int) -> Season:
        for season in self.get_seasons_by_show(show_id):
            if season.number == season_number:
                return season
        raise LibraryNotFoundError(f"Season {season_number} not found for show {show_id}")

    def get_episode_by_number(self, show_id: str, season_number: int, episode_number: int) -> Episode:
        trakt_id = parse_show_id(show_id)
        with _library_errors(f"episode S{season_number:02d}E{episode_number:02d} of show {show_id}"):
            response = self.client.get_episode(trakt_id, season_number, episode_number)
        return self.adapter.to_episode(str(trakt_id), response)

    def get_episodes_by_season_number(self, show_id: str, season_number: int) -> list[Episode]:
        trakt_id = parse_show_id(show_id)
        with _library_errors(f"season {season_number} of show {show_id}"):
            responses = self.client.get_season_episodes(trakt_id, season_number)
        return [self.adapter.to_episode(str(trakt_id), response) for response in responses]

    def close(self) -> None:
        self.client.close()
