"""Show library interface and an in-memory implementation.

The matching engine only ever calls ``query_shows_by_title``; the numbered
lookups are there for the consumers that attach matched files to catalog
records.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from rapidfuzz import fuzz, process
from rapidfuzz.utils import default_process

from .models import Episode, Season, Show

LOGGER = logging.getLogger(__name__)

DEFAULT_SCORE_CUTOFF = 60.0


class LibraryError(Exception):
    """Base exception for show library failures."""


class LibraryNotFoundError(LibraryError):
    """The requested show, season or episode does not exist."""


class LibraryUnavailableError(LibraryError):
    """The backing catalog could not be reached or answered with an error."""


@runtime_checkable
class ShowLibrary(Protocol):
    """Read-only catalog of shows.

    ``query_shows_by_title`` must return candidates ordered by relevance, best
    first; the engine takes the first one without further ranking.
    """

    def query_shows_by_title(self, title: str) -> list[Show]: ...

    def get_show(self, show_id: str) -> Show: ...

    def get_seasons_by_show(self, show_id: str) -> list[Season]: ...

    def get_season_by_number(self, show_id: str, season_number: int) -> Season: ...

    def get_episode_by_number(self, show_id: str, season_number: int, episode_number: int) -> Episode: ...

    def get_episodes_by_season_number(self, show_id: str, season_number: int) -> list[Episode]: ...


def parse_show_id(show_id: str) -> int:
    """Convert a string show id into the numeric catalog id."""
    try:
        return int(show_id)
    except (TypeError, ValueError) as exc:
        raise LibraryError(f"Invalid show id: {show_id!r}") from exc


class CatalogLibrary:
    """In-memory show library ranked with rapidfuzz.

    Titles are lower-cased and stripped of punctuation, then scored with
    ``WRatio``. Candidates below ``score_cutoff`` are dropped and equal scores
    keep catalog order.
    """

    def __init__(
        self,
        shows: Iterable[Show],
        *,
        seasons: Iterable[Season] = (),
        episodes: Iterable[Episode] = (),
        score_cutoff: float = DEFAULT_SCORE_CUTOFF,
    ) -> None:
        self._shows: list[Show] = list(shows)
        self._by_id: dict[int, Show] = {show.id: show for show in self._shows}
        self._seasons: list[Season] = sorted(seasons, key=lambda s: (s.show_id, s.number))
        self._episodes: list[Episode] = sorted(episodes, key=lambda e: (e.show_id, e.season, e.number))
        self.score_cutoff = score_cutoff

    def __len__(self) -> int:
        return len(self._shows)

    def query_shows_by_title(self, title: str) -> list[Show]:
        if not default_process(title):
            return []

        choices: Sequence[str] = [show.title for show in self._shows]
        results = process.extract(
            title,
            choices,
            scorer=fuzz.WRatio,
            processor=default_process,
            score_cutoff=self.score_cutoff,
            limit=None,
        )
        # (choice, score, index); equal scores fall back to catalog order
        ranked = sorted(results, key=lambda item: (-item[1], item[2]))
        LOGGER.debug(
            "Catalog query %r -> %s",
            title,
            ", ".join(f"{self._shows[index].title} ({score:.0f})" for _, score, index in ranked) or "none",
        )
        return [self._shows[index] for _, _, index in ranked]

    def get_show(self, show_id: str) -> Show:
        show = self._by_id.get(parse_show_id(show_id))
        if show is None:
            raise LibraryNotFoundError(f"Show not found: {show_id}")
        return show

    def get_seasons_by_show(self, show_id: str) -> list[Season]:
        self.get_show(show_id)
        key = str(parse_show_id(show_id))
        return [season for season in self._seasons if season.show_id == key]

    def get_season_by_number(self, show_id: str, season_number: int) -> Season:
        for season in self.get_seasons_by_show(show_id):
            if season.number == season_number:
                return season
        raise LibraryNotFoundError(f"Season {season_number} not found for show {show_id}")

    def get_episode_by_number(self, show_id: str, season_number: int, episode_number: int) -> Episode:
        for episode in self.get_episodes_by_season_number(show_id, season_number):
            if episode.number == episode_number:
                return episode
        raise LibraryNotFoundError(f"Episode S{season_number:02d}E{episode_number:02d} not found for show {show_id}")

    def get_episodes_by_season_number(self, show_id: str, season_number: int) -> list[Episode]:
        self.get_show(show_id)
        key = str(parse_show_id(show_id))
        return [episode for episode in self._episodes if episode.show_id == key and episode.season == season_number]
