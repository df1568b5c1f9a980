"""Adapter to convert Trakt API responses to tvmatch dataclass models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import Episode, Season, Show

if TYPE_CHECKING:
    from .models import EpisodeResponse, SeasonResponse, ShowResponse


class TraktAdapter:
    """Converts Trakt API responses to tvmatch dataclass models."""

    def to_show(self, response: ShowResponse) -> Show:
        """Convert ShowResponse to Show model.

        Args:
            response: API show response

        Returns:
            tvmatch Show dataclass keyed by the Trakt id
        """
        ids = response.ids
        external = {
            "trakt": ids.trakt,
            "slug": ids.slug,
            "tvdb": ids.tvdb,
            "imdb": ids.imdb,
            "tmdb": ids.tmdb,
        }
        return Show(
            id=ids.trakt,
            title=response.title,
            year=response.year,
            slug=ids.slug,
            overview=response.overview,
            ids={key: str(value) for key, value in external.items() if value is not None},
        )

    def to_season(self, show_id: str, response: SeasonResponse) -> Season:
        """Convert SeasonResponse to Season model.

        Args:
            show_id: Canonical id of the owning show
            response: API season response

        Returns:
            tvmatch Season dataclass
        """
        return Season(
            show_id=show_id,
            number=response.number,
            title=response.title,
            episode_count=response.episode_count or len(response.episodes),
            overview=response.overview,
        )

    def to_episode(self, show_id: str, response: EpisodeResponse) -> Episode:
        """Convert EpisodeResponse to Episode model.

        Args:
            show_id: Canonical id of the owning show
            response: API episode response

        Returns:
            tvmatch Episode dataclass
        """
        return Episode(
            show_id=show_id,
            season=response.season,
            number=response.number,
            title=response.title,
            overview=response.overview,
            first_aired=response.first_aired,
        )
