"""Tests for Trakt adapter module."""

from __future__ import annotations

from datetime import datetime, timezone

from tvmatch.models import Episode, Season, Show
from tvmatch.trakt.adapter import TraktAdapter
from tvmatch.trakt.models import EpisodeResponse, SeasonResponse, ShowResponse


class TestTraktAdapter:
    """Tests for API response to tvmatch model adapter."""

    def test_to_show_mapping(self) -> None:
        """Test ShowResponse maps correctly to Show model."""
        response = ShowResponse.model_validate(
            {
                "title": "The Wire",
                "year": 2002,
                "overview": "Baltimore drug scene.",
                "ids": {"trakt": 1429, "slug": "the-wire", "tvdb": 79126, "imdb": "tt0306414", "tmdb": 1438},
            }
        )

        show = TraktAdapter().to_show(response)

        assert show == Show(
            id=1429,
            title="The Wire",
            year=2002,
            slug="the-wire",
            overview="Baltimore drug scene.",
            ids={"trakt": "1429", "slug": "the-wire", "tvdb": "79126", "imdb": "tt0306414", "tmdb": "1438"},
        )

    def test_to_show_drops_missing_ids(self) -> None:
        response = ShowResponse.model_validate({"title": "Pilot Only", "ids": {"trakt": 7}})

        show = TraktAdapter().to_show(response)

        assert show.ids == {"trakt": "7"}
        assert show.year is None
        assert show.slug is None

    def test_to_season_mapping(self) -> None:
        """Test SeasonResponse maps correctly to Season model."""
        response = SeasonResponse.model_validate(
            {"number": 3, "ids": {"trakt": 3950}, "title": "Season 3", "episode_count": 12}
        )

        season = TraktAdapter().to_season("1429", response)

        assert season == Season(show_id="1429", number=3, title="Season 3", episode_count=12)

    def test_to_season_counts_embedded_episodes(self) -> None:
        response = SeasonResponse.model_validate(
            {
                "number": 1,
                "ids": {"trakt": 1},
                "episodes": [
                    {"season": 1, "number": 1, "ids": {"trakt": 10}},
                    {"season": 1, "number": 2, "ids": {"trakt": 11}},
                ],
            }
        )

        assert TraktAdapter().to_season("1429", response).episode_count == 2

    def test_to_episode_mapping(self) -> None:
        """Test EpisodeResponse maps correctly to Episode model."""
        aired = datetime(2004, 10, 11, 1, 0, tzinfo=timezone.utc)
        response = EpisodeResponse(
            season=3,
            number=4,
            title="Hamsterdam",
            ids={"trakt": 73520},
            overview="Bunny's plan.",
            first_aired=aired,
        )

        episode = TraktAdapter().to_episode("1429", response)

        assert episode == Episode(
            show_id="1429",
            season=3,
            number=4,
            title="Hamsterdam",
            overview="Bunny's plan.",
            first_aired=aired,
        )
