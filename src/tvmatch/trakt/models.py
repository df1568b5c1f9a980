"""Pydantic models for Trakt API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ShowIds(BaseModel):
    """Identifier block of a show."""

    model_config = ConfigDict(extra="ignore")

    trakt: int
    slug: str | None = None
    tvdb: int | None = None
    imdb: str | None = None
    tmdb: int | None = None


class ShowResponse(BaseModel):
    """API response model for a show."""

    model_config = ConfigDict(extra="ignore")

    title: str
    year: int | None = None
    ids: ShowIds
    overview: str | None = None


class SearchResult(BaseModel):
    """One entry of a ``/search/show`` response."""

    model_config = ConfigDict(extra="ignore")

    type: str
    score: float | None = None
    show: ShowResponse | None = None


class EpisodeIds(BaseModel):
    model_config = ConfigDict(extra="ignore")

    trakt: int
    tvdb: int | None = None
    imdb: str | None = None
    tmdb: int | None = None


class EpisodeResponse(BaseModel):
    """API response model for an episode."""

    model_config = ConfigDict(extra="ignore")

    season: int
    number: int
    title: str | None = None
    ids: EpisodeIds
    overview: str | None = None
    first_aired: datetime | None = None


class SeasonIds(BaseModel):
    model_config = ConfigDict(extra="ignore")

    trakt: int
    tvdb: int | None = None
    tmdb: int | None = None


class SeasonResponse(BaseModel):
    """API response model for a season."""

    model_config = ConfigDict(extra="ignore")

    number: int
    ids: SeasonIds
    title: str | None = None
    overview: str | None = None
    episode_count: int = 0
    episodes: list[EpisodeResponse] = Field(default_factory=list)
