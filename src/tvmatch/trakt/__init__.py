"""Trakt API client package.

This package provides a read-only client for show, season and episode data
from the Trakt REST API and a ``ShowLibrary`` built on it.
"""

from __future__ import annotations

from .adapter import TraktAdapter
from .client import TraktClient, TraktError, TraktNotFoundError
from .library import TraktLibrary
from .models import (
    EpisodeResponse,
    SearchResult,
    SeasonResponse,
    ShowResponse,
)

__all__ = [
    "TraktAdapter",
    "TraktClient",
    "TraktError",
    "TraktLibrary",
    "TraktNotFoundError",
    "EpisodeResponse",
    "SearchResult",
    "SeasonResponse",
    "ShowResponse",
]
