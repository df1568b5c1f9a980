"""HTTP client for the Trakt REST API."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .models import EpisodeResponse, SearchResult, SeasonResponse, ShowResponse

LOGGER = logging.getLogger(__name__)

API_BASE_URL = "https://api.trakt.tv"
API_VERSION = "2"

MAX_RETRIES = 3
RETRY_BACKOFF = 1.0

ModelT = TypeVar("ModelT", bound=BaseModel)


def _retry_after_seconds(value: str | None, default: float) -> int:
    """Seconds to wait for a Retry-After header given as seconds or an HTTP date."""
    if not value:
        return int(default)
    try:
        return max(int(value), 0)
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return int(default)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(int((when - datetime.now(timezone.utc)).total_seconds()), 0)


class TraktError(Exception):
    """Base exception for Trakt API errors."""


class TraktNotFoundError(TraktError):
    """Resource not found (404)."""


class TraktClient:
    """HTTP client for the Trakt REST API.

    Read-only: search and numbered lookups for shows, seasons and episodes,
    with retry and rate-limit handling. Responses are not cached.
    """

    def __init__(
        self,
        client_id: str,
        *,
        base_url: str = API_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            client_id: Trakt application client id, sent as ``trakt-api-key``
            base_url: API root, overridable for staging or tests
            timeout: HTTP request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            timeout=timeout,
            headers={
                "Content-Type": "application/json",
                "trakt-api-version": API_VERSION,
                "trakt-api-key": client_id,
            },
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Make an HTTP request with retry logic.

        Args:
            method: HTTP method
            path: URL path
            **kwargs: Additional arguments passed to httpx

        Returns:
            Response object

        Raises:
            TraktNotFoundError: If resource not found (404)
            TraktError: On other API errors
        """
        url = f"{self.base_url}{path}"
        last_exception: Exception | None = None
        backoff = RETRY_BACKOFF

        for attempt in range(MAX_RETRIES):
            try:
                response = self._client.request(method, url, **kwargs)

                if response.status_code == 404:
                    raise TraktNotFoundError(f"Resource not found: {path}")
                if response.status_code == 429:
                    # Rate limited - wait and retry
                    retry_after = _retry_after_seconds(response.headers.get("Retry-After"), backoff)
                    LOGGER.warning("Rate limited, waiting %d seconds", retry_after)
                    time.sleep(retry_after)
                    backoff = min(backoff * 2, 30.0)
                    continue
                if 400 <= response.status_code < 500:
                    raise TraktError(f"Request rejected ({response.status_code}): {path}")
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as exc:
                last_exception = exc
                if attempt < MAX_RETRIES - 1:
                    LOGGER.debug("Request failed (attempt %d/%d): %s", attempt + 1, MAX_RETRIES, exc)
                    time.sleep(backoff)
                    backoff = min(backoff * 2, 30.0)
            except httpx.RequestError as exc:
                last_exception = exc
                if attempt < MAX_RETRIES - 1:
                    LOGGER.debug("Request error (attempt %d/%d): %s", attempt + 1, MAX_RETRIES, exc)
                    time.sleep(backoff)
                    backoff = min(backoff * 2, 30.0)

        raise TraktError(f"Failed to fetch {path} after {MAX_RETRIES} attempts") from last_exception

    def _json(self, response: httpx.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TraktError(f"Invalid JSON from {path}") from exc

    def _parse(self, model: type[ModelT], data: Any, path: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise TraktError(f"Unexpected response shape from {path}") from exc

    def _parse_list(self, model: type[ModelT], response: httpx.Response, path: str) -> list[ModelT]:
        data = self._json(response, path)
        if not isinstance(data, list):
            raise TraktError(f"Expected a list from {path}")
        return [self._parse(model, item, path) for item in data]

    def search_shows(self, query: str, *, limit: int = 10) -> list[ShowResponse]:
        """Search shows by title, best match first.

        Args:
            query: Free text title
            limit: Maximum number of results

        Returns:
            Shows in the relevance order Trakt returned them

        Raises:
            TraktError: On API errors
        """
        path = "/search/show"
        LOGGER.debug("Searching shows: %r", query)
        response = self._request("GET", path, params={"query": query, "limit": limit})
        results = self._parse_list(SearchResult, response, path)
        return [result.show for result in results if result.show is not None]

    def get_show(self, show_id: int) -> ShowResponse:
        """Fetch a show by Trakt id.

        Raises:
            TraktNotFoundError: If the show doesn't exist
            TraktError: On API errors
        """
        path = f"/shows/{show_id}"
        response = self._request("GET", path, params={"extended": "full"})
        return self._parse(ShowResponse, self._json(response, path), path)

    def get_seasons(self, show_id: int) -> list[SeasonResponse]:
        """Fetch all seasons of a show, without episodes."""
        path = f"/shows/{show_id}/seasons"
        response = self._request("GET", path, params={"extended": "full"})
        return self._parse_list(SeasonResponse, response, path)

    def get_season_episodes(self, show_id: int, season: int) -> list[EpisodeResponse]:
        """Fetch the episodes of one season."""
        path = f"/shows/{show_id}/seasons/{season}"
        response = self._request("GET", path, params={"extended": "full"})
        return self._parse_list(EpisodeResponse, response, path)

    def get_episode(self, show_id: int, season: int, episode: int) -> EpisodeResponse:
        """Fetch a single episode by season and episode number."""
        path = f"/shows/{show_id}/seasons/{season}/episodes/{episode}"
        response = self._request("GET", path, params={"extended": "full"})
        return self._parse(EpisodeResponse, self._json(response, path), path)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> TraktClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()
