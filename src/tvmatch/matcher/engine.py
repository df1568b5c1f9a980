"""Path to episode resolution.

``SimpleMatcher.match`` runs the pattern tiers over the filename and its two
nearest directories, extracts release metadata, then asks the show library for
the title it found.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any

from ..library import ShowLibrary
from ..models import FileMetadata, ResolvedEpisode
from ..utils import clean_show_title
from .core import MatchField, PartialMatch, PatternLibrary
from .merger import MergePass, merge_fields
from .metadata import DEFAULT_DICTIONARIES, MetadataDictionaries, parse_file_metadata
from .patterns import default_pattern_library

LOGGER = logging.getLogger(__name__)

_SEASON_ONLY = frozenset({MatchField.SEASON})
_EPISODE_ONLY = frozenset({MatchField.EPISODE})
_DIRECTORY_FIELDS = frozenset({MatchField.SHOW, MatchField.SEASON, MatchField.EPISODE})


class MatchError(Exception):
    """Base exception for matching failures."""


class NoMatchingShowError(MatchError):
    """The library answered but had no candidate for the recognised title."""

    def __init__(self, title: str, path: str, metadata: FileMetadata | None = None) -> None:
        super().__init__(f"No matching show for '{title}' (from '{path}')")
        self.title = title
        self.path = path
        self.metadata = metadata


class InvalidEpisodeNumberError(MatchError):
    """A season or episode token is not a number (strict mode only)."""

    def __init__(self, field_name: str, token: str | None, path: str) -> None:
        super().__init__(f"Invalid {field_name} number {token!r} in '{path}'")
        self.field_name = field_name
        self.token = token
        self.path = path


@dataclass(frozen=True, slots=True)
class MatcherOptions:
    """Behaviour switches for ``SimpleMatcher``.

    Attributes:
        strict_numbers: Raise ``InvalidEpisodeNumberError`` for a missing or
            non-numeric season/episode token instead of using 0
        infer_show_from_folders: When nothing named the show, use the
            grandparent directory if the parent directory is a season folder
    """

    strict_numbers: bool = False
    infer_show_from_folders: bool = False


@dataclass(frozen=True, slots=True)
class PathParts:
    filename: str
    directory: str
    parent: str | None
    grandparent: str | None

    @classmethod
    def split(cls, path: str | os.PathLike[str]) -> PathParts:
        directory, filename = os.path.split(os.fspath(path))
        pure = PurePath(directory)
        ancestors = [part for part in pure.parts if part not in (pure.anchor, ".", "")]
        return cls(
            filename=filename,
            directory=directory,
            parent=ancestors[-1] if ancestors else None,
            grandparent=ancestors[-2] if len(ancestors) > 1 else None,
        )


class SimpleMatcher:
    """Regex cascade matcher backed by a show library.

    Holds only immutable configuration, so one instance can serve concurrent
    callers as long as the library can.
    """

    def __init__(
        self,
        library: ShowLibrary,
        patterns: PatternLibrary | None = None,
        dictionaries: MetadataDictionaries | None = None,
        *,
        options: MatcherOptions | None = None,
    ) -> None:
        self.library = library
        self.patterns = patterns or default_pattern_library()
        self.dictionaries = dictionaries or DEFAULT_DICTIONARIES
        self.options = options or MatcherOptions()

    def _passes(self, parts: PathParts) -> list[MergePass]:
        tiers = self.patterns
        filename = parts.filename.lower()
        passes = [
            MergePass(tiers.standalone, filename, label="filename"),
            MergePass(tiers.embedded, filename, label="filename"),
            MergePass(tiers.episode_only, filename, _EPISODE_ONLY, label="filename"),
        ]
        if parts.parent is not None:
            parent = parts.parent.lower()
            passes.append(MergePass(tiers.season_folder, parent, _SEASON_ONLY, label="parent"))
            passes.append(MergePass(tiers.embedded, parent, _DIRECTORY_FIELDS, label="parent"))
        if parts.grandparent is not None:
            passes.append(MergePass(tiers.embedded, parts.grandparent.lower(), _DIRECTORY_FIELDS, label="grandparent"))
        return passes

    def parse(self, path: str | os.PathLike[str], *, trace: dict[str, Any] | None = None) -> PartialMatch:
        """Recover raw show/season/episode tokens from a path without resolving the show."""
        parts = PathParts.split(path)
        partial = merge_fields(self._passes(parts), trace=trace)

        if (
            self.options.infer_show_from_folders
            and not partial.show
            and parts.parent is not None
            and parts.grandparent is not None
            and self.patterns.season_folder.match(parts.parent.lower()) is not None
        ):
            partial.show = parts.grandparent.lower()
            LOGGER.debug("Using show folder %r for '%s'", parts.grandparent, path)
            if trace is not None:
                trace.setdefault("attempts", []).append(
                    {"set": "show_folder", "scope": "grandparent", "text": partial.show, "status": "matched"}
                )

        return partial

    def parse_metadata(self, filename: str, directory: str | None = None) -> FileMetadata:
        return parse_file_metadata(filename, self.dictionaries, path=directory)

    def _to_number(self, field_name: str, token: str | None, path: str) -> int:
        if token:
            try:
                return int(token)
            except ValueError:
                pass
        if self.options.strict_numbers:
            raise InvalidEpisodeNumberError(field_name, token, path)
        LOGGER.debug("Using 0 for %s token %r in '%s'", field_name, token, path)
        return 0

    def match(self, path: str | os.PathLike[str], *, trace: dict[str, Any] | None = None) -> list[ResolvedEpisode]:
        """Resolve a file path to the episodes it contains.

        Args:
            path: File path, directories included where available
            trace: Optional dict collecting per-pass attempts and the outcome

        Returns:
            A one-element list, or an empty list when no show token was found

        Raises:
            NoMatchingShowError: The library returned no candidates
            InvalidEpisodeNumberError: Strict mode and a non-numeric token
            LibraryError: Propagated unchanged from the library
        """
        display_path = os.fspath(path)
        parts = PathParts.split(path)
        if trace is not None:
            trace["path"] = display_path

        partial = self.parse(path, trace=trace)
        title = clean_show_title(partial.show) if partial.show else ""
        if trace is not None:
            trace["partial"] = partial.as_dict()

        if not title:
            LOGGER.debug("No show recognised in '%s'", display_path)
            if trace is not None:
                trace["status"] = "skipped"
            return []

        metadata = self.parse_metadata(parts.filename, parts.directory or None)

        try:
            shows = self.library.query_shows_by_title(title)
        except Exception as exc:
            LOGGER.warning("Show lookup for %r failed while matching '%s': %s", title, display_path, exc)
            if trace is not None:
                trace["status"] = "error"
            raise

        if not shows:
            if trace is not None:
                trace["status"] = "no-show"
            raise NoMatchingShowError(title, display_path, metadata)

        show = shows[0]
        season = self._to_number("season", partial.season, display_path)
        number = self._to_number("episode", partial.episode, display_path)
        episode = ResolvedEpisode(show_id=str(show.id), season=season, number=number, files=(metadata,))

        LOGGER.info("Matched '%s' S%02dE%02d from '%s'", show.title, season, number, display_path)
        if trace is not None:
            trace["status"] = "matched"
            trace["result"] = {"show_id": episode.show_id, "title": show.title, "season": season, "episode": number}

        return [episode]
