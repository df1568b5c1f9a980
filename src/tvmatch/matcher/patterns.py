"""Built-in pattern tiers.

All expressions are searched against lower-cased text. ``default_pattern_library``
compiles them once; callers keep the returned value and pass it to the engine.
"""

from __future__ import annotations

from functools import lru_cache

from .core import EpisodePattern, PatternLibrary, PatternSet

STANDALONE = "standalone"
EMBEDDED = "embedded"
SEASON_FOLDER = "season_folder"
EPISODE_ONLY = "episode_only"


def _standalone_patterns() -> tuple[EpisodePattern, ...]:
    return (
        EpisodePattern.compile(
            r"(?P<show>.*?)(?: \((?P<year>[0-9]+)\))? - (?P<season>[0-9]+)x(?P<episode>[0-9]+)"
            r"(?:-[0-9]+x(?P<second>[0-9]+))?(?: - (?P<title>.*))?",
            "Show (2010) - 3x04 - Title",
            show="show",
            season="season",
            episode="episode",
            second_episode="second",
        ),
        EpisodePattern.compile(
            r"(?P<show>.*?)(?: \((?P<year>[0-9]+)\))?s(?P<season>[0-9]+)e(?P<episode>[0-9]+)"
            r"(?:-?e(?P<second>[0-9]+))?(?: - (?P<title>.*))?",
            "Show S03E04 - Title",
            show="show",
            season="season",
            episode="episode",
            second_episode="second",
        ),
    )


def _embedded_patterns() -> tuple[EpisodePattern, ...]:
    return (
        EpisodePattern.compile(
            r"(?P<show>.*?)s(?P<season>[0-9]+)[._ ]*e(?P<episode>[0-9]+)(?:[- ]?[e+](?P<second>[0-9]+))?",
            "S03E04-E05",
            show="show",
            season="season",
            episode="episode",
            second_episode="second",
        ),
        EpisodePattern.compile(
            r"(?P<show>.*?)s(?P<season>[0-9]{2})[._\- ]+(?P<episode>[0-9]+)",
            "S03-04",
            show="show",
            season="season",
            episode="episode",
        ),
        EpisodePattern.compile(
            r"(?P<show>.*?)(?:[^0-9]|^)(?P<season>[0-9]{1,2})x(?P<episode>[0-9]+)(?:-[0-9]+x(?P<second>[0-9]+))?",
            "3x04-3x05",
            show="show",
            season="season",
            episode="episode",
            second_episode="second",
        ),
        # No show group: the text before a bare block is too often noise.
        EpisodePattern.compile(
            r"[^0-9a-z](?P<season>[0-9]{1,2})(?P<episode>[0-9]{2})"
            r"(?:[.\-][0-9]+(?P<second>[0-9]{2})(?:[ \-_.]|$)[.\-]?)?(?:[^0-9a-z%]|$)",
            ".602.",
            season="season",
            episode="episode",
            second_episode="second",
        ),
    )


def _season_folder_patterns() -> tuple[EpisodePattern, ...]:
    return (
        EpisodePattern.compile(
            r".*?(?P<season>[0-9]+)$",
            "Season 3",
            season="season",
        ),
    )


def _episode_only_patterns() -> tuple[EpisodePattern, ...]:
    return (
        EpisodePattern.compile(r"(?P<ep>[0-9]{1,3})[._ -]of[._ -]+[0-9]{1,3}", "01 of 08", episode="ep"),
        EpisodePattern.compile(r"^(?P<ep>[0-9]{1,3})[^0-9]", "01 - Foo", episode="ep"),
        # c-u and w-z exclude "720p", "264x" style tails but keep "v2" revisions
        EpisodePattern.compile(r"e[a-z]*[ .\-_]*(?P<ep>[0-9]{2,3})(?:[^0-9c-uw-z%]|$)", "Foo ep234", episode="ep"),
        EpisodePattern.compile(r".*?[ .\-_](?P<ep>[0-9]{2,3})[^0-9c-uw-z%]+", "Foo - 04 - Bar", episode="ep"),
        EpisodePattern.compile(r".*?[ .\-_](?P<ep>[0-9]{2,3})$", "Foo - 04", episode="ep"),
        EpisodePattern.compile(r".*?[^0-9x](?P<ep>[0-9]{2,3})$", "Foo707", episode="ep"),
    )


@lru_cache(maxsize=1)
def default_pattern_library() -> PatternLibrary:
    """Return the built-in pattern tiers, compiled once per process."""
    return PatternLibrary(
        standalone=PatternSet(STANDALONE, _standalone_patterns()),
        embedded=PatternSet(EMBEDDED, _embedded_patterns()),
        season_folder=PatternSet(SEASON_FOLDER, _season_folder_patterns()),
        episode_only=PatternSet(EPISODE_ONLY, _episode_only_patterns()),
    )
