"""Matcher package for filename based episode recognition.

This package provides the matching logic for tvmatch, including:
- Pattern tiers and their typed field extractors
- Priority merging of pattern passes
- Release metadata extraction
- The path -> episode engine

Public API:
- SimpleMatcher: Resolve a path to ``ResolvedEpisode`` records
- default_pattern_library: The built-in pattern tiers

Example:
    from tvmatch.matcher import SimpleMatcher

    matcher = SimpleMatcher(library)
    for episode in matcher.match("/tv/The.Wire/The.Wire.S03E04.720p.HDTV.x264-LOL.mkv"):
        print(episode.show_id, episode.season, episode.number)
"""

from .core import ALL_FIELDS, EpisodePattern, MatchField, PartialMatch, PatternLibrary, PatternSet
from .engine import (
    InvalidEpisodeNumberError,
    MatchError,
    MatcherOptions,
    NoMatchingShowError,
    SimpleMatcher,
)
from .merger import MergePass, merge_fields
from .metadata import DEFAULT_DICTIONARIES, MetadataDictionaries, parse_file_metadata
from .patterns import default_pattern_library

__all__ = [
    "ALL_FIELDS",
    "DEFAULT_DICTIONARIES",
    "EpisodePattern",
    "InvalidEpisodeNumberError",
    "MatchError",
    "MatchField",
    "MatcherOptions",
    "MergePass",
    "MetadataDictionaries",
    "NoMatchingShowError",
    "PartialMatch",
    "PatternLibrary",
    "PatternSet",
    "SimpleMatcher",
    "default_pattern_library",
    "merge_fields",
    "parse_file_metadata",
]
