"""Core matcher types.

This module defines the partial-match accumulator and the immutable pattern
types the engine is configured with. A ``PatternLibrary`` is built once (see
``tvmatch.matcher.patterns.default_pattern_library``) and handed to the
engine; nothing in here holds mutable module state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Collection, Mapping


class MatchField(str, Enum):
    """Fields a pattern capture group can populate."""

    SHOW = "show"
    SEASON = "season"
    EPISODE = "episode"
    SECOND_EPISODE = "second_episode"


ALL_FIELDS: frozenset[MatchField] = frozenset(MatchField)


@dataclass(slots=True)
class PartialMatch:
    """Raw, not yet numeric, tokens recovered from a path.

    An empty string is treated the same as ``None``: the field is unset.
    """

    show: str | None = None
    season: str | None = None
    episode: str | None = None
    second_episode: str | None = None

    def get(self, name: MatchField) -> str | None:
        return getattr(self, name.value)

    def is_set(self, name: MatchField) -> bool:
        return bool(self.get(name))

    def fill(self, other: PartialMatch, allowed: Collection[MatchField] = ALL_FIELDS) -> list[MatchField]:
        """Copy populated fields from ``other`` into unset fields of ``self``.

        Returns the fields that were written.
        """
        written: list[MatchField] = []
        for name in MatchField:
            if name not in allowed:
                continue
            value = other.get(name)
            if value and not self.is_set(name):
                setattr(self, name.value, value)
                written.append(name)
        return written

    def as_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}


@dataclass(frozen=True, slots=True)
class EpisodePattern:
    """A compiled regex paired with the capture groups it feeds.

    Attributes:
        regex: Compiled expression, searched (not anchored) against a fragment
        groups: Mapping of target field to the capture group that fills it
        description: Short example of the shape the pattern recognises
    """

    regex: re.Pattern[str]
    groups: Mapping[MatchField, str]
    description: str = ""

    def __post_init__(self) -> None:
        known = set(self.regex.groupindex)
        for target, group in self.groups.items():
            if group not in known:
                raise ValueError(
                    f"Pattern {self.regex.pattern!r} has no group {group!r} for field '{target.value}'"
                )

    @classmethod
    def compile(cls, regex: str, description: str = "", **groups: str) -> EpisodePattern:
        """Build a pattern, mapping keyword field names to group names.

        ``EpisodePattern.compile(r"s(?P<s>\\d+)", season="s")``
        """
        mapping = {MatchField(name): group for name, group in groups.items()}
        return cls(regex=re.compile(regex), groups=mapping, description=description)

    def apply(self, text: str) -> PartialMatch | None:
        match = self.regex.search(text)
        if match is None:
            return None
        result = PartialMatch()
        for target, group in self.groups.items():
            value = match.group(group)
            if value:
                setattr(result, target.value, value)
        return result


@dataclass(frozen=True, slots=True)
class PatternSet:
    """An ordered group of patterns sharing one matching scope.

    The first pattern that matches wins; capture groups are never mixed across
    patterns of the same set.
    """

    name: str
    patterns: tuple[EpisodePattern, ...]

    def match(self, text: str) -> tuple[PartialMatch, EpisodePattern] | None:
        for pattern in self.patterns:
            result = pattern.apply(text)
            if result is not None:
                return result, pattern
        return None


@dataclass(frozen=True, slots=True)
class PatternLibrary:
    """The four pattern tiers the engine consults, in decreasing context."""

    standalone: PatternSet
    embedded: PatternSet
    season_folder: PatternSet
    episode_only: PatternSet
