"""Priority merge of pattern passes into one partial match."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from .core import ALL_FIELDS, MatchField, PartialMatch, PatternSet

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MergePass:
    """One (pattern set, text fragment) step of a merge.

    Attributes:
        patterns: Pattern set to run
        text: Fragment to search, already lower-cased by the caller
        allowed: Fields this pass may write; others it extracts are discarded
        label: Human readable scope for traces ("filename", "parent", ...)
    """

    patterns: PatternSet
    text: str
    allowed: frozenset[MatchField] = ALL_FIELDS
    label: str = ""


def merge_fields(
    passes: Iterable[MergePass],
    accumulator: PartialMatch | None = None,
    *,
    trace: dict[str, Any] | None = None,
) -> PartialMatch:
    """Run each pass in order, filling only fields that are still unset.

    Earlier passes have priority: once a field holds a value no later pass can
    replace it.

    Args:
        passes: Ordered merge steps
        accumulator: Partial match to fill in place, a new one when omitted
        trace: Optional trace dict; one entry per pass is appended to ``attempts``

    Returns:
        The filled accumulator
    """
    result = accumulator if accumulator is not None else PartialMatch()
    attempts: list[dict[str, Any]] | None = None
    if trace is not None:
        attempts = trace.setdefault("attempts", [])

    for step in passes:
        outcome = step.patterns.match(step.text)
        if outcome is None:
            if attempts is not None:
                attempts.append(
                    {"set": step.patterns.name, "scope": step.label, "text": step.text, "status": "no-match"}
                )
            continue

        candidate, pattern = outcome
        written = result.fill(candidate, step.allowed)
        LOGGER.debug(
            "%s pattern %r on %s %r wrote %s",
            step.patterns.name,
            pattern.description,
            step.label or "text",
            step.text,
            ", ".join(name.value for name in written) or "nothing",
        )
        if attempts is not None:
            attempts.append(
                {
                    "set": step.patterns.name,
                    "scope": step.label,
                    "text": step.text,
                    "status": "matched",
                    "pattern": pattern.description,
                    "extracted": candidate.as_dict(),
                    "written": [name.value for name in written],
                }
            )

    return result
