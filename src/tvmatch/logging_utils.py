from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from textwrap import wrap
from typing import Union

DEFAULT_WRAP_WIDTH = 110
DEFAULT_LABEL_WIDTH = 22
DEFAULT_INDENT = "    "
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s\n%(message)s\n"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

FieldMapping = Union[Mapping[str, object], Sequence[tuple[str, object]]]


def _stringify(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, str):
        return value.strip() or "-"
    if isinstance(value, (list, tuple, set)):
        return ", ".join(_stringify(item) for item in value) or "-"
    return str(value)


class LogBlockBuilder:
    """Multi-line, aligned log message: a title, key/value fields and bullet sections."""

    def __init__(
        self,
        title: str,
        *,
        wrap_width: int = DEFAULT_WRAP_WIDTH,
        label_width: int = DEFAULT_LABEL_WIDTH,
        indent: str = DEFAULT_INDENT,
    ) -> None:
        self.wrap_width = wrap_width
        self.label_width = label_width
        self.indent = indent
        self.lines: list[str] = [title, "-" * len(title)]

    def add_fields(self, fields: FieldMapping | None) -> None:
        if not fields:
            return
        items = list(fields.items()) if isinstance(fields, Mapping) else list(fields)
        label_width = max(min(max(len(str(key)) for key, _ in items), self.label_width), 8)
        value_width = max(self.wrap_width - len(self.indent) - label_width - 4, 32)

        for key, value in items:
            wrapped = wrap(_stringify(value), width=value_width) or [""]
            self.lines.append(f"{self.indent}{str(key):<{label_width}}: {wrapped[0]}")
            for continuation in wrapped[1:]:
                self.lines.append(f"{self.indent}{'':<{label_width}}  {continuation}")

    def add_section(self, heading: str, items: Iterable[str], *, empty_label: str = "(none)") -> None:
        if self.lines[-1] != "":
            self.lines.append("")
        self.lines.append(f"{heading}:")
        materialized = [item for item in items if item is not None]
        if not materialized:
            self.lines.append(f"{self.indent}{empty_label}")
            return
        width = max(self.wrap_width - len(self.indent) - 2, 24)
        for item in materialized:
            wrapped = wrap(_stringify(item), width=width) or [""]
            self.lines.append(f"{self.indent}- {wrapped[0]}")
            self.lines.extend(f"{self.indent}  {continuation}" for continuation in wrapped[1:])

    def render(self) -> str:
        return "\n".join(self.lines).rstrip()


def render_fields_block(title: str, fields: FieldMapping) -> str:
    builder = LogBlockBuilder(title)
    builder.add_fields(fields)
    return builder.render()


def render_trace_block(trace: Mapping[str, object]) -> str:
    """Render a match trace (see ``SimpleMatcher.match``) as a log block."""
    builder = LogBlockBuilder(f"Match trace: {trace.get('path', '?')}")
    builder.add_fields(
        [
            ("Status", trace.get("status")),
            ("Tokens", ", ".join(f"{key}={value!r}" for key, value in dict(trace.get("partial") or {}).items())),
            ("Result", trace.get("result")),
        ]
    )
    attempts = trace.get("attempts") or []
    lines = []
    for attempt in attempts:  # type: ignore[union-attr]
        line = f"{attempt['set']} on {attempt.get('scope') or 'text'} {attempt['text']!r}: {attempt['status']}"
        if attempt.get("written"):
            line += f" (wrote {', '.join(attempt['written'])})"
        lines.append(line)
    builder.add_section("Passes", lines)
    return builder.render()
