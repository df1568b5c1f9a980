from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import asdict
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table

from .config import build_matcher, load_config
from .library import LibraryError
from .logging_utils import LOG_DATE_FORMAT, LOG_FORMAT, render_trace_block
from .matcher import MatchError
from .models import ResolvedEpisode
from .trakt import TraktLibrary

LOGGER = logging.getLogger(__name__)
CONSOLE = Console()

DEFAULT_CONFIG_PATH = "tvmatch.yaml"


def configure_logging(level: int, log_file: Path | None = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, handlers=handlers, force=True)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tvmatch", description="Identify TV episodes from media file paths.")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(os.getenv("TVMATCH_CONFIG", DEFAULT_CONFIG_PATH)),
        help="Path to tvmatch YAML config",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)
    match_parser = subparsers.add_parser("match", help="Match one or more file paths")
    match_parser.add_argument("paths", nargs="+", help="Media file paths")
    match_parser.add_argument("--json", action="store_true", help="Print one JSON object per matched episode")
    match_parser.add_argument("--trace", action="store_true", help="Print per-pass pattern traces")
    match_parser.set_defaults(handler=run_match)
    return parser


def _episode_payload(path: str, episode: ResolvedEpisode) -> dict[str, Any]:
    return {
        "path": path,
        "show_id": episode.show_id,
        "season": episode.season,
        "number": episode.number,
        "files": [asdict(item) for item in episode.files],
    }


def _results_table(rows: list[tuple[str, ResolvedEpisode]]) -> Table:
    table = Table(title="Matched episodes")
    for column in ("Path", "Show", "Episode", "Video", "Audio", "Source", "Resolution", "Group"):
        table.add_column(column)
    for path, episode in rows:
        media = episode.files[0] if episode.files else None
        table.add_row(
            path,
            episode.show_id,
            f"S{episode.season:02d}E{episode.number:02d}",
            (media and media.video_codec) or "-",
            (media and media.audio_codec) or "-",
            (media and media.source) or "-",
            (media and media.resolution) or "-",
            (media and media.release_group) or "-",
        )
    return table


def run_match(args: argparse.Namespace) -> int:
    configure_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        LOGGER.error("Failed to load config %s: %s", args.config, exc)
        return 1

    matcher = build_matcher(config)
    matched: list[tuple[str, ResolvedEpisode]] = []
    failures = 0

    try:
        for path in args.paths:
            trace: dict[str, Any] | None = {} if args.trace else None
            try:
                episodes = matcher.match(path, trace=trace)
            except (MatchError, LibraryError) as exc:
                failures += 1
                LOGGER.error("%s", exc)
                episodes = []
            if trace is not None:
                CONSOLE.print(render_trace_block(trace), markup=False, highlight=False, soft_wrap=True)
            matched.extend((path, episode) for episode in episodes)
    finally:
        if isinstance(matcher.library, TraktLibrary):
            matcher.library.close()

    if args.json:
        for path, episode in matched:
            CONSOLE.print(json.dumps(_episode_payload(path, episode)), markup=False, highlight=False, soft_wrap=True)
    elif matched:
        CONSOLE.print(_results_table(matched))

    return 2 if failures else 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
