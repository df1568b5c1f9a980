"""Release metadata extraction from media filenames.

Each category is an ordered token list; the first token contained in the
filename wins that category. Order matters wherever one token is a substring of
another ("eac3" before "ac3", "dts-hd" before "dts").
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from ..logging_utils import render_fields_block
from ..models import FileMetadata

LOGGER = logging.getLogger(__name__)

VIDEO_CODECS: tuple[str, ...] = (
    "x265",
    "h265",
    "h.265",
    "hevc",
    "x264",
    "h264",
    "h.264",
    "avc",
    "xvid",
    "divx",
    "vc-1",
    "mpeg2",
)

AUDIO_CODECS: tuple[str, ...] = (
    "truehd",
    "atmos",
    "dts-hd",
    "dts",
    "eac3",
    "ddp5.1",
    "dd5.1",
    "ac3",
    "aac",
    "flac",
    "mp3",
)

SOURCES: tuple[str, ...] = (
    "bluray",
    "blu-ray",
    "bdrip",
    "brrip",
    "web-dl",
    "webdl",
    "webrip",
    "hdtv",
    "pdtv",
    "sdtv",
    "dsr",
    "dvdrip",
    "dvd",
)

RESOLUTIONS: tuple[str, ...] = (
    "2160p",
    "1080p",
    "1080i",
    "720p",
    "576p",
    "480p",
)

# Matched as "-<group>" against the original-case filename
RELEASE_GROUPS: tuple[str, ...] = (
    "DIMENSION",
    "KILLERS",
    "IMMERSE",
    "CtrlHD",
    "SPARKS",
    "EVOLVE",
    "ORENJI",
    "REWARD",
    "DEMAND",
    "SiNNERS",
    "RARBG",
    "FLEET",
    "KiNGS",
    "BATV",
    "ASAP",
    "MiNX",
    "EZTV",
    "2HD",
    "AFG",
    "AVS",
    "FQM",
    "FoV",
    "FUM",
    "LOL",
    "NTb",
    "SVA",
    "TLA",
    "W4F",
)


@dataclass(frozen=True, slots=True)
class MetadataDictionaries:
    video_codecs: tuple[str, ...] = VIDEO_CODECS
    audio_codecs: tuple[str, ...] = AUDIO_CODECS
    sources: tuple[str, ...] = SOURCES
    resolutions: tuple[str, ...] = RESOLUTIONS
    release_groups: tuple[str, ...] = RELEASE_GROUPS

    def with_release_groups(self, extra: Iterable[str]) -> MetadataDictionaries:
        """Return a copy whose release groups are extended, preserving order and dropping duplicates."""
        merged = list(self.release_groups)
        for group in extra:
            cleaned = group.strip().lstrip("-")
            if cleaned and cleaned not in merged:
                merged.append(cleaned)
        return replace(self, release_groups=tuple(merged))


DEFAULT_DICTIONARIES = MetadataDictionaries()


def _first_contained(text: str, tokens: Sequence[str]) -> str | None:
    for token in tokens:
        if token in text:
            return token
    return None


def parse_file_metadata(
    filename: str,
    dictionaries: MetadataDictionaries = DEFAULT_DICTIONARIES,
    *,
    path: str | None = None,
) -> FileMetadata:
    """Extract codec, source, resolution and release group from a filename.

    Codec, source and resolution are searched case-insensitively; release
    groups keep their original case, so they are searched against the filename
    as given. A category with no hit stays ``None``.
    """
    lowered = filename.lower()
    group = None
    for candidate in dictionaries.release_groups:
        if f"-{candidate}" in filename:
            group = candidate
            break

    metadata = FileMetadata(
        name=filename,
        path=path,
        video_codec=_first_contained(lowered, dictionaries.video_codecs),
        audio_codec=_first_contained(lowered, dictionaries.audio_codecs),
        source=_first_contained(lowered, dictionaries.sources),
        resolution=_first_contained(lowered, dictionaries.resolutions),
        release_group=group,
    )

    if LOGGER.isEnabledFor(logging.DEBUG):
        LOGGER.debug(
            render_fields_block(
                "Parsed file metadata",
                {
                    "Name": metadata.name,
                    "Video codec": metadata.video_codec,
                    "Audio codec": metadata.audio_codec,
                    "Source": metadata.source,
                    "Resolution": metadata.resolution,
                    "Release group": metadata.release_group,
                },
            )
        )

    return metadata
