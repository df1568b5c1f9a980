from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(slots=True)
class Show:
    id: int
    title: str
    year: Optional[int] = None
    slug: Optional[str] = None
    overview: Optional[str] = None
    ids: Dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class Season:
    show_id: str
    number: int
    title: Optional[str] = None
    episode_count: int = 0
    overview: Optional[str] = None


@dataclass(slots=True)
class Episode:
    show_id: str
    season: int
    number: int
    title: Optional[str] = None
    overview: Optional[str] = None
    first_aired: Optional[dt.datetime] = None


@dataclass(slots=True)
class FileMetadata:
    name: Optional[str] = None
    path: Optional[str] = None
    video_codec: Optional[str] = None
    audio_codec: Optional[str] = None
    source: Optional[str] = None
    resolution: Optional[str] = None
    release_group: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ResolvedEpisode:
    show_id: str
    season: int
    number: int
    files: Tuple[FileMetadata, ...] = ()
