from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .library import CatalogLibrary, ShowLibrary
from .matcher import MatcherOptions, SimpleMatcher
from .matcher.metadata import DEFAULT_DICTIONARIES
from .models import Show
from .trakt import TraktClient, TraktLibrary
from .trakt.client import API_BASE_URL
from .utils import env_bool, env_list, env_str, load_yaml_file

LIBRARY_BACKENDS = ("trakt", "catalog")


@dataclass
class TraktSettings:
    client_id: str | None = None
    base_url: str = API_BASE_URL
    timeout: float = 30.0


@dataclass
class LibrarySettings:
    backend: str = "trakt"  # trakt | catalog
    shows: list[Show] = field(default_factory=list)


@dataclass
class MatcherSettings:
    strict_numbers: bool = False
    infer_show_from_folders: bool = False
    release_groups: list[str] = field(default_factory=list)


@dataclass
class AppConfig:
    library: LibrarySettings = field(default_factory=LibrarySettings)
    trakt: TraktSettings = field(default_factory=TraktSettings)
    matcher: MatcherSettings = field(default_factory=MatcherSettings)


def _ensure_mapping(value: Any, *, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{field_name}' must be provided as a mapping when specified")
    return value


def _ensure_string_list(value: Any, *, field_name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ValueError(f"'{field_name}' must be provided as a list of strings")
    result: list[str] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, str):
            raise ValueError(f"'{field_name}[{index}]' must be a string")
        cleaned = entry.strip()
        if cleaned:
            result.append(cleaned)
    return result


def _build_show(data: Any, index: int) -> Show:
    if not isinstance(data, dict):
        raise ValueError(f"'library.shows[{index}]' must be a mapping with 'id' and 'title'")
    try:
        show_id = int(data["id"])
    except KeyError as exc:
        raise ValueError(f"'library.shows[{index}].id' is required") from exc
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'library.shows[{index}].id' must be an integer") from exc

    title = str(data.get("title") or "").strip()
    if not title:
        raise ValueError(f"'library.shows[{index}].title' is required")

    year_raw = data.get("year")
    try:
        year = int(year_raw) if year_raw is not None else None
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'library.shows[{index}].year' must be an integer") from exc

    return Show(id=show_id, title=title, year=year, slug=data.get("slug"))


def _build_library_settings(data: dict[str, Any]) -> LibrarySettings:
    backend = str(data.get("backend", "trakt")).strip().lower()
    if backend not in LIBRARY_BACKENDS:
        raise ValueError(f"'library.backend' must be one of {', '.join(LIBRARY_BACKENDS)}, got: {backend}")

    shows_raw = data.get("shows", []) or []
    if not isinstance(shows_raw, list):
        raise ValueError("'library.shows' must be provided as a list when specified")

    return LibrarySettings(
        backend=backend,
        shows=[_build_show(entry, index) for index, entry in enumerate(shows_raw)],
    )


def _build_trakt_settings(data: dict[str, Any]) -> TraktSettings:
    try:
        timeout = float(data.get("timeout", 30.0))
    except (TypeError, ValueError) as exc:
        raise ValueError("'trakt.timeout' must be a number") from exc
    if timeout <= 0:
        raise ValueError("'trakt.timeout' must be greater than 0")

    client_id = env_str("TRAKT_CLIENT_ID") or (str(data["client_id"]).strip() if data.get("client_id") else None)
    # An unset ${TRAKT_CLIENT_ID} reference survives expandvars verbatim
    if client_id and client_id.startswith("$"):
        client_id = None

    return TraktSettings(
        client_id=client_id,
        base_url=str(data.get("base_url") or API_BASE_URL),
        timeout=timeout,
    )


def _build_matcher_settings(data: dict[str, Any]) -> MatcherSettings:
    env_strict = env_bool("TVMATCH_STRICT_NUMBERS")
    strict = bool(data.get("strict_numbers", False)) if env_strict is None else env_strict
    release_groups = _ensure_string_list(data.get("release_groups"), field_name="matcher.release_groups")
    release_groups.extend(env_list("TVMATCH_RELEASE_GROUPS") or [])
    return MatcherSettings(
        strict_numbers=strict,
        infer_show_from_folders=bool(data.get("infer_show_from_folders", False)),
        release_groups=release_groups,
    )


def build_config(data: dict[str, Any]) -> AppConfig:
    library = _build_library_settings(_ensure_mapping(data.get("library"), field_name="library"))
    trakt = _build_trakt_settings(_ensure_mapping(data.get("trakt"), field_name="trakt"))
    matcher = _build_matcher_settings(_ensure_mapping(data.get("matcher"), field_name="matcher"))

    if library.backend == "trakt" and not trakt.client_id:
        raise ValueError("'trakt.client_id' (or TRAKT_CLIENT_ID) is required for the trakt library backend")
    if library.backend == "catalog" and not library.shows:
        raise ValueError("'library.shows' must list at least one show for the catalog library backend")

    return AppConfig(library=library, trakt=trakt, matcher=matcher)


def load_config(path: Path) -> AppConfig:
    return build_config(load_yaml_file(path))


def build_library(config: AppConfig) -> ShowLibrary:
    if config.library.backend == "catalog":
        return CatalogLibrary(config.library.shows)
    client = TraktClient(
        config.trakt.client_id or "",
        base_url=config.trakt.base_url,
        timeout=config.trakt.timeout,
    )
    return TraktLibrary(client)


def build_matcher(config: AppConfig, library: ShowLibrary | None = None) -> SimpleMatcher:
    """Wire a matcher from configuration, building the library unless one is given."""
    settings = config.matcher
    return SimpleMatcher(
        library if library is not None else build_library(config),
        dictionaries=DEFAULT_DICTIONARIES.with_release_groups(settings.release_groups),
        options=MatcherOptions(
            strict_numbers=settings.strict_numbers,
            infer_show_from_folders=settings.infer_show_from_folders,
        ),
    )
