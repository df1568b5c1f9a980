from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


WHITESPACE_PATTERN = re.compile(r"\s+")

# Boolean true/false string values
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

# Separators left dangling at the edges of a captured show token
_TITLE_EDGE_CHARS = " -_([{"


def clean_show_title(value: str) -> str:
    """Turn a raw captured show token into a catalog search title.

    Dots are release-name word separators, so they become spaces; runs of
    whitespace collapse and separators left at either edge are trimmed.
    """
    spaced = value.replace(".", " ")
    collapsed = WHITESPACE_PATTERN.sub(" ", spaced)
    return collapsed.strip(_TITLE_EDGE_CHARS)


def expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: expand_env(val) for key, val in value.items()}
    return value


def load_yaml_file(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    return expand_env(data)


def parse_env_bool(value: Optional[str]) -> Optional[bool]:
    """Parse a boolean from an environment variable string.

    Returns None if value is None or not a recognized boolean string.
    """
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


def env_bool(name: str) -> Optional[bool]:
    """Get a boolean from an environment variable.

    Returns None if not set or not a recognized boolean string.
    """
    return parse_env_bool(os.getenv(name))


def env_str(name: str) -> Optional[str]:
    """Get a stripped string from an environment variable, None when unset or blank."""
    raw = os.getenv(name)
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None


def env_list(name: str, separator: str = ",") -> Optional[List[str]]:
    """Get a list of strings from an environment variable.

    Returns None if not set, empty list if set but empty.
    """
    raw = os.getenv(name)
    if raw is None:
        return None
    parts = [part.strip() for part in raw.split(separator) if part.strip()]
    return parts
