"""tvmatch core package.

The tvmatch package is organized into focused modules with clear separation of concerns:

- **matcher**: Pattern tiers, priority merging, release metadata and the
  ``SimpleMatcher`` engine that turns a file path into ``ResolvedEpisode`` records
- **library**: The ``ShowLibrary`` protocol and an in-memory ``CatalogLibrary``
- **trakt**: Trakt API client and the ``TraktLibrary`` built on it
- **config**: YAML configuration and matcher wiring
- **cli**: Command line front end

The main entry point for matching is ``SimpleMatcher.match``.
"""

from .library import CatalogLibrary, LibraryError, ShowLibrary
from .matcher import NoMatchingShowError, SimpleMatcher
from .models import FileMetadata, ResolvedEpisode, Show

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CatalogLibrary",
    "FileMetadata",
    "LibraryError",
    "NoMatchingShowError",
    "ResolvedEpisode",
    "Show",
    "ShowLibrary",
    "SimpleMatcher",
]
