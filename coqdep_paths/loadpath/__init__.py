"""Load-path indexing - directory traversal, name decomposition and resolution.

This package provides tools for:
- Walking load-path roots in the compiler's scanning order
- Decomposing logical names into every (from, suffix) key
- Arbitrating ambiguous matches across roots
- Tracking auxiliary .mllib/.mlpack files
"""

from coqdep_paths.loadpath.decompose import decompose, suffixes, get_extension
from coqdep_paths.loadpath.known_files import KnownFileRegistry
from coqdep_paths.loadpath.resolver import LoadPathResolver
from coqdep_paths.loadpath.tables import ResolutionTable, insert_key
from coqdep_paths.loadpath.traversal import (
    DirectoryWalker,
    DirEntry,
    DirLogRegistry,
    list_directory,
)

__all__ = [
    "decompose",
    "suffixes",
    "get_extension",
    "KnownFileRegistry",
    "LoadPathResolver",
    "ResolutionTable",
    "insert_key",
    "DirectoryWalker",
    "DirEntry",
    "DirLogRegistry",
    "list_directory",
]
