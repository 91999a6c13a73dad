"""Core data models and path helpers."""

from coqdep_paths.core.models import (
    LogicalPath,
    Root,
    FileKind,
    DecomposedEntry,
    ExactMatches,
    PartialMatchesInSameRoot,
    MatchResult,
    KnownFile,
    parse_logical_path,
    format_logical_path,
)

__all__ = [
    "LogicalPath",
    "Root",
    "FileKind",
    "DecomposedEntry",
    "ExactMatches",
    "PartialMatchesInSameRoot",
    "MatchResult",
    "KnownFile",
    "parse_logical_path",
    "format_logical_path",
]
