"""Core data models for load-path resolution.

Logical paths are plain tuples of identifiers, outer component first.
Match results are immutable; the resolution tables replace them on every
insertion instead of mutating them in place.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union, Sequence


LogicalPath = Tuple[str, ...]


def parse_logical_path(value: Union[str, Sequence[str], None]) -> LogicalPath:
    """Turn a dotted name like 'Coq.Init.Logic' into a logical path.

    Empty components are dropped, so '' and None both give the root
    namespace. Sequences are accepted as-is.

    Args:
        value: Dotted string, sequence of components, or None

    Returns:
        Tuple of path components
    """
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(part for part in value.split(".") if part)
    return tuple(value)


def format_logical_path(path: Sequence[str]) -> str:
    """Render a logical path back to its dotted form."""
    return ".".join(path)


@dataclass(frozen=True)
class Root:
    """One mount point of the search space.

    Two roots are equal iff both the physical directory and the logical
    prefix are equal; partial matches only accumulate within one root.
    """
    phys_dir: str
    log_prefix: LogicalPath = ()

    def __str__(self) -> str:
        prefix = format_logical_path(self.log_prefix) or "<root>"
        return f"{self.phys_dir} as {prefix}"


class FileKind(Enum):
    """Kind of a discovered file, derived from its suffix."""
    SOURCE = ".v"
    VO = ".vo"
    VIO = ".vio"
    VOS = ".vos"
    OTHER = ""

    @classmethod
    def from_extension(cls, ext: str) -> "FileKind":
        """Get the kind for an extension (with its leading dot).

        Args:
            ext: File extension, e.g. '.vo'

        Returns:
            FileKind enum value, OTHER when unrecognised
        """
        for kind in cls:
            if kind.value and kind.value == ext:
                return kind
        return cls.OTHER

    @property
    def is_compiled(self) -> bool:
        return self in (FileKind.VO, FileKind.VIO, FileKind.VOS)


@dataclass(frozen=True)
class DecomposedEntry:
    """One way of splitting a logical name into a 'from' prefix and suffixes.

    Each suffix is paired with a flag telling whether it is the complete
    tail after the prefix (an exact reference) or a shorter, partial one.
    """
    from_prefix: LogicalPath
    suffixes: Tuple[Tuple[bool, LogicalPath], ...]


@dataclass(frozen=True)
class ExactMatches:
    """Files whose full logical tail equals the queried name.

    More than one file means a genuine conflict.
    """
    files: Tuple[str, ...]

    @property
    def is_ambiguous(self) -> bool:
        return len(self.files) > 1

    @property
    def status(self) -> str:
        return "ambiguous" if self.is_ambiguous else "exact"


@dataclass(frozen=True)
class PartialMatchesInSameRoot:
    """Files reachable only through a truncated suffix, all from one root."""
    root: Root
    files: Tuple[str, ...]

    @property
    def is_ambiguous(self) -> bool:
        return len(self.files) > 1

    @property
    def status(self) -> str:
        return "ambiguous" if self.is_ambiguous else "partial"


MatchResult = Union[ExactMatches, PartialMatchesInSameRoot]


@dataclass(frozen=True)
class KnownFile:
    """Location of an auxiliary file (.mllib/.mlpack) and the suffix it used."""
    phys_dir: Optional[str]
    suffix: str
