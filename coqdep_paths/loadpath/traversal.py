"""Directory traversal in the compiler's scanning order.

Walks a physical tree and hands every regular file to a callback together
with the logical prefix of the directory holding it. The delivery order
has to match the order the compiler itself uses when it scans load paths:

- files found in sub-directories come before the directory's own files;
- among sibling sub-directories, the one found last is delivered first;
- a directory's own files keep their listing order.

If B lists as [C1, C2, F, G], everything under C2 is delivered first,
then everything under C1, then B/F and B/G.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from coqdep_paths.core.models import LogicalPath, Root
from coqdep_paths.core.paths import physical_dir


logger = logging.getLogger(__name__)


# Directories the compiler never descends into
SKIPPED_DIRNAMES = {
    "CVS",
    "_darcs",
}


@dataclass(frozen=True)
class DirEntry:
    """An immediate entry of a listed directory."""
    name: str
    is_dir: bool = False


Lister = Callable[[str], Iterable[DirEntry]]
FileCallback = Callable[[Root, str, LogicalPath, str], None]
Warn = Callable[[str], None]

# (physical dir, logical prefix, file name)
FoundFile = Tuple[str, LogicalPath, str]


def is_ident(name: str) -> bool:
    """Check whether a name can be a logical path component.

    Identifiers may contain primes after their first character (``x'``).
    """
    if not name or name[0] == "'":
        return False
    return name.replace("'", "_").isidentifier()


def ok_dirname(name: str) -> bool:
    """Check whether a sub-directory takes part in the load path.

    Hidden and version-control directories are skipped, as are names like
    ``my-dir`` that cannot become a logical path component.
    """
    return not name.startswith(".") and name not in SKIPPED_DIRNAMES and is_ident(name)


def list_directory(phys_dir: str) -> List[DirEntry]:
    """List a directory in raw filesystem order.

    Hidden and version-control directories are left out entirely.

    Raises:
        OSError: If the directory does not exist or cannot be read
    """
    entries: List[DirEntry] = []
    with os.scandir(phys_dir) as it:
        for entry in it:
            if entry.is_dir():
                if ok_dirname(entry.name):
                    entries.append(DirEntry(entry.name, is_dir=True))
            else:
                entries.append(DirEntry(entry.name))
    return entries


def make_root(phys_dir: str, log_prefix: Sequence[str]) -> Root:
    """Build a root keyed by the canonical form of its directory."""
    return Root(physical_dir(phys_dir), tuple(log_prefix))


class DirLogRegistry:
    """Logical prefix assigned to each physical directory ever visited.

    Lets the caller check whether '.' already received a logical path
    once every root has been ingested, and spot directories met twice.
    """

    def __init__(self):
        self._logpaths: Dict[str, LogicalPath] = {}

    def register(self, phys_dir: str, log_prefix: Sequence[str]):
        """Record the logical prefix of a directory (last write wins)."""
        self._logpaths[physical_dir(phys_dir)] = tuple(log_prefix)

    def find(self, phys_dir: str) -> Optional[LogicalPath]:
        """Get the logical prefix of a directory, or None if it has none."""
        return self._logpaths.get(physical_dir(phys_dir))

    def __contains__(self, phys_dir: str) -> bool:
        return self.find(phys_dir) is not None

    def __len__(self) -> int:
        return len(self._logpaths)


class DirectoryWalker:
    """Walks load-path roots and delivers their files in scanning order."""

    def __init__(
        self,
        registry: DirLogRegistry,
        lister: Optional[Lister] = None,
        warn: Optional[Warn] = None,
    ):
        """Initialize the walker.

        Args:
            registry: Registry receiving every visited directory
            lister: Directory listing function, defaults to list_directory
            warn: Diagnostic sink, defaults to the module logger
        """
        self.registry = registry
        self.lister = lister or list_directory
        self.warn = warn or logger.warning

    def walk(
        self,
        recursive: bool,
        on_file: FileCallback,
        phys_dir: str,
        log_prefix: Sequence[str] = (),
    ):
        """Visit a root and hand each file to ``on_file``.

        Files are buffered until the whole root is scanned, then delivered
        as ``on_file(root, phys_dir, log_prefix, filename)``.

        Args:
            recursive: Whether to descend into sub-directories
            on_file: Callback receiving each discovered file
            phys_dir: Physical directory of the root
            log_prefix: Logical prefix mounted on that directory
        """
        found = self.collect(recursive, phys_dir, tuple(log_prefix))
        if not found:
            return

        root = make_root(phys_dir, log_prefix)
        for file_dir, file_prefix, filename in found:
            on_file(root, file_dir, file_prefix, filename)

    def collect(
        self,
        recursive: bool,
        phys_dir: str,
        log_prefix: LogicalPath,
    ) -> List[FoundFile]:
        """Return the files of one directory (and its subtree) in delivery order.

        An unreadable directory is reported and contributes nothing.
        """
        try:
            entries = list(self.lister(phys_dir))
        except OSError:
            self.warn(f"cannot open {phys_dir}")
            return []

        self.registry.register(phys_dir, log_prefix)

        own_files: List[FoundFile] = []
        subtrees: List[List[FoundFile]] = []
        for entry in entries:
            if entry.is_dir:
                if recursive:
                    subtrees.append(self.collect(
                        True,
                        os.path.join(phys_dir, entry.name),
                        log_prefix + (entry.name,),
                    ))
            else:
                own_files.append((phys_dir, log_prefix, entry.name))

        found: List[FoundFile] = []
        for subtree in reversed(subtrees):
            found.extend(subtree)
        found.extend(own_files)
        return found
