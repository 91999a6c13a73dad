"""Resolution tables keyed by (from-prefix, suffix).

Each key holds one MatchResult. Exact matches always dominate partial
ones; partial matches from different roots never merge, the most
recently ingested root wins.
"""

from typing import Dict, Iterator, Optional, Sequence, Tuple, Union

from coqdep_paths.core.models import (
    DecomposedEntry,
    ExactMatches,
    LogicalPath,
    MatchResult,
    PartialMatchesInSameRoot,
    Root,
    parse_logical_path,
)
from coqdep_paths.core.paths import files_equivalent


TableKey = Tuple[LogicalPath, LogicalPath]


def add_set(filename: str, files: Sequence[str]) -> Tuple[str, ...]:
    """Prepend a file, dropping any earlier spelling of the same file."""
    return (filename,) + tuple(f for f in files if not files_equivalent(filename, f))


def insert_key(root: Root, full: bool, filename: str, existing: MatchResult) -> MatchResult:
    """Combine a new hit with the result already stored for a key.

    Args:
        root: Root the new file was found under
        full: Whether the key is the file's complete tail
        filename: The new file
        existing: Result currently stored for the key

    Returns:
        The result to store
    """
    if isinstance(existing, ExactMatches):
        if full:
            # A second exact match is a conflict
            return ExactMatches(add_set(filename, existing.files))
        return existing

    if full:
        return ExactMatches((filename,))
    if existing.root == root:
        return PartialMatchesInSameRoot(root, add_set(filename, existing.files))
    return PartialMatchesInSameRoot(root, (filename,))


class ResolutionTable:
    """Mapping from (from-prefix, suffix) to the files it may designate."""

    def __init__(self, name: str):
        """Initialize an empty table.

        Args:
            name: Label used in reprs and diagnostics
        """
        self.name = name
        self._entries: Dict[TableKey, MatchResult] = {}

    def add_key(self, root: Root, key: TableKey, full: bool, filename: str):
        """Insert one hit at one key."""
        existing = self._entries.get(key)
        if existing is None:
            if full:
                self._entries[key] = ExactMatches((filename,))
            else:
                self._entries[key] = PartialMatchesInSameRoot(root, (filename,))
            return
        self._entries[key] = insert_key(root, full, filename, existing)

    def add(self, root: Root, entry: DecomposedEntry, filename: str):
        """Insert a file under every suffix of one decomposition."""
        for full, suffix in entry.suffixes:
            self.add_key(root, (entry.from_prefix, suffix), full, filename)

    def search(
        self,
        suffix: Union[str, Sequence[str]],
        from_: Union[str, Sequence[str], None] = None,
    ) -> Optional[MatchResult]:
        """Look up a logical suffix, optionally relative to a prefix.

        Args:
            suffix: Dotted name or components being required
            from_: Optional 'From' prefix, empty when omitted

        Returns:
            The stored MatchResult, or None if the key is unknown

        Raises:
            ValueError: If ``suffix`` is empty
        """
        suffix = parse_logical_path(suffix)
        if not suffix:
            raise ValueError("cannot search for an empty logical path")
        return self._entries.get((parse_logical_path(from_), suffix))

    def __contains__(self, key: TableKey) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[TableKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ResolutionTable({self.name!r}, {len(self._entries)} keys)"
