"""Decomposition of logical names into (from-prefix, suffix) keys.

A file mounted as A.B.C can be required as A.B.C, or as B.C / C when the
root is import-eligible, or as C from A.B, and so on. Every such split is
a key of the resolution tables.
"""

from typing import List, Sequence, Tuple

from coqdep_paths.core.models import DecomposedEntry, LogicalPath


def get_extension(filename: str, extensions: Sequence[str]) -> Tuple[str, str]:
    """Strip the first matching extension from a file name.

    Args:
        filename: File name to inspect
        extensions: Candidate extensions, tried in order

    Returns:
        (name without extension, extension), or (filename, '') if none match
    """
    for ext in extensions:
        if filename.endswith(ext):
            return filename[:-len(ext)], ext
    return filename, ""


def suffixes(full: bool, name: Sequence[str]) -> List[Tuple[bool, LogicalPath]]:
    """All non-empty suffixes of ``name``, longest first.

    Only the longest one carries ``full``; shorter ones are partial.
    """
    name = tuple(name)
    if not name:
        raise ValueError("cannot take the suffixes of an empty logical path")

    result = [(full, name)]
    for start in range(1, len(name)):
        result.append((False, name[start:]))
    return result


def decompose(allow_multi_suffix: bool, name: Sequence[str]) -> List[DecomposedEntry]:
    """Compute every (from, suffixes) split of a logical name.

    Once ``from`` is fixed, 'From from Require suff' refers to ``name``
    (barring ambiguity) for exactly the suffixes listed with it. Shorter,
    partial suffixes are offered under the empty prefix only when
    ``allow_multi_suffix`` is set; under a non-empty prefix they always are.

    Args:
        allow_multi_suffix: Whether the root is import-eligible
        name: Full logical name of the file

    Returns:
        Entries ordered from the empty prefix to the longest one

    Raises:
        ValueError: If ``name`` is empty
    """
    name = tuple(name)
    if not name:
        raise ValueError("cannot decompose an empty logical path")
    if len(name) == 1:
        return [DecomposedEntry((), ((True, name),))]

    head, tail = name[0], name[1:]
    if allow_multi_suffix:
        outer = tuple(suffixes(True, name))
    else:
        outer = ((True, name),)

    entries = [DecomposedEntry((), outer)]
    for entry in decompose(True, tail):
        entries.append(DecomposedEntry((head,) + entry.from_prefix, entry.suffixes))
    return entries
