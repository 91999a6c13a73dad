"""Physical path normalisation.

Directories are canonicalised the way the compiler does it: by entering
them and reading the working directory back, which resolves symlinks and
relative segments. The working directory is always restored.
"""

import os
from contextlib import contextmanager
from typing import Iterator, Optional


@contextmanager
def working_directory(path: str) -> Iterator[str]:
    """Temporarily switch the process working directory.

    The previous directory is restored on every exit path, including a
    failure to enter ``path``.

    Args:
        path: Directory to enter

    Yields:
        The working directory after entering ``path``
    """
    previous = os.getcwd()
    try:
        os.chdir(path)
        yield os.getcwd()
    finally:
        os.chdir(previous)


def canonicalize(path: str) -> str:
    """Return the absolute physical form of a directory.

    Raises:
        OSError: If the directory cannot be entered
    """
    with working_directory(path) as absolute:
        return absolute


def physical_dir(path: str) -> str:
    """Canonical form of a directory, or its absolute spelling.

    Directories that cannot be entered (missing, not searchable, or only
    known to an injected lister) fall back to ``os.path.abspath``.
    """
    try:
        return canonicalize(path)
    except OSError:
        return os.path.abspath(path)


def absolute_file_name(basename: str, directory: Optional[str] = None) -> str:
    """Join a basename onto the physical form of its directory."""
    return os.path.join(physical_dir(directory or "."), basename)


def files_equivalent(first: str, second: str) -> bool:
    """Check whether two file names designate the same physical file.

    'x.v', './x.v' and an absolute spelling of the same file compare equal.
    """
    return (
        absolute_file_name(os.path.basename(first), os.path.dirname(first))
        == absolute_file_name(os.path.basename(second), os.path.dirname(second))
    )


def _explicit(path: str) -> str:
    # foo/a.ml and ./foo/a.ml are the same file
    if path == "." or os.path.isabs(path):
        return path
    if path.startswith("./") or path.startswith("../"):
        return path
    return os.path.join(".", path)


def same_root_relative_path(first: Optional[str], second: Optional[str]) -> bool:
    """Syntactic path comparison used to silence duplicate-file warnings.

    An absent path stands for '.'. No filesystem access is performed.
    """
    return _explicit(first or ".") == _explicit(second or ".")
