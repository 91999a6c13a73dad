"""Registries of auxiliary OCaml bundle files (.mllib, .mlpack).

These are found by plain basename, not by logical path. The first
registration of a name wins; a later one from another place is only
reported.
"""

import logging
import os
from typing import Callable, Dict, Iterator, Optional, Tuple

from coqdep_paths.core.models import KnownFile
from coqdep_paths.core.paths import same_root_relative_path


logger = logging.getLogger(__name__)


class KnownFileRegistry:
    """Basename -> location map with clash diagnostics."""

    def __init__(self, kind: str, warn: Optional[Callable[[str], None]] = None):
        """Initialize the registry.

        Args:
            kind: Extension this registry collects, e.g. '.mllib'
            warn: Diagnostic sink, defaults to the module logger
        """
        self.kind = kind
        self.warn = warn or logger.warning
        self._known: Dict[str, KnownFile] = {}

    def add(self, name: str, phys_dir: Optional[str], suffix: str):
        """Register ``name`` as found in ``phys_dir``.

        A name seen before keeps its first location. If the new entry has
        the same suffix but lives elsewhere, a warning names both places.
        """
        known = self._known.get(name)
        if known is None:
            self._known[name] = KnownFile(phys_dir, suffix)
            return

        if known.suffix == suffix and not same_root_relative_path(known.phys_dir, phys_dir):
            self.warn(
                f"{name}{suffix} already found in {known.phys_dir or '.'} "
                f"(discarding {os.path.join(phys_dir or '.', name)}{suffix})"
            )

    def search(self, name: str) -> Optional[str]:
        """Get the directory ``name`` was first found in, or None."""
        known = self._known.get(name)
        if known is None:
            return None
        return known.phys_dir or "."

    def items(self) -> Iterator[Tuple[str, Optional[str]]]:
        """Iterate over (name, directory) in registration order."""
        for name, known in self._known.items():
            yield name, known.phys_dir

    def __contains__(self, name: str) -> bool:
        return name in self._known

    def __len__(self) -> int:
        return len(self._known)
