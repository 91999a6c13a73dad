"""Load-path resolver: root ingestion and logical-name queries.

A LoadPathResolver owns every table of one resolution run. Roots are
ingested through the driver methods (one call per -Q/-R/-I option or
implicit current directory), after which the tables are only queried.
"""

import logging
import os
from functools import partial
from typing import Callable, Optional, Sequence, Union

from coqdep_paths.core.models import (
    FileKind,
    LogicalPath,
    MatchResult,
    Root,
    parse_logical_path,
)
from coqdep_paths.loadpath.decompose import decompose, get_extension
from coqdep_paths.loadpath.known_files import KnownFileRegistry
from coqdep_paths.loadpath.tables import ResolutionTable
from coqdep_paths.loadpath.traversal import (
    DirectoryWalker,
    DirLogRegistry,
    Lister,
    make_root,
)


logger = logging.getLogger(__name__)


SOURCE_EXTENSIONS = [".v", ".vo", ".vio", ".vos"]
COMPILED_EXTENSIONS = [".vo", ".vio", ".vos"]
CAML_EXTENSIONS = [".mllib", ".mlpack"]

Handler = Callable[[Root, str, LogicalPath, str], None]
PathLike = Union[str, Sequence[str], None]


class LoadPathResolver:
    """Index of every file reachable from the ingested load-path roots.

    Holds three resolution tables (sources, compiled library files, other
    files), the .mllib/.mlpack registries and the directory registry.
    """

    def __init__(
        self,
        boot: bool = False,
        lister: Optional[Lister] = None,
        warn: Optional[Callable[[str], None]] = None,
    ):
        """Initialize an empty resolver.

        Args:
            boot: Bootstrap mode; compiled files then stay out of the
                source table and go to the library table instead
            lister: Directory listing function for the walker
            warn: Diagnostic sink, defaults to the module logger
        """
        self.boot = boot
        self.warn = warn or logger.warning

        self.dir_logpaths = DirLogRegistry()
        self.walker = DirectoryWalker(self.dir_logpaths, lister=lister, warn=self.warn)

        self.v_known = ResolutionTable("source")
        self.coqlib_known = ResolutionTable("library")
        self.other_known = ResolutionTable("other")

        self.mllib_known = KnownFileRegistry(".mllib", warn=self.warn)
        self.mlpack_known = KnownFileRegistry(".mlpack", warn=self.warn)

    # ------------------------------------------------------------------
    # File handlers

    def _add_paths(
        self,
        allow_multi_suffix: bool,
        root: Root,
        table: ResolutionTable,
        phys_dir: str,
        log_prefix: LogicalPath,
        basename: str,
    ):
        filename = os.path.join(phys_dir, basename)
        for entry in decompose(allow_multi_suffix, tuple(log_prefix) + (basename,)):
            table.add(root, entry, filename)

    def add_known(
        self,
        allow_multi_suffix: bool,
        root: Root,
        phys_dir: str,
        log_prefix: LogicalPath,
        filename: str,
    ):
        """Route a discovered file to the source, library or other table.

        Recognised kinds are stored without their extension; anything else
        goes to the other table under its full file name.
        """
        basename, ext = get_extension(filename, SOURCE_EXTENSIONS)
        kind = FileKind.from_extension(ext)

        if kind is FileKind.SOURCE:
            table = self.v_known
        elif kind.is_compiled:
            table = self.coqlib_known if self.boot else self.v_known
        else:
            table = self.other_known

        self._add_paths(allow_multi_suffix, root, table, phys_dir, log_prefix, basename)

    def add_coqlib_known(
        self,
        allow_multi_suffix: bool,
        root: Root,
        phys_dir: str,
        log_prefix: LogicalPath,
        filename: str,
    ):
        """Record a compiled library file, whatever the bootstrap mode.

        Each directory acts as its own root here.
        """
        basename, ext = get_extension(filename, COMPILED_EXTENSIONS)
        if not ext:
            return
        root = make_root(phys_dir, log_prefix)
        self._add_paths(allow_multi_suffix, root, self.coqlib_known, phys_dir, log_prefix, basename)

    def add_caml_known(
        self,
        allow_multi_suffix: bool,
        root: Root,
        phys_dir: str,
        log_prefix: LogicalPath,
        filename: str,
    ):
        """Register .mllib and .mlpack files by basename; ignore the rest."""
        basename, ext = get_extension(filename, CAML_EXTENSIONS)
        if ext == ".mllib":
            self.mllib_known.add(basename, phys_dir, ext)
        elif ext == ".mlpack":
            self.mlpack_known.add(basename, phys_dir, ext)

    # ------------------------------------------------------------------
    # Root drivers

    def add_directory(
        self,
        recursive: bool,
        handler: Handler,
        phys_dir: str,
        log_prefix: PathLike = (),
    ):
        """Walk one root and feed each file to ``handler``."""
        self.walker.walk(recursive, handler, phys_dir, parse_logical_path(log_prefix))

    def add_norec_dir_import(self, phys_dir: str, log_prefix: PathLike = ()):
        """Add a directory without its sub-directories, short names allowed.

        This is how the current directory is added implicitly.
        """
        self.add_directory(False, partial(self.add_known, True), phys_dir, log_prefix)

    def add_rec_dir_no_import(self, phys_dir: str, log_prefix: PathLike):
        """-Q: descend into sub-directories, only full logical paths are known."""
        self.add_directory(True, partial(self.add_known, False), phys_dir, log_prefix)

    def add_rec_dir_import(self, phys_dir: str, log_prefix: PathLike):
        """-R: descend into sub-directories, suffixes of logical paths are known."""
        self.add_directory(True, partial(self.add_known, True), phys_dir, log_prefix)

    def add_caml_dir(self, phys_dir: str):
        """-I: collect .mllib/.mlpack files of one directory, no sub-directories."""
        self.add_directory(False, partial(self.add_caml_known, True), phys_dir, ())

    def add_coqlib_include(self, phys_dir: str, log_prefix: PathLike = "Coq", recursive: bool = True):
        """Add a library root whose compiled files feed the library table."""
        self.add_directory(recursive, partial(self.add_coqlib_known, True), phys_dir, log_prefix)

    def add_q_include(self, phys_dir: str, log_prefix: PathLike):
        self.add_rec_dir_no_import(phys_dir, log_prefix)

    def add_r_include(self, phys_dir: str, log_prefix: PathLike):
        self.add_rec_dir_import(phys_dir, log_prefix)

    # ------------------------------------------------------------------
    # Queries

    def search_v_known(self, suffix: PathLike, from_: PathLike = None) -> Optional[MatchResult]:
        """Resolve a required name against the source table."""
        return self.v_known.search(suffix, from_)

    def search_other_known(self, suffix: PathLike, from_: PathLike = None) -> Optional[MatchResult]:
        """Resolve a logical name against the table of non-source files."""
        return self.other_known.search(suffix, from_)

    def is_in_coqlib(self, suffix: PathLike, from_: PathLike = None) -> bool:
        """Check whether a name is provided by a compiled library file."""
        return self.coqlib_known.search(suffix, from_) is not None

    def search_mllib_known(self, name: str) -> Optional[str]:
        return self.mllib_known.search(name)

    def search_mlpack_known(self, name: str) -> Optional[str]:
        return self.mlpack_known.search(name)

    def find_dir_logpath(self, phys_dir: str) -> Optional[LogicalPath]:
        """Get the logical path assigned to a physical directory, if any."""
        return self.dir_logpaths.find(phys_dir)
