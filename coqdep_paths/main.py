"""Command-line front end for coqdep-paths.

Ingests load-path roots the way coqdep does (-Q, -R, -I, implicit current
directory) and reports how each requested logical name resolves.
"""

import logging
import sys
from typing import List, Optional, Sequence, Tuple

import click
from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from coqdep_paths import __version__
from coqdep_paths.config import get_boot_default, get_log_level
from coqdep_paths.core.models import ExactMatches, format_logical_path, parse_logical_path
from coqdep_paths.loadpath.resolver import LoadPathResolver


console = Console()
err_console = Console(stderr=True)


STATUS_STYLES = {
    "exact": "green",
    "partial": "cyan",
    "ambiguous": "yellow",
    "not found": "red",
}


class NameResolution(BaseModel):
    name: str
    from_prefix: Optional[str] = None
    table: Optional[str] = None  # 'source', 'other' or None when unresolved
    status: str
    root: Optional[str] = None  # only set for partial matches
    files: List[str] = []
    in_library: bool = False


class ResolutionReport(BaseModel):
    version: str
    boot: bool
    directories: int
    results: List[NameResolution]


def setup_logging(level: str):
    """Send diagnostics to stderr through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
    )


def build_resolver(
    q_includes: Sequence[Tuple[str, str]] = (),
    r_includes: Sequence[Tuple[str, str]] = (),
    caml_dirs: Sequence[str] = (),
    coqlib: Optional[str] = None,
    boot: bool = False,
    add_cwd: bool = True,
) -> LoadPathResolver:
    """Create a resolver and ingest every root.

    Args:
        q_includes: (directory, logical prefix) pairs for -Q
        r_includes: (directory, logical prefix) pairs for -R
        caml_dirs: Directories given with -I
        coqlib: Optional library directory, mounted as Coq
        boot: Bootstrap mode
        add_cwd: Add '.' non-recursively if it has no logical path yet

    Returns:
        The populated resolver
    """
    resolver = LoadPathResolver(boot=boot)

    if coqlib:
        resolver.add_coqlib_include(coqlib, "Coq")
    for phys_dir, log_prefix in q_includes:
        resolver.add_q_include(phys_dir, log_prefix)
    for phys_dir, log_prefix in r_includes:
        resolver.add_r_include(phys_dir, log_prefix)
    for phys_dir in caml_dirs:
        resolver.add_caml_dir(phys_dir)

    if add_cwd and resolver.find_dir_logpath(".") is None:
        resolver.add_norec_dir_import(".", "")

    return resolver


def resolve_name(
    resolver: LoadPathResolver,
    name: str,
    from_prefix: Optional[str] = None,
) -> NameResolution:
    """Resolve one dotted name, trying sources first, then other files."""
    table = "source"
    result = resolver.search_v_known(name, from_prefix)
    if result is None:
        table = "other"
        result = resolver.search_other_known(name, from_prefix)

    in_library = resolver.is_in_coqlib(name, from_prefix)
    if result is None:
        return NameResolution(
            name=name,
            from_prefix=from_prefix,
            status="not found",
            in_library=in_library,
        )

    root = None
    if not isinstance(result, ExactMatches):
        root = str(result.root)
    return NameResolution(
        name=name,
        from_prefix=from_prefix,
        table=table,
        status=result.status,
        root=root,
        files=list(result.files),
        in_library=in_library,
    )


def display_results(results: List[NameResolution]):
    """Render resolutions as a table."""
    table = Table(title="Load-path resolution")
    table.add_column("Name", style="bold")
    table.add_column("Status", no_wrap=True)
    table.add_column("Files")
    table.add_column("Root", style="dim")
    table.add_column("Library", justify="center")

    for res in results:
        name = res.name
        if res.from_prefix:
            name = f"{res.from_prefix}:{res.name}"
        style = STATUS_STYLES.get(res.status, "")
        table.add_row(
            name,
            f"[{style}]{res.status}[/{style}]" if style else res.status,
            "\n".join(res.files) or "-",
            res.root or "",
            "yes" if res.in_library else "",
        )

    console.print(table)


@click.command()
@click.option(
    "-Q", "q_includes",
    multiple=True,
    type=(click.Path(file_okay=False), str),
    metavar="DIR LOGPATH",
    help="Map DIR to LOGPATH; only full logical paths are known",
)
@click.option(
    "-R", "r_includes",
    multiple=True,
    type=(click.Path(file_okay=False), str),
    metavar="DIR LOGPATH",
    help="Map DIR to LOGPATH recursively; partial names are known",
)
@click.option(
    "-I", "caml_dirs",
    multiple=True,
    type=click.Path(file_okay=False),
    metavar="DIR",
    help="Look for .mllib/.mlpack files in DIR",
)
@click.option("--coqlib", type=click.Path(file_okay=False), help="Library directory mounted as Coq")
@click.option("--boot/--no-boot", default=None, help="Bootstrap mode (default from COQDEP_BOOT)")
@click.option("--from", "from_prefix", default=None, metavar="PREFIX", help="Resolve names relative to PREFIX")
@click.option("--no-cwd", is_flag=True, help="Do not add the current directory implicitly")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON report")
@click.option("--strict", is_flag=True, help="Exit with status 1 if a name does not resolve")
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.argument("names", nargs=-1)
def cli(q_includes, r_includes, caml_dirs, coqlib, boot, from_prefix, no_cwd, as_json, strict, version, names):
    """Resolve logical names against a coqdep-style load path.

    Examples:

        coqdep-paths -R theories MyLib MyLib.Foo

        coqdep-paths -Q src Lib --from Lib Sub.Bar

        coqdep-paths --json -R . Top Top.A Top.B
    """
    if version:
        console.print(f"coqdep-paths {__version__}")
        return

    for name in names:
        if not parse_logical_path(name):
            raise click.BadParameter(f"invalid logical name {name!r}", param_hint="NAMES")

    setup_logging(get_log_level())

    if boot is None:
        boot = get_boot_default()

    resolver = build_resolver(
        q_includes=q_includes,
        r_includes=r_includes,
        caml_dirs=caml_dirs,
        coqlib=coqlib,
        boot=boot,
        add_cwd=not no_cwd,
    )

    results = [resolve_name(resolver, name, from_prefix) for name in names]

    if as_json:
        report = ResolutionReport(
            version=__version__,
            boot=boot,
            directories=len(resolver.dir_logpaths),
            results=results,
        )
        click.echo(report.model_dump_json(indent=2))
    elif results:
        display_results(results)
    else:
        logpath = resolver.find_dir_logpath(".")
        if logpath is None:
            label = "not mapped"
        else:
            label = format_logical_path(logpath) or "<root>"
        console.print(f"[dim]Indexed {len(resolver.dir_logpaths)} director(ies); '.' is {label}[/dim]")

    if strict and any(res.status == "not found" for res in results):
        sys.exit(1)


if __name__ == "__main__":
    cli()
