"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdtidy.config import CONFIG_FILE, Settings, dump_config, load_config
from mdtidy.core.models import Diagnostic, Severity
from mdtidy.core.parse import DecodeError
from mdtidy.core.pipeline import FileResult, run_format
from mdtidy.core.utils.diff import change_counts, unified_diff
from mdtidy.core.verify import verify


ICONS = {Severity.warning: "⚠", Severity.info: "ℹ"}
COLORS = {Severity.warning: typer.colors.YELLOW, Severity.info: typer.colors.CYAN}

Paths = Annotated[list[Path], typer.Argument(help="Markdown files or directories")]
ConfigOpt = Annotated[Optional[str], typer.Option("--config", "-c", help="Path to a .mdtidy.yaml file")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(config: Optional[str]) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(Path(config) if config else None)
    except ValueError as e:
        _fail(str(e))


def _collect(paths: list[Path], settings: Settings) -> list[FileResult]:
    try:
        results = run_format(paths, settings)
    except DecodeError as e:
        _fail("Cannot decode input", e)
    except OSError as e:
        _fail("Cannot read input", e)
    if not results:
        _fail("No .md/.mdx files found.")
    return results


def _echo_diagnostic(d: Diagnostic, color: Optional[bool]) -> None:
    """'⚠ Line 3: message' plus an optional '│ before → after' snippet line."""
    head = typer.style(f"Line {d.line}", dim=True)
    message = typer.style(d.message, fg=COLORS[d.severity])
    typer.echo(f"{ICONS[d.severity]} {head}: {message}", err=True, color=color)
    if d.before is not None:
        snippet = d.before if d.after is None else f"{d.before} → {d.after}"
        typer.echo(typer.style(f"  │ {snippet}", dim=True), err=True, color=color)


def _echo_report(fr: FileResult, color: Optional[bool]) -> None:
    result = fr.result
    added, deleted = change_counts(fr.original, result.text)
    header = f"{fr.path}: {len(result.warnings)} warning(s), {len(result.fixes)} fix(es), +{added} -{deleted} line(s)"
    typer.echo(typer.style(header, bold=True), err=True, color=color)
    for d in result.diagnostics:
        _echo_diagnostic(d, color)


def _check(results: list[FileResult]) -> None:
    """List files that would be reformatted; exit 1 if there are any."""
    changed = [fr for fr in results if fr.changed]
    if not changed:
        typer.echo(f"All {len(results)} file(s) are properly formatted.")
        return
    typer.echo("The following files need formatting:", err=True)
    for fr in changed:
        typer.echo(f"  - {fr.path}", err=True)
    typer.echo(f"{len(changed)} file(s) need formatting", err=True)
    raise typer.Exit(1)


def format_cmd(
    paths: Paths,
    in_place: Annotated[bool, typer.Option("--in-place", "-i", help="Rewrite files in place")] = False,
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write to this file (single input only)")] = None,
    check: Annotated[bool, typer.Option("--check", help="Exit 1 if any file would change")] = False,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Report issues without writing anything")] = False,
    diff: Annotated[bool, typer.Option("--diff", help="Print a unified diff instead of the formatted text")] = False,
    verify_output: Annotated[bool, typer.Option("--verify", help="Fail if output is not stable or code changed")] = False,
    config: ConfigOpt = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging and per-file diagnostics")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable colored output")] = False,
    ):
    """Format markdown files (stdout by default)."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if in_place and output:
        _fail("--in-place and --output are mutually exclusive")
    color = False if no_color else None  # None lets click detect a TTY
    settings = _settings(config)
    results = _collect(paths, settings)

    if check:
        _check(results)
        return

    if dry_run:
        for fr in results:
            _echo_report(fr, color)
        typer.echo(f"Dry run: {sum(fr.changed for fr in results)} of {len(results)} file(s) would change.")
        return

    if verify_output:
        failed = False
        for fr in results:
            for problem in verify(fr.original, fr.result.text, settings):
                typer.echo(f"{fr.path}: {problem}", err=True)
                failed = True
        if failed:
            raise typer.Exit(1)

    if verbose:
        for fr in results:
            _echo_report(fr, color)

    if diff:
        for fr in results:
            typer.echo("".join(unified_diff(fr.original, fr.result.text, f"a/{fr.path}", f"b/{fr.path}")), nl=False)
        return

    if in_place:
        for fr in results:
            if fr.changed:
                fr.path.write_text(fr.result.text, encoding="utf-8", newline="")
                typer.echo(f"  formatted: {fr.path}")
        typer.echo(f"Formatted {sum(fr.changed for fr in results)} of {len(results)} file(s).")
        return

    if output:
        if len(results) > 1:
            _fail("--output requires exactly one input file")
        output.write_text(results[0].result.text, encoding="utf-8", newline="")
        typer.echo(f"  {results[0].path} -> {output}")
        return

    for fr in results:
        typer.echo(fr.result.text, nl=False)


def check_cmd(paths: Paths, config: ConfigOpt = None):
    """Exit 1 if any file would be changed by formatting."""
    _check(_collect(paths, _settings(config)))


def init_cmd(
    path: Annotated[Path, typer.Argument(help="Where to write the config file")] = Path(CONFIG_FILE),
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file")] = False,
    ):
    """Write a configuration file with the default settings."""
    if path.exists() and not force:
        _fail(f"{path} already exists (use --force to overwrite)")
    path.write_text(dump_config(Settings()), encoding="utf-8")
    typer.echo(f"Configuration written to {path}")
