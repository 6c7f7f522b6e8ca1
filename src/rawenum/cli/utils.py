"""
rawenum CLI utilities.

Shared helpers used across CLI modules: version display, logging setup,
configuration lookup and diagnostic output.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from rawenum.core import ir
from rawenum.core.errors import ErrorContext, ParseError, extract_snippet
from rawenum.core.manifest import RawEnumConfig, find_config

console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_version() -> str:
    """Get rawenum version from package metadata."""
    from rawenum import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"rawenum version {get_version()}")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


def setup_logging(config: RawEnumConfig, verbose: bool) -> None:
    """Configure root logging from --verbose or the config file."""
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def load_cli_config(config_path: Path | None) -> RawEnumConfig:
    return find_config(Path.cwd(), config_path)


# =============================================================================
# Diagnostic output
# =============================================================================


def _location(node: ir.Node, fallback: Path) -> tuple[str, int, int]:
    loc = node.location
    if loc is None:
        return str(fallback), 1, 1
    return loc.file, loc.line, loc.column


def print_human_diagnostics(diagnostics: list[ir.Diagnostic], file: Path, text: str) -> None:
    """Print diagnostics with source snippets, notes and fix labels."""
    for diagnostic in diagnostics:
        path, line, column = _location(diagnostic.anchor, file)
        context = ErrorContext(
            file=Path(path), line=line, column=column, snippet=extract_snippet(text, line)
        )
        err_console.print(
            f"[bold red]{diagnostic.severity.value}[/bold red]: "
            f"{escape(diagnostic.message)} [dim]\\[{diagnostic.id}][/dim]"
        )
        err_console.print(escape(context.format()), highlight=False)
        for note in diagnostic.notes:
            n_path, n_line, n_column = _location(note.anchor, file)
            err_console.print(
                f"  [cyan]note[/cyan]: {n_path}:{n_line}:{n_column}: {escape(note.message)}"
            )
        for fix in diagnostic.fixes:
            err_console.print(f"  [green]fix[/green]: {escape(fix.message)}")


def print_vscode_diagnostics(diagnostics: list[ir.Diagnostic], file: Path) -> None:
    """
    Print diagnostics in VS Code format: file:line:col: severity: message
    """
    for diagnostic in diagnostics:
        path, line, column = _location(diagnostic.anchor, file)
        typer.echo(
            f"{path}:{line}:{column}: {diagnostic.severity.value}: {diagnostic.message}", err=True
        )
        for note in diagnostic.notes:
            n_path, n_line, n_column = _location(note.anchor, file)
            typer.echo(f"{n_path}:{n_line}:{n_column}: note: {note.message}", err=True)


def print_parse_error(error: ParseError, format: str) -> None:
    """Print a parse error in the requested format."""
    if format == "vscode" and error.context:
        ctx = error.context
        typer.echo(f"{ctx.file}:{ctx.line}:{ctx.column}: error: {error.message}", err=True)
    else:
        typer.echo(f"Parse error: {error}", err=True)
