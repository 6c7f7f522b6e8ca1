"""
Declaration commands for the rawenum CLI.

- check: Validate every @raw_representable declaration in a file
- expand: Print the derived declarations
- fix: Apply suggested fixes until the file expands (or no fix is left)
- eval: Run the derived decode/encode operations on a value
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from rawenum.core import ir
from rawenum.core.errors import EvaluationError, ExpansionError, ParseError, RawEnumError
from rawenum.core.expander import expand, expand_all, is_expandable
from rawenum.core.fixes import apply_fix, first_fix
from rawenum.core.interpreter import EnumValue, case_names, coerce_raw_value, decode, encode
from rawenum.core.manifest import RawEnumConfig
from rawenum.core.parser import parse_dsl
from rawenum.core.printer import print_declarations, print_expansion

from .utils import (
    console,
    print_human_diagnostics,
    print_parse_error,
    print_vscode_diagnostics,
)

logger = logging.getLogger(__name__)


def _config(ctx: typer.Context) -> RawEnumConfig:
    config = ctx.obj
    if not isinstance(config, RawEnumConfig):
        return RawEnumConfig()
    return config


def _read(file: Path) -> str:
    try:
        return file.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Cannot read {file}: {e}", err=True)
        raise typer.Exit(code=1)


def _parse(file: Path, format: str = "human") -> tuple[str, list[ir.TypeDecl]]:
    text = _read(file)
    try:
        return text, parse_dsl(text, file)
    except ParseError as e:
        print_parse_error(e, format)
        raise typer.Exit(code=1)


def check_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Declaration file"),
    format: str = typer.Option(
        "human", "--format", "-f", help="Output format: 'human' or 'vscode'"
    ),
) -> None:
    """
    Validate every @raw_representable declaration in FILE.
    """
    text, declarations = _parse(file, format)
    results = expand_all(declarations, _config(ctx).expansion)

    problems = [d for result in results for d in result.diagnostics]
    if format == "vscode":
        print_vscode_diagnostics(problems, file)
    else:
        print_human_diagnostics(problems, file, text)

    if problems:
        raise typer.Exit(code=1)

    if format == "vscode":
        typer.echo("::notice: Validation successful")
    else:
        typer.echo(f"OK: {len(results)} declaration(s) expand cleanly.")


def expand_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Declaration file"),
) -> None:
    """
    Print the derived declarations for every @raw_representable declaration in FILE.
    """
    text, declarations = _parse(file)
    results = expand_all(declarations, _config(ctx).expansion)

    failed = False
    for result in results:
        if not result.ok:
            failed = True
            print_human_diagnostics(result.diagnostics, file, text)
            continue
        console.print(f"[dim]# {result.declaration.name.text}[/dim]")
        typer.echo(print_expansion(result.expansion))

    if failed:
        raise typer.Exit(code=1)


def fix_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Declaration file"),
    write: bool = typer.Option(
        False, "--write", "-w", help="Rewrite FILE in place (comments are not preserved)"
    ),
) -> None:
    """
    Apply suggested fixes, one at a time, re-checking after each.
    """
    config = _config(ctx).expansion
    _, declarations = _parse(file)

    fixed: list[ir.TypeDecl] = []
    remaining = 0
    for declaration in declarations:
        if not is_expandable(declaration):
            fixed.append(declaration)
            continue

        for applied in range(config.max_fix_passes + 1):
            try:
                expand(declaration, config=config)
            except ExpansionError as e:
                fix = first_fix(e.diagnostics)
                if fix is None:
                    remaining += len(e.diagnostics)
                    break
                if applied == config.max_fix_passes:
                    logger.warning(
                        "%s: still failing after %d fix passes",
                        declaration.name.text,
                        config.max_fix_passes,
                    )
                    remaining += len(e.diagnostics)
                    break
                typer.echo(f"{declaration.name.text}: {fix.message}", err=True)
                declaration = apply_fix(declaration, fix)
            else:
                break
        fixed.append(declaration)

    output = print_declarations(fixed)
    if write:
        file.write_text(output, encoding="utf-8")
        typer.echo(f"Wrote {file}", err=True)
    else:
        typer.echo(output, nl=False)

    if remaining:
        typer.echo(f"{remaining} problem(s) have no automatic fix.", err=True)
        raise typer.Exit(code=1)


def _select(declarations: list[ir.TypeDecl], type_name: str | None) -> ir.TypeDecl:
    candidates = [d for d in declarations if is_expandable(d)]
    if type_name is not None:
        candidates = [d for d in candidates if d.name.text == type_name]
    if len(candidates) != 1:
        names = ", ".join(d.name.text for d in declarations if is_expandable(d)) or "none"
        typer.echo(f"Select one declaration with --type (available: {names})", err=True)
        raise typer.Exit(code=1)
    return candidates[0]


def eval_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Declaration file"),
    decode_raw: str | None = typer.Option(None, "--decode", "-d", help="Raw value to decode"),
    encode_case: str | None = typer.Option(
        None, "--encode", "-e", help="Case to encode, as NAME or NAME=PAYLOAD"
    ),
    type_name: str | None = typer.Option(None, "--type", "-t", help="Declaration to use"),
) -> None:
    """
    Run the derived decode or encode operation of one declaration.
    """
    if (decode_raw is None) == (encode_case is None):
        typer.echo("Pass exactly one of --decode or --encode", err=True)
        raise typer.Exit(code=2)

    text, declarations = _parse(file)
    declaration = _select(declarations, type_name)

    try:
        expansion = expand(declaration, config=_config(ctx).expansion)
    except ExpansionError as e:
        print_human_diagnostics(e.diagnostics, file, text)
        raise typer.Exit(code=1)

    raw_type = expansion.initializer.raw_type
    try:
        if decode_raw is not None:
            value = decode(expansion, coerce_raw_value(raw_type, decode_raw))
            typer.echo(str(value))
        elif encode_case is not None:
            name, sep, payload = encode_case.partition("=")
            if name not in case_names(expansion):
                raise EvaluationError(f"'{name}' is not a case of {expansion.type_name}")
            args = (coerce_raw_value(raw_type, payload),) if sep else ()
            typer.echo(repr(encode(expansion, EnumValue(name, args))))
    except RawEnumError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
