"""
rawenum CLI package.

- commands.py: check, expand, fix and eval commands
- utils.py: Shared utilities (version, logging, diagnostic output)
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from rawenum.core.errors import ConfigError

from .commands import check_command, eval_command, expand_command, fix_command
from .utils import get_version, load_cli_config, setup_logging, version_callback

app = typer.Typer(
    help="""rawenum - raw-value mapping for enums with a catch-all case

Commands:
  • check FILE    → report diagnostics for @raw_representable declarations
  • expand FILE   → print the derived init(raw_value:) and raw_value
  • fix FILE      → apply suggested fixes
  • eval FILE     → run decode/encode on a value
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to rawenum.toml (default: ./rawenum.toml if present)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """rawenum CLI main callback for global options."""
    try:
        loaded = load_cli_config(config)
    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(code=1)
    setup_logging(loaded, verbose)
    ctx.obj = loaded


app.command(name="check")(check_command)
app.command(name="expand")(expand_command)
app.command(name="fix")(fix_command)
app.command(name="eval")(eval_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = [
    "app",
    "main",
    "get_version",
    "version_callback",
]


if __name__ == "__main__":
    main(sys.argv[1:])
