from pathlib import Path

from . import ir
from .dsl_parser_impl import parse_dsl


def parse_files(files: list[Path]) -> dict[Path, list[ir.TypeDecl]]:
    """
    Parse declaration files.

    Args:
        files: Paths to declaration files

    Returns:
        Mapping of file to its declarations, in the order given

    Raises:
        ParseError: On the first file that fails to parse
    """
    parsed: dict[Path, list[ir.TypeDecl]] = {}
    for f in files:
        text = f.read_text(encoding="utf-8")
        parsed[f] = parse_dsl(text, f)
    return parsed


__all__ = ["parse_dsl", "parse_files"]
