"""
rawenum declaration parser package.

The parser is built using mixins to separate parsing logic by construct type.

The main exports are:
- Parser: The complete parser class
- parse_dsl: Convenience function to parse declaration text

Usage:
    from rawenum.core.parser import parse_dsl

    declarations = parse_dsl(text, file)
"""

import logging
from pathlib import Path

from .. import ir
from ..lexer import TokenType, tokenize
from .attributes import AttributeParserMixin
from .base import BaseParser
from .declaration import DeclarationParserMixin

logger = logging.getLogger(__name__)


class Parser(
    BaseParser,
    AttributeParserMixin,
    DeclarationParserMixin,
):
    """
    Complete declaration parser.

    - AttributeParserMixin: attributes, literals and type references
    - DeclarationParserMixin: type declarations and enum member lines
    """

    def parse(self) -> list[ir.TypeDecl]:
        """Parse every top-level declaration in the token stream."""
        declarations: list[ir.TypeDecl] = []
        self.skip_newlines()
        while not self.match(TokenType.EOF):
            declarations.append(self.parse_declaration())
            self.skip_newlines()
        return declarations


def parse_dsl(text: str, file: Path) -> list[ir.TypeDecl]:
    """
    Parse a complete declaration file.

    Args:
        text: Source text
        file: Source file path

    Returns:
        Declarations in source order

    Raises:
        ParseError: On any lexical or syntax error
    """
    tokens = tokenize(text, file)
    parser = Parser(tokens, file, text)
    declarations = parser.parse()
    logger.debug("Parsed %d declaration(s) from %s", len(declarations), file)
    return declarations


__all__ = [
    "Parser",
    "parse_dsl",
    "BaseParser",
    "AttributeParserMixin",
    "DeclarationParserMixin",
]
