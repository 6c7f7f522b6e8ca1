"""
Base parser class for the rawenum declaration language.

Provides common token manipulation and utility methods used by all parser mixins.
"""

from pathlib import Path

from ..errors import ParseError, extract_snippet, make_parse_error
from ..ir import SourceLocation
from ..lexer import Token, TokenType


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    This class provides the foundation for recursive descent parsing,
    including token navigation, matching, and error generation.
    """

    def __init__(self, tokens: list[Token], file: Path, text: str = ""):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            file: Source file path (for error reporting)
            text: Original source text (for error snippets)
        """
        self.tokens = tokens
        self.file = file
        self.text = text
        self.pos = 0

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check whether the current token is one of the given types."""
        return self.current_token().type in token_types

    def expect(self, token_type: TokenType) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            raise self.error(f"Expected {token_type.value}, got {_describe(token)}", token)
        return self.advance()

    def skip_newlines(self) -> None:
        """Skip any NEWLINE tokens."""
        while self.match(TokenType.NEWLINE):
            self.advance()

    def location(self, token: Token) -> SourceLocation:
        """Source location of a token."""
        return SourceLocation(file=str(self.file), line=token.line, column=token.column)

    def error(self, message: str, token: Token) -> ParseError:
        """Build a ParseError pointing at ``token``."""
        snippet = extract_snippet(self.text, token.line) if self.text else None
        return make_parse_error(message, self.file, token.line, token.column, snippet)


def _describe(token: Token) -> str:
    if token.type in (TokenType.IDENTIFIER, TokenType.STRING, TokenType.NUMBER):
        return f"{token.type.value} {token.value!r}"
    return token.type.value
