"""
Lexer/Tokenizer for the rawenum declaration language.

Converts raw declaration text into a stream of tokens with source location
tracking. Handles indentation-based blocks (Python-style) with INDENT/DEDENT
tokens.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import extract_snippet, make_parse_error


class TokenType(Enum):
    """Token types in the declaration language."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"
    PLACEHOLDER = "PLACEHOLDER"

    # Keywords
    ENUM = "enum"
    STRUCT = "struct"
    CLASS = "class"

    # Operators
    AT = "@"
    COLON = ":"
    COMMA = ","
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    EQUALS = "="
    MINUS = "-"

    # Special
    NEWLINE = "NEWLINE"
    INDENT = "INDENT"
    DEDENT = "DEDENT"
    EOF = "EOF"


KEYWORDS = {
    "enum",
    "struct",
    "class",
}

SINGLE_CHAR_TOKENS = {
    "@": TokenType.AT,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "=": TokenType.EQUALS,
}

# Anything else after a backslash stands for itself
ESCAPES = {"n": "\n", "t": "\t"}


@dataclass
class Token:
    """
    A single token in the declaration language.

    Attributes:
        type: Type of token
        value: String value of the token
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for the declaration language.

    Converts source text into a stream of tokens with indentation tracking.
    Brackets suppress NEWLINE/INDENT handling so argument lists may span lines.
    """

    def __init__(self, text: str, file: Path):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []
        self.indent_stack = [0]
        self.bracket_depth = 0

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def error(self, message: str, line: int, column: int) -> Exception:
        return make_parse_error(
            message, self.file, line, column, snippet=extract_snippet(self.text, line)
        )

    def skip_whitespace(self) -> None:
        """Skip spaces, tabs and carriage returns (and newlines inside brackets)."""
        while self.current_char() in (" ", "\t", "\r") or (
            self.bracket_depth > 0 and self.current_char() == "\n"
        ):
            self.advance()

    def skip_comment(self) -> None:
        """Skip comment (from # to end of line)."""
        if self.current_char() == "#":
            while self.current_char() and self.current_char() != "\n":
                self.advance()

    def read_string(self) -> str:
        """Read a double-quoted string."""
        start_line = self.line
        start_col = self.column
        self.advance()  # opening quote

        chars = []
        while True:
            current = self.current_char()
            if not current or current == '"' or current == "\n":
                break

            if current == "\\":
                self.advance()
                escaped = self.current_char()
                if escaped:
                    chars.append(ESCAPES.get(escaped, escaped))
                self.advance()
                continue

            chars.append(current)
            self.advance()

        if self.current_char() != '"':
            raise self.error("Unterminated string literal", start_line, start_col)

        self.advance()  # closing quote
        return "".join(chars)

    def read_number(self) -> str:
        """Read a run of decimal digits."""
        chars = []
        current = self.current_char()
        while current and current.isdigit():
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        current = self.current_char()
        while current and (current.isalnum() or current == "_"):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def read_placeholder(self) -> str:
        """Read an editor placeholder ``<#label#>`` and return its label."""
        start_line = self.line
        start_col = self.column
        self.advance()  # <
        self.advance()  # #
        chars = []
        while self.current_char() and not (
            self.current_char() == "#" and self.peek_char() == ">"
        ):
            if self.current_char() == "\n":
                break
            chars.append(self.current_char())
            self.advance()

        if self.current_char() != "#":
            raise self.error("Unterminated placeholder", start_line, start_col)

        self.advance()  # #
        self.advance()  # >
        return "".join(chars)

    def handle_indentation(self, indent_level: int) -> None:
        """Generate INDENT/DEDENT tokens based on indentation level."""
        current_indent = self.indent_stack[-1]

        if indent_level > current_indent:
            self.indent_stack.append(indent_level)
            self.tokens.append(Token(TokenType.INDENT, "", self.line, 1))

        elif indent_level < current_indent:
            while self.indent_stack and self.indent_stack[-1] > indent_level:
                self.indent_stack.pop()
                self.tokens.append(Token(TokenType.DEDENT, "", self.line, 1))

            if self.indent_stack[-1] != indent_level:
                raise self.error(
                    f"Inconsistent indentation (expected {self.indent_stack[-1]} spaces, got {indent_level})",
                    self.line,
                    1,
                )

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens including INDENT/DEDENT and EOF

        Raises:
            ParseError: If syntax error encountered
        """
        at_line_start = True

        while self.pos < len(self.text):
            if at_line_start and self.bracket_depth == 0:
                indent_level = 0
                while self.current_char() in (" ", "\t"):
                    if self.current_char() == " ":
                        indent_level += 1
                    else:
                        indent_level += 4  # Treat tab as 4 spaces
                    self.advance()

                # Blank lines and comment-only lines do not affect indentation
                if self.current_char() in ("\n", "\r", "#"):
                    self.skip_comment()
                    if self.current_char() == "\r":
                        self.advance()
                    if self.current_char() == "\n":
                        self.advance()
                    continue

                if self.current_char() is not None:
                    self.handle_indentation(indent_level)

                at_line_start = False

            self.skip_whitespace()

            ch = self.current_char()
            if ch is None:
                break

            token_line = self.line
            token_col = self.column

            if ch == "#":
                self.skip_comment()

            elif ch == "\n":
                self.tokens.append(Token(TokenType.NEWLINE, "\\n", token_line, token_col))
                self.advance()
                at_line_start = True

            elif ch == '"':
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING, value, token_line, token_col))

            elif ch.isdigit():
                value = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, value, token_line, token_col))

            elif ch.isalpha() or ch == "_":
                value = self.read_identifier()
                if value in KEYWORDS:
                    token_type = TokenType(value)
                else:
                    token_type = TokenType.IDENTIFIER
                self.tokens.append(Token(token_type, value, token_line, token_col))

            elif ch == "<" and self.peek_char() == "#":
                label = self.read_placeholder()
                self.tokens.append(Token(TokenType.PLACEHOLDER, label, token_line, token_col))

            elif ch == "-":
                self.advance()
                self.tokens.append(Token(TokenType.MINUS, "-", token_line, token_col))

            elif ch in SINGLE_CHAR_TOKENS:
                if ch in "([":
                    self.bracket_depth += 1
                elif ch in ")]":
                    self.bracket_depth = max(0, self.bracket_depth - 1)
                self.advance()
                self.tokens.append(Token(SINGLE_CHAR_TOKENS[ch], ch, token_line, token_col))

            else:
                raise self.error(f"Unexpected character: {ch!r}", token_line, token_col)

        if not self.tokens or self.tokens[-1].type != TokenType.NEWLINE:
            self.tokens.append(Token(TokenType.NEWLINE, "\\n", self.line, self.column))

        # Emit remaining DEDENTs
        while len(self.indent_stack) > 1:
            self.indent_stack.pop()
            self.tokens.append(Token(TokenType.DEDENT, "", self.line, self.column))

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))

        return self.tokens


def tokenize(text: str, file: Path) -> list[Token]:
    """
    Convenience function to tokenize declaration text.

    Args:
        text: Source text
        file: Source file path

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
