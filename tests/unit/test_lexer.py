"""Tests for the declaration lexer."""

from pathlib import Path

import pytest

from rawenum.core.errors import ParseError
from rawenum.core.lexer import TokenType, tokenize


def _types(text: str) -> list[TokenType]:
    return [t.type for t in tokenize(text, Path("test.enum"))]


class TestTokens:
    def test_attribute_line(self):
        tokens = tokenize('@raw_value("a b")\n', Path("test.enum"))
        assert [t.type for t in tokens] == [
            TokenType.AT,
            TokenType.IDENTIFIER,
            TokenType.LPAREN,
            TokenType.STRING,
            TokenType.RPAREN,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]
        assert tokens[3].value == "a b"

    def test_keywords(self):
        assert _types("enum struct class other")[:4] == [
            TokenType.ENUM,
            TokenType.STRUCT,
            TokenType.CLASS,
            TokenType.IDENTIFIER,
        ]

    def test_negative_number(self):
        tokens = tokenize("-12", Path("test.enum"))
        assert tokens[0].type == TokenType.MINUS
        assert tokens[1].type == TokenType.NUMBER
        assert tokens[1].value == "12"

    def test_placeholder(self):
        tokens = tokenize("<#value#>", Path("test.enum"))
        assert tokens[0].type == TokenType.PLACEHOLDER
        assert tokens[0].value == "value"

    def test_string_escapes(self):
        tokens = tokenize(r'"a\"b\\c\n"', Path("test.enum"))
        assert tokens[0].value == 'a"b\\c\n'

    def test_positions_are_one_indexed(self):
        tokens = tokenize("enum Color:\n  red\n", Path("test.enum"))
        red = next(t for t in tokens if t.value == "red")
        assert (red.line, red.column) == (2, 3)


class TestIndentation:
    def test_block_produces_indent_and_dedent(self):
        types = _types("enum A:\n  a\n  b\n")
        assert types.count(TokenType.INDENT) == 1
        assert types.count(TokenType.DEDENT) == 1
        assert types[-1] == TokenType.EOF

    def test_blank_and_comment_lines_ignored(self):
        with_noise = _types("enum A:\n\n  # comment\n  a\n\n  b  # trailing\n")
        without = _types("enum A:\n  a\n  b\n")
        assert with_noise == without

    def test_newlines_inside_brackets_are_suppressed(self):
        types = _types("@raw_representable[\n  String\n]\nenum A:\n  a\n")
        assert types[:5] == [
            TokenType.AT,
            TokenType.IDENTIFIER,
            TokenType.LBRACKET,
            TokenType.IDENTIFIER,
            TokenType.RBRACKET,
        ]

    def test_inconsistent_dedent_is_an_error(self):
        with pytest.raises(ParseError, match="Inconsistent indentation"):
            tokenize("enum A:\n    a\n  b\n", Path("test.enum"))


class TestErrors:
    def test_unterminated_string(self):
        with pytest.raises(ParseError, match="Unterminated string literal") as exc_info:
            tokenize('@raw_value("abc\n', Path("test.enum"))
        assert exc_info.value.context is not None
        assert exc_info.value.context.line == 1
        assert exc_info.value.context.column == 12

    def test_unterminated_placeholder(self):
        with pytest.raises(ParseError, match="Unterminated placeholder"):
            tokenize("<#value\n", Path("test.enum"))

    def test_unexpected_character(self):
        with pytest.raises(ParseError, match="Unexpected character"):
            tokenize("enum A:\n  a $\n", Path("test.enum"))
