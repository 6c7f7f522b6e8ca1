"""
Attribute parser mixin for the rawenum declaration language.

Syntax:

    @default_case
    @raw_value("violet-ish")
    @raw_value(-1)
    @raw_representable[Int](case_name="other")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType


class AttributeParserMixin:
    """Parser mixin for attributes, their arguments and type references."""

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        skip_newlines: Any
        current_token: Any
        peek_token: Any
        location: Any
        error: Any

    def parse_attributes(self) -> list[ir.Attribute]:
        """
        Parse zero or more attributes, on one line or on consecutive lines.

        Grammar:
            (AT IDENTIFIER type_args? args? NEWLINE*)*
        """
        attributes: list[ir.Attribute] = []
        while self.match(TokenType.AT):
            attributes.append(self.parse_attribute())
            self.skip_newlines()
        return attributes

    def parse_attribute(self) -> ir.Attribute:
        """
        Parse a single attribute.

        Grammar:
            AT IDENTIFIER (LBRACKET type (COMMA type)* RBRACKET)?
                          (LPAREN (argument (COMMA argument)*)? RPAREN)?
        """
        at = self.expect(TokenType.AT)
        name_token = self.expect(TokenType.IDENTIFIER)
        name = ir.Identifier(text=name_token.value, location=self.location(name_token))

        type_arguments: list[ir.TypeRef] = []
        if self.match(TokenType.LBRACKET):
            self.advance()
            type_arguments.append(self.parse_type())
            while self.match(TokenType.COMMA):
                self.advance()
                type_arguments.append(self.parse_type())
            self.expect(TokenType.RBRACKET)

        arguments: list[ir.Argument] = []
        if self.match(TokenType.LPAREN):
            self.advance()
            if not self.match(TokenType.RPAREN):
                arguments.append(self.parse_argument())
                while self.match(TokenType.COMMA):
                    self.advance()
                    arguments.append(self.parse_argument())
            self.expect(TokenType.RPAREN)

        return ir.Attribute(
            name=name,
            type_arguments=type_arguments,
            arguments=arguments,
            location=self.location(at),
        )

    def parse_argument(self) -> ir.Argument:
        """
        Parse an attribute argument.

        Grammar:
            (IDENTIFIER EQUALS)? literal
        """
        start = self.current_token()
        label = None
        if self.match(TokenType.IDENTIFIER) and self.peek_token().type == TokenType.EQUALS:
            label = self.advance().value
            self.advance()
        value = self.parse_literal()
        return ir.Argument(label=label, value=value, location=self.location(start))

    def parse_literal(self) -> ir.LiteralExpr:
        """
        Parse a literal expression.

        Grammar:
            STRING | MINUS? NUMBER | PLACEHOLDER
        """
        token = self.current_token()
        loc = self.location(token)

        if self.match(TokenType.STRING):
            self.advance()
            return ir.StringLiteral(value=token.value, location=loc)

        if self.match(TokenType.PLACEHOLDER):
            self.advance()
            return ir.Placeholder(label=token.value, location=loc)

        if self.match(TokenType.MINUS):
            self.advance()
            number = self.expect(TokenType.NUMBER)
            return ir.IntegerLiteral(text=f"-{number.value}", location=loc)

        if self.match(TokenType.NUMBER):
            self.advance()
            return ir.IntegerLiteral(text=token.value, location=loc)

        raise self.error(
            f"Expected a string, integer or placeholder literal, got {token.type.value}",
            token,
        )

    def parse_type(self) -> ir.TypeRef:
        """Parse a type reference (a single identifier)."""
        token = self.expect(TokenType.IDENTIFIER)
        return ir.TypeRef(name=token.value, location=self.location(token))
