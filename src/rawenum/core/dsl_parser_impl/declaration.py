"""
Declaration parser mixin for the rawenum declaration language.

Parses top-level type declarations and enum member lines.

Syntax:

    @raw_representable[String]
    enum Color:
      red
      green, blue
      @default_case
      unknown(String)

Only enum bodies are parsed. The body of a ``struct`` or ``class`` is
skipped so that the expansion pipeline can report it as not-an-enum.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType

DECLARATION_KEYWORDS = {
    TokenType.ENUM: ir.DeclKind.ENUM,
    TokenType.STRUCT: ir.DeclKind.STRUCT,
    TokenType.CLASS: ir.DeclKind.CLASS,
}


class DeclarationParserMixin:
    """Parser mixin for type declarations."""

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        skip_newlines: Any
        current_token: Any
        peek_token: Any
        location: Any
        error: Any
        parse_attributes: Any
        parse_type: Any

    def parse_declaration(self) -> ir.TypeDecl:
        """
        Parse one top-level declaration.

        Grammar:
            attribute* (ENUM | STRUCT | CLASS) IDENTIFIER COLON NEWLINE
              (INDENT member_line* DEDENT)?
        """
        attributes = self.parse_attributes()

        keyword_token = self.current_token()
        if keyword_token.type not in DECLARATION_KEYWORDS:
            raise self.error(
                f"Expected enum, struct or class declaration, got {keyword_token.type.value}",
                keyword_token,
            )
        self.advance()
        keyword = DECLARATION_KEYWORDS[keyword_token.type]

        name_token = self.expect(TokenType.IDENTIFIER)
        name = ir.Identifier(text=name_token.value, location=self.location(name_token))
        self.expect(TokenType.COLON)
        self.expect(TokenType.NEWLINE)
        self.skip_newlines()

        members: list[ir.CaseDecl] = []
        body_token = self.current_token()
        if self.match(TokenType.INDENT):
            self.advance()
            if keyword == ir.DeclKind.ENUM:
                members = self.parse_member_lines()
            else:
                self._skip_block()

        return ir.TypeDecl(
            keyword=keyword,
            name=name,
            attributes=attributes,
            body=ir.MemberBlock(members=members, location=self.location(body_token)),
            location=self.location(keyword_token),
        )

    def parse_member_lines(self) -> list[ir.CaseDecl]:
        """Parse member lines up to (and including) the closing DEDENT."""
        members: list[ir.CaseDecl] = []
        while not self.match(TokenType.DEDENT, TokenType.EOF):
            self.skip_newlines()
            if self.match(TokenType.DEDENT, TokenType.EOF):
                break
            members.append(self.parse_member_line())

        if self.match(TokenType.DEDENT):
            self.advance()
        return members

    def parse_member_line(self) -> ir.CaseDecl:
        """
        Parse one member line.

        Grammar:
            attribute* element (COMMA element)* NEWLINE
        """
        start = self.current_token()
        attributes = self.parse_attributes()

        elements = [self.parse_case_element()]
        while self.match(TokenType.COMMA):
            self.advance()
            elements.append(self.parse_case_element())

        if not self.match(TokenType.NEWLINE, TokenType.DEDENT, TokenType.EOF):
            token = self.current_token()
            raise self.error(f"Unexpected {token.type.value} after enum case", token)
        self.skip_newlines()

        return ir.CaseDecl(attributes=attributes, elements=elements, location=self.location(start))

    def parse_case_element(self) -> ir.CaseElement:
        """
        Parse a variant name with its optional payload.

        Grammar:
            IDENTIFIER (LPAREN (parameter (COMMA parameter)*)? RPAREN)?
        """
        name_token = self.expect(TokenType.IDENTIFIER)
        name = ir.Identifier(text=name_token.value, location=self.location(name_token))

        parameters: list[ir.Parameter] | None = None
        if self.match(TokenType.LPAREN):
            self.advance()
            parameters = []
            if not self.match(TokenType.RPAREN):
                parameters.append(self.parse_parameter())
                while self.match(TokenType.COMMA):
                    self.advance()
                    parameters.append(self.parse_parameter())
            self.expect(TokenType.RPAREN)

        return ir.CaseElement(name=name, parameters=parameters, location=self.location(name_token))

    def parse_parameter(self) -> ir.Parameter:
        """
        Parse one associated-value field.

        Grammar:
            (IDENTIFIER COLON)? type
        """
        start = self.current_token()
        label = None
        if self.match(TokenType.IDENTIFIER) and self.peek_token().type == TokenType.COLON:
            label = self.advance().value
            self.advance()
        return ir.Parameter(label=label, type=self.parse_type(), location=self.location(start))

    def _skip_block(self) -> None:
        """Skip tokens up to the DEDENT closing the current block."""
        depth = 1
        while depth > 0 and not self.match(TokenType.EOF):
            token = self.advance()
            if token.type == TokenType.INDENT:
                depth += 1
            elif token.type == TokenType.DEDENT:
                depth -= 1
