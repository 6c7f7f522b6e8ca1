"""
Declaration tree for rawenum.

The tree is what the host hands to the expansion pipeline: a top-level
declaration with its attributes and member lines. Every node is frozen;
rewrites (for example suggested fixes) build new nodes with
``model_copy(update=...)`` and share the untouched subtrees.

Source syntax:

    @raw_representable[String]
    enum Color:
      red
      green, blue
      @raw_value("violet-ish")
      violet
      @default_case
      unknown(String)
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class SourceLocation(BaseModel):
    """Where a node was written: file path plus 1-indexed line and column."""

    file: str
    line: int
    column: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


class Node(BaseModel):
    """Base class for every tree node."""

    location: SourceLocation | None = None

    model_config = ConfigDict(frozen=True)


class Identifier(Node):
    """A bare name."""

    text: str

    def __str__(self) -> str:
        return self.text


class TypeRef(Node):
    """A reference to a named type (``String``, ``Int``...)."""

    name: str

    def __str__(self) -> str:
        return self.name


def quote_string(value: str) -> str:
    """Render ``value`` as a double-quoted literal the lexer reads back verbatim."""
    escaped = (
        value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\t", "\\t")
    )
    return f'"{escaped}"'


class StringLiteral(Node):
    """A string literal; ``value`` is the unescaped content."""

    value: str

    @property
    def literal_text(self) -> str:
        return quote_string(self.value)


class IntegerLiteral(Node):
    """An integer literal, kept as written (``-1``, ``42``)."""

    text: str

    @property
    def literal_text(self) -> str:
        return self.text

    @property
    def value(self) -> int:
        return int(self.text)


class Placeholder(Node):
    """An editor placeholder (``<#value#>``) inserted by fixes."""

    label: str

    @property
    def literal_text(self) -> str:
        return f"<#{self.label}#>"


LiteralExpr = StringLiteral | IntegerLiteral | Placeholder


class Argument(Node):
    """An attribute argument, optionally labelled (``case_name="other"``)."""

    label: str | None = None
    value: LiteralExpr


class Attribute(Node):
    """
    An ``@name[Type](args)`` annotation.

    Attributes:
        name: Attribute name without the ``@``
        type_arguments: Types between the brackets
        arguments: Arguments between the parentheses
    """

    name: Identifier
    type_arguments: list[TypeRef] = Field(default_factory=list)
    arguments: list[Argument] = Field(default_factory=list)

    def is_named(self, name: str) -> bool:
        return self.name.text == name

    def argument(self, label: str) -> Argument | None:
        """Return the argument with the given label, if present."""
        for arg in self.arguments:
            if arg.label == label:
                return arg
        return None


class Parameter(Node):
    """One associated-value field of an enum case."""

    label: str | None = None
    type: TypeRef


class CaseElement(Node):
    """
    One variant name on a member line.

    ``parameters`` is None when the variant carries no payload at all,
    which is distinct from an empty ``()`` payload list.
    """

    name: Identifier
    parameters: list[Parameter] | None = None


class CaseDecl(Node):
    """One member line: its attributes and the variant names it declares."""

    attributes: list[Attribute] = Field(default_factory=list)
    elements: list[CaseElement]


class MemberBlock(Node):
    """The indented body of a declaration."""

    members: list[CaseDecl] = Field(default_factory=list)


class DeclKind(StrEnum):
    """Keyword introducing a top-level declaration."""

    ENUM = "enum"
    STRUCT = "struct"
    CLASS = "class"


class TypeDecl(Node):
    """
    A top-level type declaration.

    Attributes:
        keyword: ``enum``, ``struct`` or ``class``
        name: Declared type name
        attributes: Attributes written above the declaration
        body: Member block (always empty for non-enum declarations)
    """

    keyword: DeclKind
    name: Identifier
    attributes: list[Attribute] = Field(default_factory=list)
    body: MemberBlock = Field(default_factory=MemberBlock)

    @property
    def is_enum(self) -> bool:
        return self.keyword == DeclKind.ENUM

    def attribute(self, name: str) -> Attribute | None:
        """Return the first attribute with the given name, if any."""
        for attr in self.attributes:
            if attr.is_named(name):
                return attr
        return None
