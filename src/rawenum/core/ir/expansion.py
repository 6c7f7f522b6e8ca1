"""
Derived declarations produced by a successful expansion.

For ``enum Color`` with raw type ``String`` the printed form is:

    init(raw_value: String):
      self = match raw_value:
        case "red": red
        case _: unknown(raw_value)

    var raw_value: String:
      match self:
        case red: "red"
        case unknown(value): value

    extension Color: RawRepresentable
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .syntax import LiteralExpr, Node, TypeRef


class NameRef(Node):
    """A reference to a bound name (``raw_value``, ``self``, a pattern binding)."""

    name: str


class CaseConstruct(Node):
    """Construct an enum case, optionally with one payload argument."""

    case_name: str
    argument: NameRef | None = None


class LiteralPattern(Node):
    """Matches a raw value equal to ``literal``."""

    literal: LiteralExpr


class CasePattern(Node):
    """Matches an enum case; ``binding`` names its single payload when present."""

    case_name: str
    binding: str | None = None


class WildcardPattern(Node):
    """Matches anything."""


Pattern = LiteralPattern | CasePattern | WildcardPattern
ResultExpr = CaseConstruct | NameRef | LiteralExpr


class MatchArm(Node):
    pattern: Pattern
    result: ResultExpr


class MatchExpr(Node):
    """A multi-way branch; arms are tried in order and the first match wins."""

    subject: NameRef
    arms: list[MatchArm] = Field(default_factory=list)


class InitializerDecl(Node):
    """The decode operation: builds ``type_name`` from a raw value."""

    type_name: str
    parameter: str
    raw_type: TypeRef
    body: MatchExpr


class AccessorDecl(Node):
    """The encode operation: a computed property returning the raw value."""

    name: str
    raw_type: TypeRef
    body: MatchExpr


class ConformanceDecl(Node):
    """Declares that ``type_name`` conforms to ``protocol``."""

    type_name: str
    protocol: str = "RawRepresentable"


class Expansion(BaseModel):
    """Everything emitted for one declaration."""

    type_name: str
    members: list[InitializerDecl | AccessorDecl] = Field(default_factory=list)
    extensions: list[ConformanceDecl] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def initializer(self) -> InitializerDecl:
        return next(m for m in self.members if isinstance(m, InitializerDecl))

    @property
    def accessor(self) -> AccessorDecl:
        return next(m for m in self.members if isinstance(m, AccessorDecl))
