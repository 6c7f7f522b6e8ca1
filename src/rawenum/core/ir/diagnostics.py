"""
Diagnostic records for rawenum.

A diagnostic is anchored at the most specific tree node involved, may point
at other nodes through notes, and may carry suggested fixes. Fixes are pure
data: each change names an existing node and the node that should replace
it. Nothing here ever edits a tree; see ``rawenum.core.fixes`` for the
host-side applier.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from .syntax import Node, SourceLocation

DIAGNOSTIC_DOMAIN = "rawenum"


class Severity(StrEnum):
    ERROR = "error"


class MessageID(BaseModel):
    """Stable, namespaced identifier such as ``rawenum.missing-default``."""

    domain: str = DIAGNOSTIC_DOMAIN
    id: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.domain}.{self.id}"


class Note(BaseModel):
    """A secondary message pointing at another node."""

    id: MessageID
    message: str
    anchor: Node

    model_config = ConfigDict(frozen=True)

    @property
    def location(self) -> SourceLocation | None:
        return self.anchor.location


class Replace(BaseModel):
    """Replace ``old`` (an existing node) with ``new``."""

    old: Node
    new: Node

    model_config = ConfigDict(frozen=True)


class FixIt(BaseModel):
    """A labelled, suggested edit made of one or more replacements."""

    id: MessageID
    message: str
    changes: list[Replace] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Diagnostic(BaseModel):
    """
    A single problem found while expanding a declaration.

    Attributes:
        id: Stable per-kind identifier
        message: Human-readable message with names substituted
        severity: ERROR for every kind
        anchor: Most specific node the problem is about
        notes: Pointers to related nodes (e.g. a previous occurrence)
        fixes: Suggested edits; never applied by the pipeline itself
    """

    id: MessageID
    message: str
    severity: Severity = Severity.ERROR
    anchor: Node
    notes: list[Note] = Field(default_factory=list)
    fixes: list[FixIt] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def kind(self) -> str:
        return self.id.id

    @property
    def location(self) -> SourceLocation | None:
        return self.anchor.location
