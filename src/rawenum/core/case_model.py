"""
Case model for raw-representable enums.

A single classification pass turns the enum's member lines into ordered
``CaseRecord``s. Nothing is validated here: a record may carry conflicting
annotations or no derivable value, and the validator reports it.

Annotation scoping: the attributes on a member line bind only to the first
variant on that line. In

    @default_case
    a, b

``a`` is the catch-all and ``b`` is a plain value-case.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from . import ir

RAW_REPRESENTABLE_ATTRIBUTE = "raw_representable"
RAW_VALUE_ATTRIBUTE = "raw_value"
DEFAULT_CASE_ATTRIBUTE = "default_case"

STRING_TYPE = "String"


class CaseRole(StrEnum):
    """How a variant obtains its raw value."""

    DEFAULT = "default"  # the catch-all; carries the raw value as its payload
    EXPLICIT = "explicit"  # @raw_value(<literal>)
    IMPLICIT = "implicit"  # no annotation


@dataclass(frozen=True)
class CaseRecord:
    """
    One variant of the enum, classified.

    Attributes:
        element: The variant node
        case_decl: The member line declaring it
        role: DEFAULT, EXPLICIT or IMPLICIT
        raw_attribute: The ``@raw_value`` attribute bound to this variant, if
            any. Kept on DEFAULT records too so conflicts can be reported.
        extra_raw_attributes: Any further ``@raw_value`` attributes on the
            same line, which are ignored apart from being reported.
    """

    element: ir.CaseElement
    case_decl: ir.CaseDecl
    role: CaseRole
    raw_attribute: ir.Attribute | None = None
    extra_raw_attributes: tuple[ir.Attribute, ...] = ()

    @property
    def name(self) -> str:
        return self.element.name.text

    @property
    def value(self) -> ir.LiteralExpr | None:
        """The explicit literal, when the attribute has exactly one argument."""
        if self.raw_attribute is None or len(self.raw_attribute.arguments) != 1:
            return None
        return self.raw_attribute.arguments[0].value

    @property
    def is_first_on_line(self) -> bool:
        return self.case_decl.elements[0] is self.element


@dataclass(frozen=True)
class ResolvedCase:
    """A value-case together with the literal it maps to."""

    record: CaseRecord
    literal: ir.LiteralExpr

    @property
    def name(self) -> str:
        return self.record.name


@dataclass(frozen=True)
class CaseModel:
    """
    A validated enum: exactly one catch-all plus uniquely valued cases.

    Attributes:
        type_name: Name of the enum
        raw_type: The raw value type
        catch_all: The DEFAULT record
        value_cases: Every other variant, in declaration order
    """

    type_name: str
    raw_type: ir.TypeRef
    catch_all: CaseRecord
    value_cases: list[ResolvedCase]


def is_string_type(raw_type: ir.TypeRef) -> bool:
    return raw_type.name == STRING_TYPE


def _find_attribute(attributes: list[ir.Attribute], name: str) -> ir.Attribute | None:
    for attr in attributes:
        if attr.is_named(name):
            return attr
    return None


def build_case_records(declaration: ir.TypeDecl) -> list[CaseRecord]:
    """
    Classify every variant of ``declaration`` in declaration order.

    Args:
        declaration: An enum declaration

    Returns:
        One CaseRecord per variant
    """
    records: list[CaseRecord] = []

    for case_decl in declaration.body.members:
        for index, element in enumerate(case_decl.elements):
            if index > 0:
                records.append(CaseRecord(element, case_decl, CaseRole.IMPLICIT))
                continue

            default_marker = _find_attribute(case_decl.attributes, DEFAULT_CASE_ATTRIBUTE)
            raw_attributes = [a for a in case_decl.attributes if a.is_named(RAW_VALUE_ATTRIBUTE)]
            raw_attribute = raw_attributes[0] if raw_attributes else None

            if default_marker is not None:
                role = CaseRole.DEFAULT
            elif raw_attribute is not None:
                role = CaseRole.EXPLICIT
            else:
                role = CaseRole.IMPLICIT

            records.append(
                CaseRecord(element, case_decl, role, raw_attribute, tuple(raw_attributes[1:]))
            )

    return records
