"""
Diagnostic engine for raw-representable enum expansion.

One factory per diagnostic kind builds the full record: stable id,
message, anchor, notes and suggested fixes. Fix builders compute
replacement subtrees with ``model_copy``; the input tree is never touched,
so fixes from different diagnostics never interfere.
"""

from __future__ import annotations

from enum import StrEnum

from . import ir
from .case_model import (
    DEFAULT_CASE_ATTRIBUTE,
    RAW_REPRESENTABLE_ATTRIBUTE,
    RAW_VALUE_ATTRIBUTE,
    CaseRecord,
    is_string_type,
)


class DiagnosticKind(StrEnum):
    NOT_AN_ENUM = "not-an-enum"
    RAW_TYPE_ARGUMENT = "raw-type-argument"
    CASE_NAME_LITERAL = "case-name-literal"
    MISSING_DEFAULT = "missing-default"
    EXTRA_DEFAULT = "extra-default"
    WRONG_ASSOCIATED_VALUE = "wrong-associated-value"
    DEFAULT_AND_RAW = "default-and-raw"
    MALFORMED_RAW_VALUE = "malformed-raw-value"
    MISSING_RAW_VALUE = "missing-raw-value"
    EXTRA_RAW_VALUE = "extra-raw-value"
    RAW_VALUE_TYPE = "raw-value-type"
    UNFILLED_RAW_VALUE = "unfilled-raw-value"
    DUPLICATE_RAW_VALUE = "duplicate-raw-value"


class FixKind(StrEnum):
    ADD_DEFAULT_CASE = "add-default-case"
    FIX_ASSOCIATED_VALUE = "fix-associated-value"
    ADD_RAW_VALUE = "add-raw-value"
    REMOVE_RAW_VALUE = "remove-raw-value"
    QUOTE_RAW_VALUE = "quote-raw-value"


class NoteKind(StrEnum):
    MULTIPLE_DEFAULT = "multiple-default"
    DUPLICATE_RAW_VALUE = "duplicate-raw-value"
    MULTIPLE_RAW_VALUE = "multiple-raw-value"


FIX_MESSAGES = {
    FixKind.ADD_DEFAULT_CASE: "Add default case",
    FixKind.FIX_ASSOCIATED_VALUE: "Fix associated value",
    FixKind.ADD_RAW_VALUE: "Add raw value",
    FixKind.REMOVE_RAW_VALUE: f"Remove @{RAW_VALUE_ATTRIBUTE}",
    FixKind.QUOTE_RAW_VALUE: "Use a string literal",
}

NOTE_MESSAGES = {
    NoteKind.MULTIPLE_DEFAULT: f"@{DEFAULT_CASE_ATTRIBUTE} previously used here",
    NoteKind.DUPLICATE_RAW_VALUE: "Raw value previously used here",
    NoteKind.MULTIPLE_RAW_VALUE: f"@{RAW_VALUE_ATTRIBUTE} previously used here",
}


class DiagnosticCollector:
    """Accumulates diagnostics across checks so they are reported together."""

    def __init__(self) -> None:
        self.diagnostics: list[ir.Diagnostic] = []

    def add(self, diagnostic: ir.Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def has_errors(self) -> bool:
        return any(d.severity == ir.Severity.ERROR for d in self.diagnostics)


# =============================================================================
# Building blocks
# =============================================================================


def _diagnostic(
    kind: DiagnosticKind,
    message: str,
    anchor: ir.Node,
    notes: list[ir.Note] | None = None,
    fixes: list[ir.FixIt] | None = None,
) -> ir.Diagnostic:
    return ir.Diagnostic(
        id=ir.MessageID(id=kind.value),
        message=message,
        anchor=anchor,
        notes=notes or [],
        fixes=fixes or [],
    )


def _note(kind: NoteKind, anchor: ir.Node) -> ir.Note:
    return ir.Note(id=ir.MessageID(id=kind.value), message=NOTE_MESSAGES[kind], anchor=anchor)


def _fix(kind: FixKind, changes: list[ir.Replace]) -> ir.FixIt:
    return ir.FixIt(id=ir.MessageID(id=kind.value), message=FIX_MESSAGES[kind], changes=changes)


def _marker(name: str, arguments: list[ir.Argument] | None = None) -> ir.Attribute:
    return ir.Attribute(name=ir.Identifier(text=name), arguments=arguments or [])


def _payload(raw_type: ir.TypeRef) -> list[ir.Parameter]:
    return [ir.Parameter(type=ir.TypeRef(name=raw_type.name))]


def annotate_case(
    declaration: ir.TypeDecl, record: CaseRecord, attribute: ir.Attribute
) -> list[ir.Replace]:
    """
    Changes that attach ``attribute`` to exactly one variant.

    A variant first on its line gets the attribute added to the line. Any
    other variant is moved to a new line of its own, right after its
    original line, since a line's attributes only bind to its first name.
    """
    case_decl = record.case_decl
    if record.is_first_on_line:
        annotated = case_decl.model_copy(update={"attributes": [*case_decl.attributes, attribute]})
        return [ir.Replace(old=case_decl, new=annotated)]

    remaining = [e for e in case_decl.elements if e is not record.element]
    trimmed = case_decl.model_copy(update={"elements": remaining})
    split_line = ir.CaseDecl(attributes=[attribute], elements=[record.element])

    members: list[ir.CaseDecl] = []
    for member in declaration.body.members:
        if member is case_decl:
            members.extend([trimmed, split_line])
        else:
            members.append(member)

    body = declaration.body
    return [ir.Replace(old=body, new=body.model_copy(update={"members": members}))]


# =============================================================================
# Fixes
# =============================================================================


def add_default_case_fix(
    declaration: ir.TypeDecl,
    raw_type: ir.TypeRef,
    candidate: CaseRecord | None,
    case_name: str,
) -> ir.FixIt:
    """Mark ``candidate`` as the catch-all, or append a new catch-all variant."""
    marker = _marker(DEFAULT_CASE_ATTRIBUTE)
    if candidate is not None:
        return _fix(FixKind.ADD_DEFAULT_CASE, annotate_case(declaration, candidate, marker))

    new_case = ir.CaseDecl(
        attributes=[marker],
        elements=[
            ir.CaseElement(name=ir.Identifier(text=case_name), parameters=_payload(raw_type))
        ],
    )
    body = declaration.body
    new_body = body.model_copy(update={"members": [*body.members, new_case]})
    return _fix(FixKind.ADD_DEFAULT_CASE, [ir.Replace(old=body, new=new_body)])


def fix_associated_value_fix(element: ir.CaseElement, raw_type: ir.TypeRef) -> ir.FixIt:
    """Rewrite the variant's payload to the single expected field."""
    new_element = element.model_copy(update={"parameters": _payload(raw_type)})
    return _fix(FixKind.FIX_ASSOCIATED_VALUE, [ir.Replace(old=element, new=new_element)])


def add_raw_value_fix(
    declaration: ir.TypeDecl, record: CaseRecord, placeholder_label: str
) -> ir.FixIt:
    """Give the variant an explicit ``@raw_value(<#value#>)``."""
    attribute = _marker(
        RAW_VALUE_ATTRIBUTE,
        [ir.Argument(value=ir.Placeholder(label=placeholder_label))],
    )
    return _fix(FixKind.ADD_RAW_VALUE, annotate_case(declaration, record, attribute))


def remove_raw_value_fix(record: CaseRecord) -> ir.FixIt:
    """Drop every ``@raw_value`` from the variant's line."""
    case_decl = record.case_decl
    kept = [a for a in case_decl.attributes if not a.is_named(RAW_VALUE_ATTRIBUTE)]
    new_decl = case_decl.model_copy(update={"attributes": kept})
    return _fix(FixKind.REMOVE_RAW_VALUE, [ir.Replace(old=case_decl, new=new_decl)])


def remove_attribute_fix(record: CaseRecord, attribute: ir.Attribute) -> ir.FixIt:
    """Drop one specific attribute from the variant's line."""
    case_decl = record.case_decl
    kept = [a for a in case_decl.attributes if a is not attribute]
    new_decl = case_decl.model_copy(update={"attributes": kept})
    return _fix(FixKind.REMOVE_RAW_VALUE, [ir.Replace(old=case_decl, new=new_decl)])


def quote_raw_value_fix(literal: ir.IntegerLiteral) -> ir.FixIt:
    """Turn an integer literal into the string literal with the same digits."""
    quoted = ir.StringLiteral(value=literal.text, location=literal.location)
    return _fix(FixKind.QUOTE_RAW_VALUE, [ir.Replace(old=literal, new=quoted)])


# =============================================================================
# Diagnostics
# =============================================================================


def not_an_enum(declaration: ir.TypeDecl) -> ir.Diagnostic:
    return _diagnostic(
        DiagnosticKind.NOT_AN_ENUM,
        f"@{RAW_REPRESENTABLE_ATTRIBUTE} can only be applied to enums",
        declaration,
    )


def raw_type_argument(attribute: ir.Attribute) -> ir.Diagnostic:
    return _diagnostic(
        DiagnosticKind.RAW_TYPE_ARGUMENT,
        f"@{RAW_REPRESENTABLE_ATTRIBUTE} requires exactly one raw value type argument",
        attribute,
    )


def case_name_literal(argument: ir.Argument) -> ir.Diagnostic:
    return _diagnostic(
        DiagnosticKind.CASE_NAME_LITERAL,
        "`case_name` must be a string literal",
        argument.value,
    )


def missing_default(
    declaration: ir.TypeDecl,
    raw_type: ir.TypeRef,
    candidate: CaseRecord | None,
    case_name: str,
) -> ir.Diagnostic:
    """
    No variant carries the catch-all marker.

    Anchored at the candidate variant's name when one exists (the fix only
    adds the marker there), otherwise at the enum's name.
    """
    anchor = candidate.element.name if candidate is not None else declaration.name
    return _diagnostic(
        DiagnosticKind.MISSING_DEFAULT,
        f"No case in enum is marked with @{DEFAULT_CASE_ATTRIBUTE}",
        anchor,
        fixes=[add_default_case_fix(declaration, raw_type, candidate, case_name)],
    )


def extra_default(record: CaseRecord, existing: CaseRecord) -> ir.Diagnostic:
    return _diagnostic(
        DiagnosticKind.EXTRA_DEFAULT,
        f"Multiple uses of @{DEFAULT_CASE_ATTRIBUTE}",
        record.element.name,
        notes=[_note(NoteKind.MULTIPLE_DEFAULT, existing.element)],
    )


def wrong_associated_value(record: CaseRecord, raw_type: ir.TypeRef) -> ir.Diagnostic:
    return _diagnostic(
        DiagnosticKind.WRONG_ASSOCIATED_VALUE,
        f"case '{record.name}' must have exactly one associated value of type `{raw_type.name}`",
        record.element,
        fixes=[fix_associated_value_fix(record.element, raw_type)],
    )


def default_and_raw(record: CaseRecord) -> ir.Diagnostic:
    return _diagnostic(
        DiagnosticKind.DEFAULT_AND_RAW,
        f"Cannot have both @{DEFAULT_CASE_ATTRIBUTE} and @{RAW_VALUE_ATTRIBUTE} on an enum case",
        record.element,
        fixes=[remove_raw_value_fix(record)],
    )


def malformed_raw_value(attribute: ir.Attribute) -> ir.Diagnostic:
    return _diagnostic(
        DiagnosticKind.MALFORMED_RAW_VALUE,
        f"@{RAW_VALUE_ATTRIBUTE} takes exactly one literal argument",
        attribute,
    )


def missing_raw_value(
    declaration: ir.TypeDecl, record: CaseRecord, placeholder_label: str
) -> ir.Diagnostic:
    return _diagnostic(
        DiagnosticKind.MISSING_RAW_VALUE,
        f"case '{record.name}' must specify a raw value",
        record.element,
        fixes=[add_raw_value_fix(declaration, record, placeholder_label)],
    )


def duplicate_raw_value(
    record: CaseRecord, literal_text: str, node: ir.Node, existing: ir.Node
) -> ir.Diagnostic:
    return _diagnostic(
        DiagnosticKind.DUPLICATE_RAW_VALUE,
        f"Raw value {literal_text} for case '{record.name}' is not unique",
        node,
        notes=[_note(NoteKind.DUPLICATE_RAW_VALUE, existing)],
    )


def extra_raw_value(record: CaseRecord, attribute: ir.Attribute) -> ir.Diagnostic:
    """A second ``@raw_value`` on the same line; only the first one counts."""
    first = record.raw_attribute if record.raw_attribute is not None else attribute
    return _diagnostic(
        DiagnosticKind.EXTRA_RAW_VALUE,
        f"Multiple uses of @{RAW_VALUE_ATTRIBUTE}",
        attribute,
        notes=[_note(NoteKind.MULTIPLE_RAW_VALUE, first)],
        fixes=[remove_attribute_fix(record, attribute)],
    )


def raw_value_type(
    record: CaseRecord, literal: ir.LiteralExpr, raw_type: ir.TypeRef
) -> ir.Diagnostic:
    fixes = []
    if isinstance(literal, ir.IntegerLiteral) and is_string_type(raw_type):
        fixes.append(quote_raw_value_fix(literal))
    return _diagnostic(
        DiagnosticKind.RAW_VALUE_TYPE,
        f"Raw value {literal.literal_text} for case '{record.name}' "
        f"is not a literal of type `{raw_type.name}`",
        literal,
        fixes=fixes,
    )


def unfilled_raw_value(record: CaseRecord, placeholder: ir.Placeholder) -> ir.Diagnostic:
    return _diagnostic(
        DiagnosticKind.UNFILLED_RAW_VALUE,
        f"Raw value for case '{record.name}' is still the placeholder {placeholder.literal_text}",
        placeholder,
    )
