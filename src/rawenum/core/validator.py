"""
Semantic validation for raw-representable enums.

Checks that the declaration is an enum, that exactly one variant is the
catch-all with a payload of the raw type, and that every other variant maps
to a unique literal of the raw type. Every violation found in one pass is reported
together; the only early exits are not-an-enum and missing-default, since
without an enum or a known catch-all the other checks are meaningless.
"""

from __future__ import annotations

from . import diagnostics, ir
from .case_model import (
    CaseModel,
    CaseRecord,
    CaseRole,
    ResolvedCase,
    is_string_type,
)
from .diagnostics import DiagnosticCollector
from .manifest import ExpansionConfig


def check_declaration_shape(declaration: ir.TypeDecl) -> list[ir.Diagnostic]:
    """Return a single not-an-enum diagnostic unless ``declaration`` is an enum."""
    if not declaration.is_enum:
        return [diagnostics.not_an_enum(declaration)]
    return []


def has_raw_payload(element: ir.CaseElement, raw_type: ir.TypeRef) -> bool:
    """True when the variant's payload is exactly one field of ``raw_type``."""
    params = element.parameters
    return params is not None and len(params) == 1 and params[0].type.name == raw_type.name


def find_default_candidate(
    records: list[CaseRecord], raw_type: ir.TypeRef, case_name: str
) -> CaseRecord | None:
    """
    Pick the variant a missing-default fix should mark.

    A variant already named like the configured catch-all wins; otherwise
    the first variant whose payload is a single raw-typed field.
    """
    for record in records:
        if record.name == case_name:
            return record
    for record in records:
        if has_raw_payload(record.element, raw_type):
            return record
    return None


def literal_fits_type(literal: ir.LiteralExpr, raw_type: ir.TypeRef) -> bool:
    """String raw types take string literals; every other raw type takes integers."""
    if is_string_type(raw_type):
        return isinstance(literal, ir.StringLiteral)
    return isinstance(literal, ir.IntegerLiteral)


def resolve_value(record: CaseRecord, raw_type: ir.TypeRef) -> tuple[ir.LiteralExpr, ir.Node] | None:
    """
    The literal a value-case maps to, and the node that wrote it.

    Explicit values come from the attribute argument. Implicit values exist
    only for String raw types and equal the variant's name exactly.
    """
    match record.role:
        case CaseRole.EXPLICIT:
            literal = record.value
            if literal is None:
                return None
            return literal, literal
        case CaseRole.IMPLICIT:
            if not is_string_type(raw_type):
                return None
            name = record.element.name
            return ir.StringLiteral(value=name.text, location=name.location), name
        case CaseRole.DEFAULT:
            return None


def validate_cases(
    declaration: ir.TypeDecl,
    records: list[CaseRecord],
    raw_type: ir.TypeRef,
    config: ExpansionConfig | None = None,
) -> tuple[CaseModel | None, list[ir.Diagnostic]]:
    """
    Validate classified variants.

    Args:
        declaration: The enum the records came from (fix targets)
        records: Output of build_case_records, in declaration order
        raw_type: The raw value type
        config: Expansion settings (catch-all name, placeholder label)

    Returns:
        Tuple of (model, diagnostics). ``model`` is None exactly when
        ``diagnostics`` is non-empty.
    """
    config = config or ExpansionConfig()

    defaults = [r for r in records if r.role == CaseRole.DEFAULT]
    if not defaults:
        candidate = find_default_candidate(records, raw_type, config.default_case_name)
        return None, [
            diagnostics.missing_default(
                declaration, raw_type, candidate, config.default_case_name
            )
        ]

    catch_all = defaults[0]
    collector = DiagnosticCollector()
    value_cases: list[ResolvedCase] = []
    first_seen: dict[str, ir.Node] = {}

    for record in records:
        if record.role == CaseRole.EXPLICIT:
            for extra in record.extra_raw_attributes:
                collector.add(diagnostics.extra_raw_value(record, extra))

        match record.role:
            case CaseRole.DEFAULT:
                if record is not catch_all:
                    collector.add(diagnostics.extra_default(record, catch_all))
                elif not has_raw_payload(record.element, raw_type):
                    collector.add(diagnostics.wrong_associated_value(record, raw_type))
                if record.raw_attribute is not None:
                    collector.add(diagnostics.default_and_raw(record))
                continue

            case CaseRole.EXPLICIT if record.raw_attribute is not None and record.value is None:
                collector.add(diagnostics.malformed_raw_value(record.raw_attribute))
                continue

        resolved = resolve_value(record, raw_type)
        if resolved is None:
            collector.add(
                diagnostics.missing_raw_value(declaration, record, config.placeholder_label)
            )
            continue

        literal, node = resolved
        if isinstance(literal, ir.Placeholder):
            collector.add(diagnostics.unfilled_raw_value(record, literal))
            continue
        if not literal_fits_type(literal, raw_type):
            collector.add(diagnostics.raw_value_type(record, literal, raw_type))
            continue

        key = literal.literal_text
        if key in first_seen:
            collector.add(diagnostics.duplicate_raw_value(record, key, node, first_seen[key]))
            continue
        first_seen[key] = node

        value_cases.append(ResolvedCase(record=record, literal=literal))

    if collector.has_errors:
        return None, collector.diagnostics

    return (
        CaseModel(
            type_name=declaration.name.text,
            raw_type=raw_type,
            catch_all=catch_all,
            value_cases=value_cases,
        ),
        [],
    )


__all__ = [
    "check_declaration_shape",
    "find_default_candidate",
    "has_raw_payload",
    "literal_fits_type",
    "resolve_value",
    "validate_cases",
]
