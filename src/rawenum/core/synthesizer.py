"""
Synthesis of the derived raw-value declarations.

Given a validated CaseModel, builds:

- the decode initializer: one arm per value-case in declaration order,
  then a wildcard arm wrapping the raw input in the catch-all;
- the encode accessor: one arm per value-case returning its literal, then
  an arm returning the catch-all's payload unchanged;
- the conformance declaration for the enum.

Synthesis cannot fail for a validated model.
"""

from __future__ import annotations

from . import ir
from .case_model import CaseModel

RAW_VALUE_NAME = "raw_value"
SELF_NAME = "self"
PAYLOAD_BINDING = "value"
CONFORMANCE_PROTOCOL = "RawRepresentable"


def _raw_type(model: CaseModel) -> ir.TypeRef:
    # Derived code does not point back at the attribute's source position
    return ir.TypeRef(name=model.raw_type.name)


def _literal(literal: ir.LiteralExpr) -> ir.LiteralExpr:
    return literal.model_copy(update={"location": None})


def synthesize_initializer(model: CaseModel) -> ir.InitializerDecl:
    """Build ``init(raw_value: RawType)``."""
    arms = [
        ir.MatchArm(
            pattern=ir.LiteralPattern(literal=_literal(case.literal)),
            result=ir.CaseConstruct(case_name=case.name),
        )
        for case in model.value_cases
    ]
    arms.append(
        ir.MatchArm(
            pattern=ir.WildcardPattern(),
            result=ir.CaseConstruct(
                case_name=model.catch_all.name, argument=ir.NameRef(name=RAW_VALUE_NAME)
            ),
        )
    )
    return ir.InitializerDecl(
        type_name=model.type_name,
        parameter=RAW_VALUE_NAME,
        raw_type=_raw_type(model),
        body=ir.MatchExpr(subject=ir.NameRef(name=RAW_VALUE_NAME), arms=arms),
    )


def synthesize_accessor(model: CaseModel) -> ir.AccessorDecl:
    """Build the ``raw_value`` accessor."""
    arms = [
        ir.MatchArm(
            pattern=ir.CasePattern(case_name=case.name),
            result=_literal(case.literal),
        )
        for case in model.value_cases
    ]
    arms.append(
        ir.MatchArm(
            pattern=ir.CasePattern(case_name=model.catch_all.name, binding=PAYLOAD_BINDING),
            result=ir.NameRef(name=PAYLOAD_BINDING),
        )
    )
    return ir.AccessorDecl(
        name=RAW_VALUE_NAME,
        raw_type=_raw_type(model),
        body=ir.MatchExpr(subject=ir.NameRef(name=SELF_NAME), arms=arms),
    )


def synthesize(model: CaseModel) -> tuple[ir.InitializerDecl, ir.AccessorDecl]:
    """Build the decode and encode declarations for ``model``."""
    return synthesize_initializer(model), synthesize_accessor(model)


def synthesize_conformance(type_name: str) -> ir.ConformanceDecl:
    return ir.ConformanceDecl(type_name=type_name, protocol=CONFORMANCE_PROTOCOL)
