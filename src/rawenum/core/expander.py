"""
Expansion pipeline for ``@raw_representable`` declarations.

    case model builder -> validator -> synthesizer

On any diagnostic the pipeline stops and raises ExpansionError; no derived
declarations are returned alongside diagnostics. Each call owns all of its
state, so independent declarations can be expanded in any order.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field

from . import diagnostics, ir
from .case_model import RAW_REPRESENTABLE_ATTRIBUTE, build_case_records
from .errors import ExpansionError
from .manifest import ExpansionConfig
from .synthesizer import synthesize, synthesize_conformance
from .validator import check_declaration_shape, validate_cases

logger = logging.getLogger(__name__)

CASE_NAME_ARGUMENT = "case_name"


@dataclass
class ExpansionResult:
    """Outcome for one declaration: an expansion or its diagnostics."""

    declaration: ir.TypeDecl
    expansion: ir.Expansion | None = None
    diagnostics: list[ir.Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.expansion is not None


def parse_raw_value_type(attribute: ir.Attribute) -> ir.TypeRef:
    """The single type argument of ``@raw_representable[T]``."""
    if len(attribute.type_arguments) != 1:
        raise ExpansionError([diagnostics.raw_type_argument(attribute)])
    return attribute.type_arguments[0]


def parse_case_name(attribute: ir.Attribute, config: ExpansionConfig) -> str:
    """The ``case_name`` argument, falling back to the configured name."""
    argument = attribute.argument(CASE_NAME_ARGUMENT)
    if argument is None:
        return config.default_case_name
    if not isinstance(argument.value, ir.StringLiteral):
        raise ExpansionError([diagnostics.case_name_literal(argument)])
    return argument.value.value


def expand(
    declaration: ir.TypeDecl,
    attribute: ir.Attribute | None = None,
    config: ExpansionConfig | None = None,
) -> ir.Expansion:
    """
    Expand one declaration.

    Args:
        declaration: The annotated declaration
        attribute: The ``@raw_representable`` attribute; looked up on the
            declaration when omitted
        config: Expansion settings

    Returns:
        The decode initializer, the encode accessor and the conformance

    Raises:
        ExpansionError: With every diagnostic found
        ValueError: If no ``@raw_representable`` attribute is available
    """
    config = config or ExpansionConfig()
    if attribute is None:
        attribute = declaration.attribute(RAW_REPRESENTABLE_ATTRIBUTE)
        if attribute is None:
            raise ValueError(
                f"'{declaration.name.text}' has no @{RAW_REPRESENTABLE_ATTRIBUTE} attribute"
            )

    raw_type = parse_raw_value_type(attribute)

    shape_errors = check_declaration_shape(declaration)
    if shape_errors:
        raise ExpansionError(shape_errors)

    case_name = parse_case_name(attribute, config)
    config = dataclasses.replace(config, default_case_name=case_name)

    records = build_case_records(declaration)
    logger.debug(
        "Classified %d case(s) of %s: %s",
        len(records),
        declaration.name.text,
        ", ".join(f"{r.name}={r.role}" for r in records),
    )

    model, problems = validate_cases(declaration, records, raw_type, config)
    if model is None:
        logger.debug("%s: %d diagnostic(s)", declaration.name.text, len(problems))
        raise ExpansionError(problems)

    initializer, accessor = synthesize(model)
    return ir.Expansion(
        type_name=model.type_name,
        members=[initializer, accessor],
        extensions=[synthesize_conformance(model.type_name)],
    )


def is_expandable(declaration: ir.TypeDecl) -> bool:
    return declaration.attribute(RAW_REPRESENTABLE_ATTRIBUTE) is not None


def expand_all(
    declarations: list[ir.TypeDecl], config: ExpansionConfig | None = None
) -> list[ExpansionResult]:
    """
    Expand every annotated declaration independently.

    Declarations without ``@raw_representable`` are skipped. A failure in
    one declaration does not affect the others.
    """
    results: list[ExpansionResult] = []
    for declaration in declarations:
        if not is_expandable(declaration):
            logger.debug("Skipping %s (not annotated)", declaration.name.text)
            continue
        try:
            expansion = expand(declaration, config=config)
        except ExpansionError as e:
            results.append(ExpansionResult(declaration, diagnostics=e.diagnostics))
        else:
            results.append(ExpansionResult(declaration, expansion=expansion))
    return results
