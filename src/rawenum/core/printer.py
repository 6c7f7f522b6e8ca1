"""
Pretty-printer for declaration trees and derived declarations.

Printed declarations parse back to an equivalent tree (locations aside),
which is what lets ``rawenum fix --write`` rewrite a file.
"""

from __future__ import annotations

from . import ir

INDENT = "  "


# =============================================================================
# Declarations
# =============================================================================


def print_literal(literal: ir.LiteralExpr) -> str:
    return literal.literal_text


def print_attribute(attribute: ir.Attribute) -> str:
    text = f"@{attribute.name.text}"
    if attribute.type_arguments:
        text += "[" + ", ".join(t.name for t in attribute.type_arguments) + "]"
    if attribute.arguments:
        args = []
        for arg in attribute.arguments:
            value = print_literal(arg.value)
            args.append(f"{arg.label}={value}" if arg.label else value)
        text += "(" + ", ".join(args) + ")"
    return text


def print_case_element(element: ir.CaseElement) -> str:
    if element.parameters is None:
        return element.name.text
    params = []
    for param in element.parameters:
        params.append(f"{param.label}: {param.type.name}" if param.label else param.type.name)
    return f"{element.name.text}({', '.join(params)})"


def print_case_decl(case_decl: ir.CaseDecl, indent: str = INDENT) -> list[str]:
    lines = [indent + print_attribute(a) for a in case_decl.attributes]
    lines.append(indent + ", ".join(print_case_element(e) for e in case_decl.elements))
    return lines


def print_declaration(declaration: ir.TypeDecl) -> str:
    """Render a declaration in source form."""
    lines = [print_attribute(a) for a in declaration.attributes]
    lines.append(f"{declaration.keyword.value} {declaration.name.text}:")
    for member in declaration.body.members:
        lines.extend(print_case_decl(member))
    return "\n".join(lines) + "\n"


def print_declarations(declarations: list[ir.TypeDecl]) -> str:
    return "\n".join(print_declaration(d) for d in declarations)


# =============================================================================
# Derived declarations
# =============================================================================


def print_pattern(pattern: ir.Pattern) -> str:
    match pattern:
        case ir.LiteralPattern(literal=literal):
            return print_literal(literal)
        case ir.CasePattern(case_name=name, binding=None):
            return name
        case ir.CasePattern(case_name=name, binding=binding):
            return f"{name}({binding})"
        case ir.WildcardPattern():
            return "_"
    raise TypeError(f"Unknown pattern: {pattern!r}")


def print_result(result: ir.ResultExpr) -> str:
    match result:
        case ir.CaseConstruct(case_name=name, argument=None):
            return name
        case ir.CaseConstruct(case_name=name, argument=argument):
            return f"{name}({argument.name})"
        case ir.NameRef(name=name):
            return name
        case _:
            return print_literal(result)


def print_match(match_expr: ir.MatchExpr, indent: str, prefix: str = "") -> list[str]:
    lines = [f"{indent}{prefix}match {match_expr.subject.name}:"]
    for arm in match_expr.arms:
        lines.append(
            f"{indent}{INDENT}case {print_pattern(arm.pattern)}: {print_result(arm.result)}"
        )
    return lines


def print_initializer(decl: ir.InitializerDecl) -> str:
    lines = [f"init({decl.parameter}: {decl.raw_type.name}):"]
    lines.extend(print_match(decl.body, INDENT, prefix="self = "))
    return "\n".join(lines) + "\n"


def print_accessor(decl: ir.AccessorDecl) -> str:
    lines = [f"var {decl.name}: {decl.raw_type.name}:"]
    lines.extend(print_match(decl.body, INDENT))
    return "\n".join(lines) + "\n"


def print_conformance(decl: ir.ConformanceDecl) -> str:
    return f"extension {decl.type_name}: {decl.protocol}\n"


def print_expansion(expansion: ir.Expansion) -> str:
    """Render every derived declaration, separated by blank lines."""
    parts: list[str] = []
    for member in expansion.members:
        if isinstance(member, ir.InitializerDecl):
            parts.append(print_initializer(member))
        else:
            parts.append(print_accessor(member))
    parts.extend(print_conformance(ext) for ext in expansion.extensions)
    return "\n".join(parts)
