"""
Reference interpreter for derived declarations.

Runs the decode initializer and encode accessor of an Expansion against
Python values, so that their behaviour can be checked without a host
compiler. Enum values are modelled as ``EnumValue(case_name, payload)``;
raw values are ``str`` for String raw types and ``int`` otherwise.

Match arms are tried in order and the first matching arm wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from . import ir
from .case_model import STRING_TYPE
from .errors import EvaluationError

RawValue = str | int


@dataclass(frozen=True)
class EnumValue:
    """A case of the expanded enum, with its payload (if any)."""

    case_name: str
    payload: tuple[Any, ...] = ()

    def __str__(self) -> str:
        if not self.payload:
            return self.case_name
        return f"{self.case_name}({', '.join(repr(p) for p in self.payload)})"


_NO_VALUE = object()


def literal_value(literal: ir.LiteralExpr) -> Any:
    """Python value of a literal; placeholders have none and never match."""
    match literal:
        case ir.StringLiteral(value=value):
            return value
        case ir.IntegerLiteral():
            return literal.value
        case _:
            return _NO_VALUE


def check_raw_value(raw_type: ir.TypeRef, raw: Any) -> None:
    """Raise EvaluationError unless ``raw`` is a value of ``raw_type``."""
    if raw_type.name == STRING_TYPE:
        if not isinstance(raw, str):
            raise EvaluationError(f"Expected a {STRING_TYPE} raw value, got {raw!r}")
    elif not isinstance(raw, int) or isinstance(raw, bool):
        raise EvaluationError(f"Expected an integer {raw_type.name} raw value, got {raw!r}")


def coerce_raw_value(raw_type: ir.TypeRef, text: str) -> RawValue:
    """Convert command-line text into a raw value of ``raw_type``."""
    if raw_type.name == STRING_TYPE:
        return text
    try:
        return int(text)
    except ValueError as e:
        raise EvaluationError(f"'{text}' is not a valid {raw_type.name} raw value") from e


def _match_pattern(pattern: ir.Pattern, subject: Any) -> dict[str, Any] | None:
    """Bindings produced by matching ``subject``, or None when it does not match."""
    match pattern:
        case ir.WildcardPattern():
            return {}
        case ir.LiteralPattern(literal=literal):
            value = literal_value(literal)
            if value is _NO_VALUE or type(value) is not type(subject) or value != subject:
                return None
            return {}
        case ir.CasePattern(case_name=name, binding=binding):
            if not isinstance(subject, EnumValue) or subject.case_name != name:
                return None
            if binding is None:
                return {}
            if len(subject.payload) != 1:
                raise EvaluationError(
                    f"Case '{name}' binds one payload value, got {len(subject.payload)}"
                )
            return {binding: subject.payload[0]}
    raise EvaluationError(f"Unknown pattern: {pattern!r}")


def _evaluate(result: ir.ResultExpr, env: dict[str, Any]) -> Any:
    match result:
        case ir.CaseConstruct(case_name=name, argument=None):
            return EnumValue(name)
        case ir.CaseConstruct(case_name=name, argument=argument):
            return EnumValue(name, (env[argument.name],))
        case ir.NameRef(name=name):
            if name not in env:
                raise EvaluationError(f"Unbound name '{name}'")
            return env[name]
        case _:
            value = literal_value(result)
            if value is _NO_VALUE:
                raise EvaluationError(f"Cannot evaluate placeholder {result.literal_text}")
            return value


def run_match(match_expr: ir.MatchExpr, env: dict[str, Any]) -> Any:
    """Evaluate ``match_expr`` with its subject looked up in ``env``."""
    subject = env[match_expr.subject.name]
    for arm in match_expr.arms:
        bindings = _match_pattern(arm.pattern, subject)
        if bindings is not None:
            return _evaluate(arm.result, {**env, **bindings})
    raise EvaluationError(f"No match arm accepts {subject!r}")


def decode(expansion: ir.Expansion, raw: RawValue) -> EnumValue:
    """Run the decode initializer on ``raw``."""
    init = expansion.initializer
    check_raw_value(init.raw_type, raw)
    value = run_match(init.body, {init.parameter: raw})
    if not isinstance(value, EnumValue):
        raise EvaluationError(f"Initializer produced {value!r}, not an enum value")
    return value


def encode(expansion: ir.Expansion, value: EnumValue) -> RawValue:
    """Run the encode accessor on ``value``."""
    accessor = expansion.accessor
    raw = run_match(accessor.body, {accessor.body.subject.name: value})
    check_raw_value(accessor.raw_type, raw)
    return raw


def case_names(expansion: ir.Expansion) -> list[str]:
    """Every case the accessor knows about, value-cases first."""
    names = []
    for arm in expansion.accessor.body.arms:
        if isinstance(arm.pattern, ir.CasePattern):
            names.append(arm.pattern.case_name)
    return names
