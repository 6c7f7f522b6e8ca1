"""Tests for raw-representable validation and its diagnostics."""

from rawenum.core import ir
from rawenum.core.case_model import build_case_records
from rawenum.core.fixes import apply_fix
from rawenum.core.manifest import ExpansionConfig
from rawenum.core.printer import print_declaration
from rawenum.core.validator import (
    check_declaration_shape,
    find_default_candidate,
    has_raw_payload,
    validate_cases,
)

STRING = ir.TypeRef(name="String")
INT = ir.TypeRef(name="Int")


def _validate(decl: ir.TypeDecl, raw_type: ir.TypeRef = STRING, config=None):
    return validate_cases(decl, build_case_records(decl), raw_type, config)


def _kinds(diagnostics: list[ir.Diagnostic]) -> list[str]:
    return [d.kind for d in diagnostics]


class TestValidModels:
    def test_string_enum(self, string_enum):
        model, problems = _validate(string_enum)

        assert problems == []
        assert model is not None
        assert model.type_name == "Letter"
        assert model.catch_all.name == "catch_all"
        assert [(c.name, c.literal.literal_text) for c in model.value_cases] == [
            ("a", '"a"'),
            ("b", '"b"'),
        ]

    def test_int_enum(self, int_enum):
        model, problems = _validate(int_enum, INT)

        assert problems == []
        assert [(c.name, c.literal.literal_text) for c in model.value_cases] == [
            ("a", "1"),
            ("b", "2"),
        ]

    def test_implicit_value_is_exact_name(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              camelCase, snake_case
              @default_case
              other(String)
            """
        )
        model, _ = _validate(decl)

        assert [c.literal.literal_text for c in model.value_cases] == [
            '"camelCase"',
            '"snake_case"',
        ]

    def test_catch_all_may_come_first(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              @default_case
              other(String)
              a
            """
        )
        model, problems = _validate(decl)

        assert problems == []
        assert [c.name for c in model.value_cases] == ["a"]


class TestShape:
    def test_struct_is_rejected(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            struct S:
              x: Int
            """
        )
        (diagnostic,) = check_declaration_shape(decl)

        assert diagnostic.kind == "not-an-enum"
        assert str(diagnostic.id) == "rawenum.not-an-enum"
        assert diagnostic.message == "@raw_representable can only be applied to enums"
        assert diagnostic.anchor is decl
        assert diagnostic.fixes == []

    def test_enum_passes(self, string_enum):
        assert check_declaration_shape(string_enum) == []


class TestMissingDefault:
    def test_reported_alone(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              a
              @raw_value(1)
              b
              @raw_value(1)
              c
            """
        )
        model, problems = _validate(decl, INT)

        assert model is None
        assert _kinds(problems) == ["missing-default"]
        assert problems[0].message == "No case in enum is marked with @default_case"

    def test_candidate_by_payload_gets_marker(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              a
              fallback(String)
            """
        )
        (diagnostic,) = _validate(decl)[1]
        fallback = decl.body.members[1]

        assert diagnostic.anchor is fallback.elements[0].name
        (fix,) = diagnostic.fixes
        assert fix.message == "Add default case"
        (change,) = fix.changes
        assert change.old is fallback
        assert [a.name.text for a in change.new.attributes] == ["default_case"]

    def test_candidate_by_configured_name(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              first(String)
              other(Int)
            """
        )
        config = ExpansionConfig(default_case_name="other")
        (diagnostic,) = _validate(decl, config=config)[1]

        assert diagnostic.anchor is decl.body.members[1].elements[0].name

    def test_without_candidate_appends_case(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum Code:
              @raw_value(1)
              a
            """
        )
        (diagnostic,) = _validate(decl, INT)[1]

        assert diagnostic.anchor is decl.name
        fixed = apply_fix(decl, diagnostic.fixes[0])
        assert print_declaration(fixed).endswith("  @default_case\n  unknown(Int)\n")

    def test_candidate_not_first_on_line_is_split(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              a, rest(String), b
            """
        )
        (diagnostic,) = _validate(decl)[1]
        fixed = apply_fix(decl, diagnostic.fixes[0])

        assert print_declaration(fixed) == (
            "@raw_representable[String]\n"
            "enum E:\n"
            "  a, b\n"
            "  @default_case\n"
            "  rest(String)\n"
        )


class TestDefaultCaseChecks:
    def test_extra_default_with_note(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              @default_case
              first(String)
              @default_case
              second(String)
            """
        )
        model, problems = _validate(decl)

        assert model is None
        (diagnostic,) = problems
        assert diagnostic.kind == "extra-default"
        assert diagnostic.message == "Multiple uses of @default_case"
        assert diagnostic.anchor is decl.body.members[1].elements[0].name
        (note,) = diagnostic.notes
        assert note.message == "@default_case previously used here"
        assert note.anchor is decl.body.members[0].elements[0]

    def test_wrong_associated_value(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              a
              @default_case
              other(Int, String)
            """
        )
        (diagnostic,) = _validate(decl)[1]
        element = decl.body.members[1].elements[0]

        assert diagnostic.kind == "wrong-associated-value"
        assert diagnostic.message == (
            "case 'other' must have exactly one associated value of type `String`"
        )
        assert diagnostic.anchor is element
        (fix,) = diagnostic.fixes
        assert fix.message == "Fix associated value"
        assert fix.changes[0].old is element
        assert [p.type.name for p in fix.changes[0].new.parameters] == ["String"]

    def test_missing_payload_is_wrong_associated_value(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              @default_case
              other
            """
        )
        assert _kinds(_validate(decl)[1]) == ["wrong-associated-value"]

    def test_default_and_raw(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              @default_case
              @raw_value("x")
              other(String)
            """
        )
        (diagnostic,) = _validate(decl)[1]

        assert diagnostic.kind == "default-and-raw"
        assert diagnostic.message == (
            "Cannot have both @default_case and @raw_value on an enum case"
        )
        fixed = apply_fix(decl, diagnostic.fixes[0])
        assert [a.name.text for a in fixed.body.members[0].attributes] == ["default_case"]


class TestValueCaseChecks:
    def test_missing_raw_value_for_int(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              a
              @default_case
              other(Int)
            """
        )
        (diagnostic,) = _validate(decl, INT)[1]

        assert diagnostic.kind == "missing-raw-value"
        assert diagnostic.message == "case 'a' must specify a raw value"
        assert diagnostic.anchor is decl.body.members[0].elements[0]
        (fix,) = diagnostic.fixes
        assert fix.message == "Add raw value"
        fixed = apply_fix(decl, fix)
        assert print_declaration(fixed).splitlines()[2:4] == [
            "  @raw_value(<#value#>)",
            "  a",
        ]

    def test_placeholder_label_from_config(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              a
              @default_case
              other(Int)
            """
        )
        config = ExpansionConfig(placeholder_label="code")
        (diagnostic,) = _validate(decl, INT, config)[1]
        fixed = apply_fix(decl, diagnostic.fixes[0])

        assert "@raw_value(<#code#>)" in print_declaration(fixed)

    def test_shared_line_scoping(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              @raw_value(1)
              a, b
              @default_case
              other(Int)
            """
        )
        (diagnostic,) = _validate(decl, INT)[1]

        assert diagnostic.kind == "missing-raw-value"
        assert diagnostic.message == "case 'b' must specify a raw value"

        fixed = apply_fix(decl, diagnostic.fixes[0])
        assert print_declaration(fixed).splitlines()[2:6] == [
            "  @raw_value(1)",
            "  a",
            "  @raw_value(<#value#>)",
            "  b",
        ]

    def test_malformed_raw_value(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              @raw_value("x", "y")
              a
              @raw_value()
              b
              @default_case
              other(String)
            """
        )
        problems = _validate(decl)[1]

        assert _kinds(problems) == ["malformed-raw-value", "malformed-raw-value"]
        assert problems[0].message == "@raw_value takes exactly one literal argument"
        assert problems[0].anchor is decl.body.members[0].attributes[0]
        assert problems[0].fixes == []

    def test_duplicate_explicit_values(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              @raw_value(1)
              a
              @raw_value(1)
              b
              @default_case
              other(Int)
            """
        )
        (diagnostic,) = _validate(decl, INT)[1]
        first = decl.body.members[0].attributes[0].arguments[0].value
        second = decl.body.members[1].attributes[0].arguments[0].value

        assert diagnostic.kind == "duplicate-raw-value"
        assert diagnostic.message == "Raw value 1 for case 'b' is not unique"
        assert diagnostic.anchor is second
        (note,) = diagnostic.notes
        assert note.message == "Raw value previously used here"
        assert note.anchor is first

    def test_explicit_collides_with_implicit(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              a
              @raw_value("a")
              b
              @default_case
              other(String)
            """
        )
        (diagnostic,) = _validate(decl)[1]

        assert diagnostic.message == "Raw value \"a\" for case 'b' is not unique"
        assert diagnostic.notes[0].anchor is decl.body.members[0].elements[0].name

    def test_duplicates_reported_once_per_later_case(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              @raw_value(7)
              a
              @raw_value(7)
              b
              @raw_value(7)
              c
              @default_case
              other(Int)
            """
        )
        problems = _validate(decl, INT)[1]
        first = decl.body.members[0].attributes[0].arguments[0].value

        assert [d.message for d in problems] == [
            "Raw value 7 for case 'b' is not unique",
            "Raw value 7 for case 'c' is not unique",
        ]
        assert all(d.notes[0].anchor is first for d in problems)

    def test_placeholders_must_be_filled_in(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              @raw_value(<#value#>)
              a
              @raw_value(<#value#>)
              b
              @default_case
              other(Int)
            """
        )
        model, problems = _validate(decl, INT)
        first = decl.body.members[0].attributes[0].arguments[0].value

        assert model is None
        assert _kinds(problems) == ["unfilled-raw-value", "unfilled-raw-value"]
        assert problems[0].message == (
            "Raw value for case 'a' is still the placeholder <#value#>"
        )
        assert problems[0].anchor is first
        assert problems[0].fixes == []

    def test_integer_literal_for_string_raw_type(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              @raw_value(1)
              a
              @default_case
              other(String)
            """
        )
        (diagnostic,) = _validate(decl)[1]
        literal = decl.body.members[0].attributes[0].arguments[0].value

        assert diagnostic.kind == "raw-value-type"
        assert diagnostic.message == "Raw value 1 for case 'a' is not a literal of type `String`"
        assert diagnostic.anchor is literal
        (fix,) = diagnostic.fixes
        assert fix.message == "Use a string literal"
        fixed = apply_fix(decl, fix)
        assert print_declaration(fixed).splitlines()[2] == '  @raw_value("1")'

    def test_string_literal_for_int_raw_type(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              @raw_value("x")
              a
              @raw_value(2)
              b
              @default_case
              other(Int)
            """
        )
        (diagnostic,) = _validate(decl, INT)[1]

        assert diagnostic.kind == "raw-value-type"
        assert diagnostic.message == "Raw value \"x\" for case 'a' is not a literal of type `Int`"
        assert diagnostic.anchor is decl.body.members[0].attributes[0].arguments[0].value
        assert diagnostic.fixes == []

    def test_repeated_raw_value(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              @raw_value(1)
              @raw_value(2)
              a
              @default_case
              other(Int)
            """
        )
        (diagnostic,) = _validate(decl, INT)[1]
        first, second = decl.body.members[0].attributes

        assert diagnostic.kind == "extra-raw-value"
        assert diagnostic.message == "Multiple uses of @raw_value"
        assert diagnostic.anchor is second
        (note,) = diagnostic.notes
        assert note.message == "@raw_value previously used here"
        assert note.anchor is first
        (fix,) = diagnostic.fixes
        assert fix.message == "Remove @raw_value"
        fixed = apply_fix(decl, fix)
        assert print_declaration(fixed).splitlines()[2:4] == ["  @raw_value(1)", "  a"]

    def test_repeated_raw_value_reported_with_other_problems(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              @raw_value(1)
              a
              @raw_value(1)
              @raw_value(3)
              @raw_value(4)
              b
              @default_case
              other(Int)
            """
        )
        problems = _validate(decl, INT)[1]

        assert _kinds(problems) == [
            "extra-raw-value",
            "extra-raw-value",
            "duplicate-raw-value",
        ]
        extras = decl.body.members[1].attributes[1:]
        assert all(d.anchor is extra for d, extra in zip(problems, extras))


class TestAccumulation:
    def test_all_problems_in_declaration_order(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              a
              @default_case
              first(String)
              @raw_value(2)
              b
              @default_case
              second(Int)
              @raw_value(2)
              c
            """
        )
        model, problems = _validate(decl, INT)

        assert model is None
        assert _kinds(problems) == [
            "missing-raw-value",
            "wrong-associated-value",
            "extra-default",
            "duplicate-raw-value",
        ]

    def test_literal_problems_accumulate(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              @raw_value(1)
              a
              @raw_value(<#value#>)
              b
              @raw_value("c")
              @raw_value("d")
              c
              @default_case
              other(String)
            """
        )
        model, problems = _validate(decl)

        assert model is None
        assert _kinds(problems) == [
            "raw-value-type",
            "unfilled-raw-value",
            "extra-raw-value",
        ]

    def test_input_tree_is_untouched(self, parse):
        decl = parse(
            """
            @raw_representable[Int]
            enum E:
              a
              @default_case
              other
            """
        )
        before = decl.model_dump()
        _validate(decl, INT)
        assert decl.model_dump() == before


class TestHelpers:
    def test_has_raw_payload(self):
        def element(*types: str) -> ir.CaseElement:
            params = [ir.Parameter(type=ir.TypeRef(name=t)) for t in types]
            return ir.CaseElement(name=ir.Identifier(text="x"), parameters=params)

        bare = ir.CaseElement(name=ir.Identifier(text="x"))

        assert has_raw_payload(element("String"), STRING)
        assert not has_raw_payload(bare, STRING)
        assert not has_raw_payload(element(), STRING)
        assert not has_raw_payload(element("Int"), STRING)
        assert not has_raw_payload(element("String", "String"), STRING)

    def test_find_default_candidate_prefers_name(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              a(String)
              unknown
            """
        )
        candidate = find_default_candidate(build_case_records(decl), STRING, "unknown")
        assert candidate is not None
        assert candidate.name == "unknown"

    def test_find_default_candidate_none(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              a, b
            """
        )
        assert find_default_candidate(build_case_records(decl), STRING, "unknown") is None
