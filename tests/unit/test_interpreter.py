"""Tests for the reference interpreter of derived declarations."""

import pytest

from rawenum.core import ir
from rawenum.core.errors import EvaluationError
from rawenum.core.expander import expand
from rawenum.core.interpreter import (
    EnumValue,
    case_names,
    coerce_raw_value,
    decode,
    encode,
)

INT = ir.TypeRef(name="Int")
STRING = ir.TypeRef(name="String")


class TestRoundTrip:
    def test_every_value_case(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum Color:
              red, green
              @raw_value("light blue")
              blue
              @default_case
              other(String)
            """
        )
        expansion = expand(decl)

        for name in ("red", "green", "blue"):
            assert decode(expansion, encode(expansion, EnumValue(name))) == EnumValue(name)

    def test_unknown_raw_values_survive(self, int_enum):
        expansion = expand(int_enum)

        for raw in (-3, 0, 3, 1000):
            value = decode(expansion, raw)
            assert value == EnumValue("catch_all", (raw,))
            assert encode(expansion, value) == raw

    def test_wildcard_arm_comes_after_values(self, parse):
        decl = parse(
            """
            @raw_representable[String]
            enum E:
              @default_case
              other(String)
              known
            """
        )
        expansion = expand(decl)

        assert decode(expansion, "known") == EnumValue("known")

    def test_catch_all_payload_shadowing_a_value(self, string_enum):
        # Encoding a catch-all that wraps a known value yields that value
        expansion = expand(string_enum)
        raw = encode(expansion, EnumValue("catch_all", ("a",)))

        assert raw == "a"
        assert decode(expansion, raw) == EnumValue("a")


class TestErrors:
    def test_wrong_raw_type(self, int_enum):
        with pytest.raises(EvaluationError, match="Expected an integer Int raw value"):
            decode(expand(int_enum), "1")

    def test_bool_is_not_an_integer(self, int_enum):
        with pytest.raises(EvaluationError):
            decode(expand(int_enum), True)

    def test_unknown_case(self, string_enum):
        with pytest.raises(EvaluationError, match="No match arm accepts"):
            encode(expand(string_enum), EnumValue("zzz"))

    def test_catch_all_without_payload(self, string_enum):
        with pytest.raises(EvaluationError, match="binds one payload value"):
            encode(expand(string_enum), EnumValue("catch_all"))


class TestHelpers:
    def test_coerce_string(self):
        assert coerce_raw_value(STRING, "42") == "42"

    def test_coerce_int(self):
        assert coerce_raw_value(INT, "-7") == -7

    def test_coerce_invalid_int(self):
        with pytest.raises(EvaluationError, match="not a valid Int raw value"):
            coerce_raw_value(INT, "seven")

    def test_case_names(self, string_enum):
        assert case_names(expand(string_enum)) == ["a", "b", "catch_all"]

    def test_enum_value_str(self):
        assert str(EnumValue("red")) == "red"
        assert str(EnumValue("other", ("x",))) == "other('x')"
