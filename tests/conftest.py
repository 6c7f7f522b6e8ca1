"""Shared pytest fixtures for rawenum tests."""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from rawenum.core import ir
from rawenum.core.parser import parse_dsl

TEST_FILE = Path("test.enum")


def parse_one(text: str) -> ir.TypeDecl:
    """Parse dedented source text holding exactly one declaration."""
    declarations = parse_dsl(textwrap.dedent(text).lstrip("\n"), TEST_FILE)
    assert len(declarations) == 1
    return declarations[0]


@pytest.fixture
def parse() -> Callable[[str], ir.TypeDecl]:
    """Return a helper that parses one declaration from dedented text."""
    return parse_one


@pytest.fixture
def string_enum() -> ir.TypeDecl:
    """{a, b, catch_all(String)} with catch_all marked as default."""
    return parse_one(
        """
        @raw_representable[String]
        enum Letter:
          a
          b
          @default_case
          catch_all(String)
        """
    )


@pytest.fixture
def int_enum() -> ir.TypeDecl:
    """{a=1, b=2, catch_all(Int) default}."""
    return parse_one(
        """
        @raw_representable[Int]
        enum Code:
          @raw_value(1)
          a
          @raw_value(2)
          b
          @default_case
          catch_all(Int)
        """
    )
