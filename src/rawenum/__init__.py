"""
rawenum - raw-value mapping for enums with a catch-all case.

Validates ``@raw_representable`` enum declarations and derives their
decode (raw value -> case) and encode (case -> raw value) operations, or
reports anchored diagnostics with suggested fixes.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core import ir
from .core.errors import (
    ConfigError,
    EvaluationError,
    ExpansionError,
    ParseError,
    RawEnumError,
)
from .core.expander import expand


def _get_version() -> str:
    try:
        return _metadata_version("rawenum")
    except PackageNotFoundError:
        return "0.1.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "expand",
    "RawEnumError",
    "ParseError",
    "ConfigError",
    "ExpansionError",
    "EvaluationError",
]
