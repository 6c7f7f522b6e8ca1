"""Core rawenum functionality: declaration IR, parser, validator, synthesizer, fixes."""

from . import ir
from .case_model import CaseModel, CaseRecord, CaseRole, build_case_records
from .errors import (
    ConfigError,
    ErrorContext,
    EvaluationError,
    ExpansionError,
    ParseError,
    RawEnumError,
)
from .expander import ExpansionResult, expand, expand_all
from .fixes import apply_fix
from .manifest import ExpansionConfig, RawEnumConfig, find_config, load_config
from .parser import parse_dsl, parse_files
from .printer import print_declaration, print_expansion
from .synthesizer import synthesize
from .validator import check_declaration_shape, validate_cases

__all__ = [
    "ir",
    "RawEnumError",
    "ParseError",
    "ConfigError",
    "ExpansionError",
    "EvaluationError",
    "ErrorContext",
    "CaseRole",
    "CaseRecord",
    "CaseModel",
    "build_case_records",
    "check_declaration_shape",
    "validate_cases",
    "synthesize",
    "expand",
    "expand_all",
    "ExpansionResult",
    "apply_fix",
    "ExpansionConfig",
    "RawEnumConfig",
    "load_config",
    "find_config",
    "parse_dsl",
    "parse_files",
    "print_declaration",
    "print_expansion",
]
