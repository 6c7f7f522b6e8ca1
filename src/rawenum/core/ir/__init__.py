"""
Intermediate representation for rawenum.

- syntax: the declaration tree consumed by the pipeline
- expansion: derived declarations produced on success
- diagnostics: anchored problems with notes and suggested fixes
"""

from .diagnostics import (
    DIAGNOSTIC_DOMAIN,
    Diagnostic,
    FixIt,
    MessageID,
    Note,
    Replace,
    Severity,
)
from .expansion import (
    AccessorDecl,
    CaseConstruct,
    CasePattern,
    ConformanceDecl,
    Expansion,
    InitializerDecl,
    LiteralPattern,
    MatchArm,
    MatchExpr,
    NameRef,
    Pattern,
    ResultExpr,
    WildcardPattern,
)
from .syntax import (
    Argument,
    Attribute,
    CaseDecl,
    CaseElement,
    DeclKind,
    Identifier,
    IntegerLiteral,
    LiteralExpr,
    MemberBlock,
    Node,
    SourceLocation,
    Parameter,
    Placeholder,
    StringLiteral,
    TypeDecl,
    TypeRef,
    quote_string,
)

__all__ = [
    # Syntax
    "SourceLocation",
    "Node",
    "Identifier",
    "TypeRef",
    "StringLiteral",
    "IntegerLiteral",
    "Placeholder",
    "LiteralExpr",
    "Argument",
    "Attribute",
    "Parameter",
    "CaseElement",
    "CaseDecl",
    "MemberBlock",
    "DeclKind",
    "TypeDecl",
    "quote_string",
    # Expansion
    "NameRef",
    "CaseConstruct",
    "LiteralPattern",
    "CasePattern",
    "WildcardPattern",
    "Pattern",
    "ResultExpr",
    "MatchArm",
    "MatchExpr",
    "InitializerDecl",
    "AccessorDecl",
    "ConformanceDecl",
    "Expansion",
    # Diagnostics
    "DIAGNOSTIC_DOMAIN",
    "Severity",
    "MessageID",
    "Note",
    "Replace",
    "FixIt",
    "Diagnostic",
]
