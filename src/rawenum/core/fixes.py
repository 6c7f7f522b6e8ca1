"""
Host-side application of suggested fixes.

The expansion pipeline only describes fixes. Applying one rebuilds the path
from the root to each replaced node and shares every other subtree. Nodes
are located by identity, so a fix applies to the exact tree it was computed
from (or to a tree derived from it that still contains the old node).
"""

from __future__ import annotations

import logging
from typing import Any

from . import ir

logger = logging.getLogger(__name__)


class _Replacer:
    def __init__(self, old: ir.Node, new: ir.Node):
        self.old = old
        self.new = new
        self.found = False

    def visit(self, value: Any) -> Any:
        if isinstance(value, ir.Node):
            return self.visit_node(value)
        if isinstance(value, list):
            items = [self.visit(item) for item in value]
            if any(a is not b for a, b in zip(items, value)):
                return items
        return value

    def visit_node(self, node: ir.Node) -> ir.Node:
        if node is self.old:
            self.found = True
            return self.new

        updates: dict[str, Any] = {}
        for name in type(node).model_fields:
            value = getattr(node, name)
            replaced = self.visit(value)
            if replaced is not value:
                updates[name] = replaced

        if not updates:
            return node
        return node.model_copy(update=updates)


def replace_node(root: ir.TypeDecl, old: ir.Node, new: ir.Node) -> ir.TypeDecl:
    """
    Return ``root`` with ``old`` replaced by ``new``.

    Raises:
        ValueError: If ``old`` is not part of ``root``
    """
    replacer = _Replacer(old, new)
    result = replacer.visit_node(root)
    if not replacer.found:
        raise ValueError(f"{type(old).__name__} to replace is not part of '{root.name.text}'")
    if not isinstance(result, ir.TypeDecl):
        raise TypeError(f"Replacing the root must produce a TypeDecl, got {type(result).__name__}")
    return result


def apply_fix(root: ir.TypeDecl, fix: ir.FixIt) -> ir.TypeDecl:
    """Apply every change of ``fix`` to ``root``, in order."""
    for change in fix.changes:
        root = replace_node(root, change.old, change.new)
    logger.debug("Applied fix '%s' to %s", fix.message, root.name.text)
    return root


def first_fix(diagnostics: list[ir.Diagnostic]) -> ir.FixIt | None:
    """The first fix offered by any diagnostic, in diagnostic order."""
    for diagnostic in diagnostics:
        if diagnostic.fixes:
            return diagnostic.fixes[0]
    return None
