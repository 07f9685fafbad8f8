#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Indented, human-readable dump of an AST.
"""

from typing import List, Optional

from lexitree.ast_nodes import Literal, LiteralType, Node, NodeKind
from lexitree.walker import traverse

_OPERATOR_KINDS = (
    NodeKind.BINARY_EXPR,
    NodeKind.UNARY_EXPR,
    NodeKind.ASSIGNMENT_EXPR,
)


def format_number(value: float) -> str:
    """Shortest decimal form, as printf's %g renders it."""
    return format(value, "g")


def literal_text(node: Literal) -> str:
    """Render a literal's value per its type: quoted, %g, true/false or null."""
    if node.literal_type == LiteralType.STRING:
        return f'"{node.value}"'
    if node.literal_type == LiteralType.NUMBER:
        return format_number(node.value)
    if node.literal_type == LiteralType.BOOLEAN:
        return "true" if node.value else "false"
    return "null"


def inline_value(node: Node) -> str:
    """Short discriminating suffix shown after the kind name, or ''."""
    if node.kind == NodeKind.IDENTIFIER:
        return f' "{node.name}"'
    if node.kind == NodeKind.LITERAL:
        return f" = {literal_text(node)}"
    if node.kind in _OPERATOR_KINDS:
        return f" ({node.operator})"
    return ""


class AstPrinter:
    """Builds the dump one line per node, two spaces of indent per depth."""

    def __init__(self, indent_unit: str = "  "):
        self.indent_unit = indent_unit
        self.output: List[str] = []
        self.indent_level = 0

    def indent(self):
        self.indent_level += 1

    def dedent(self):
        self.indent_level -= 1

    def emit(self, line: str):
        self.output.append(self.indent_unit * self.indent_level + line + "\n")

    def _enter(self, node: Node, parent: Optional[Node]) -> None:
        self.emit(node.kind.display_name + inline_value(node))
        self.indent()

    def _exit(self, node: Node, parent: Optional[Node]) -> None:
        self.dedent()

    def format(self, node: Optional[Node], depth: int = 0) -> str:
        self.output = []
        self.indent_level = depth
        traverse(node, enter=self._enter, exit=self._exit)
        return "".join(self.output)


def format_tree(node: Optional[Node], depth: int = 0) -> str:
    """Return the indented dump of node; empty string for None."""
    return AstPrinter().format(node, depth)
