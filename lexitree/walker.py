#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Tree walking primitives. children_of() is the one definition of a node's
children; traverse() is the one walk, and every other tree algorithm
(query, print, serialize, clone, release) is written on top of it.
"""

from typing import Callable, List, Optional, Type, Union

from lexitree.ast_nodes import FieldKind, Node, NodeKind
from lexitree.errors import NodeReleasedError

Visitor = Callable[[Node, Optional[Node]], None]


def ensure_live(node: Node) -> None:
    """Raise NodeReleasedError if node has already been released."""
    if node.released:
        raise NodeReleasedError(
            f"{node.kind.display_name} node used after release",
            node.line,
            node.column,
        )


def children_of(node: Node) -> List[Node]:
    """Return the owned children of node in declared (source) order."""
    ensure_live(node)
    return _children(node)


def _children(node: Node) -> List[Node]:
    children = []
    for field in node.FIELDS:
        if field.kind in (FieldKind.CHILD, FieldKind.OPTIONAL_CHILD):
            child = getattr(node, field.name)
            if child is not None:
                children.append(child)
        elif field.kind == FieldKind.CHILD_LIST:
            children.extend(c for c in getattr(node, field.name) if c is not None)
    return children


def traverse(
    node: Optional[Node],
    enter: Optional[Visitor] = None,
    exit: Optional[Visitor] = None,
    parent: Optional[Node] = None,
) -> None:
    """Depth-first walk calling enter(node, parent) before and
    exit(node, parent) after the node's children.

    Uses an explicit stack, so tree depth is not bounded by the interpreter's
    recursion limit. A None node is a no-op.
    """
    if node is None:
        return
    # Each frame is (node, parent, iterator over its remaining children).
    stack = [(node, parent, None)]
    while stack:
        current, owner, pending = stack[-1]
        if pending is None:
            ensure_live(current)
            if enter is not None:
                enter(current, owner)
            pending = iter(_children(current))
            stack[-1] = (current, owner, pending)
        child = next(pending, None)
        if child is not None:
            stack.append((child, current, None))
            continue
        stack.pop()
        if exit is not None:
            exit(current, owner)


def find_nodes(root: Optional[Node], kind: Union[NodeKind, Type[Node]]) -> List[Node]:
    """Return every node of the given kind under root, in pre-order."""
    target = kind if isinstance(kind, NodeKind) else kind.kind
    results: List[Node] = []

    def collect(node: Node, parent: Optional[Node]) -> None:
        if node.kind == target:
            results.append(node)

    traverse(root, enter=collect)
    return results


query = find_nodes


def count_nodes(root: Optional[Node]) -> int:
    """Number of nodes reachable from root, root included."""
    count = 0

    def tally(node: Node, parent: Optional[Node]) -> None:
        nonlocal count
        count += 1

    traverse(root, enter=tally)
    return count
