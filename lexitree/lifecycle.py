#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Deep copy and teardown of AST trees.

Both walk the tree with traverse(), so they visit exactly the children that
children_of() reports. A released node keeps its kind and position but loses
its payload; any further use raises NodeReleasedError.
"""

import logging
from typing import Dict, Optional

from lexitree.ast_nodes import FieldKind, Node
from lexitree.errors import OwnershipError, ResourceExhaustedError
from lexitree.walker import ensure_live, traverse

logger = logging.getLogger(__name__)


def clone_node(node: Optional[Node]) -> Optional[Node]:
    """Return an independent deep copy of node, built bottom-up through the
    node constructors. The copy is unowned and shares no lists or nodes with
    the original."""
    if node is None:
        return None
    clones: Dict[int, Node] = {}

    def rebuild(current: Node, parent: Optional[Node]) -> None:
        args = {}
        for field in current.FIELDS:
            value = getattr(current, field.name)
            if field.kind in (FieldKind.CHILD, FieldKind.OPTIONAL_CHILD):
                args[field.name] = None if value is None else clones.pop(id(value))
            elif field.kind == FieldKind.CHILD_LIST:
                args[field.name] = [
                    clones.pop(id(child)) for child in value if child is not None
                ]
            else:
                args[field.name] = value
        clones[id(current)] = type(current)(
            **args, line=current.line, column=current.column
        )

    try:
        traverse(node, exit=rebuild)
    except MemoryError as exc:
        raise ResourceExhaustedError(
            f"out of memory while cloning {node.kind.display_name}",
            node.line,
            node.column,
        ) from exc
    copy = clones.pop(id(node))
    logger.debug("cloned %s tree", node.kind.display_name)
    return copy


def release_node(node: Optional[Node]) -> int:
    """Release a whole tree, children before parents, and return the number
    of nodes released.

    Only a root (a node no other node owns) can be released, and only once:
    a second release, or a tree containing a released node, raises
    NodeReleasedError before anything is touched.
    """
    if node is None:
        return 0
    ensure_live(node)
    if node.owned:
        raise OwnershipError(
            f"{node.kind.display_name} is owned by another node; "
            "release the root of its tree",
            node.line,
            node.column,
        )

    order = []
    traverse(node, exit=lambda current, parent: order.append(current))

    for current in order:
        for field in current.FIELDS:
            setattr(current, field.name, None)
        current._released = True

    logger.debug("released %d nodes under %s", len(order), node.kind.display_name)
    return len(order)
