#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Structural (JSON) serialization of an AST.

to_dict() builds one ordered mapping per node: "type" first, "line" and
"column" when positive, then the node's fields in declared order. to_json()
renders that mapping with a fixed layout so output can be compared byte for
byte.
"""

import json
import math
from enum import Enum
from typing import Any, Dict, List, Optional

from lexitree.ast_nodes import FieldKind, Node
from lexitree.printer import format_number
from lexitree.walker import traverse


def _scalar(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def to_dict(node: Optional[Node]) -> Optional[Dict[str, Any]]:
    """Return the JSON-like mapping for node (None for None)."""
    if node is None:
        return None
    built: Dict[int, Dict[str, Any]] = {}

    def assemble(current: Node, parent: Optional[Node]) -> None:
        data: Dict[str, Any] = {"type": current.kind.display_name}
        if current.line > 0:
            data["line"] = current.line
        if current.column > 0:
            data["column"] = current.column
        for field in current.FIELDS:
            if not field.serialized:
                continue
            value = getattr(current, field.name)
            if field.kind == FieldKind.SCALAR:
                data[field.json_name] = _scalar(value)
            elif field.kind == FieldKind.OPTIONAL_SCALAR:
                if value is not None:
                    data[field.json_name] = _scalar(value)
            elif field.kind == FieldKind.CHILD:
                data[field.json_name] = None if value is None else built.pop(id(value))
            elif field.kind == FieldKind.OPTIONAL_CHILD:
                if value is not None:
                    data[field.json_name] = built.pop(id(value))
            else:
                data[field.json_name] = [
                    built.pop(id(child)) for child in value if child is not None
                ]
        built[id(current)] = data

    traverse(node, exit=assemble)
    return built.pop(id(node))


class JsonSerializer:
    """Renders to_dict() output: two-space indent, one field or array
    element per line, commas between elements."""

    def __init__(self, indent_unit: str = "  "):
        self.indent_unit = indent_unit

    def _pad(self, level: int) -> str:
        return self.indent_unit * level

    def render(self, value: Any, level: int = 0) -> str:
        if isinstance(value, dict):
            return self._render_object(value, level)
        if isinstance(value, list):
            return self._render_array(value, level)
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            # nan and inf have no JSON spelling
            return format_number(value) if math.isfinite(value) else "null"
        return json.dumps(str(value), ensure_ascii=False)

    def _render_object(self, data: Dict[str, Any], level: int) -> str:
        fields = [
            f"{self._pad(level + 1)}{json.dumps(key)}: {self.render(value, level + 1)}"
            for key, value in data.items()
        ]
        return "{\n" + ",\n".join(fields) + "\n" + self._pad(level) + "}"

    def _render_array(self, items: List[Any], level: int) -> str:
        elements = [
            self._pad(level + 1) + self.render(item, level + 1) for item in items
        ]
        return "[\n" + ",\n".join(elements) + "\n" + self._pad(level) + "]"

    def serialize(self, node: Optional[Node], level: int = 0) -> str:
        return self.render(to_dict(node), level)


def to_json(node: Optional[Node]) -> str:
    """Serialize node as JSON text; 'null' for None."""
    return JsonSerializer().serialize(node)
