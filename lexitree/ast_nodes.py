#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Abstract Syntax Tree (AST) node definitions.
Every node stores its source location (line, column) and declares its payload
once in FIELDS; the tree algorithms derive a node's children from that schema.
"""

from enum import Enum, IntEnum, auto
from typing import Any, Iterable, List, Optional, Tuple

from lexitree.errors import OwnershipError


class NodeKind(IntEnum):
    """Discriminator of the node variants."""

    PROGRAM = auto()
    IDENTIFIER = auto()
    LITERAL = auto()
    BINARY_EXPR = auto()
    UNARY_EXPR = auto()
    ASSIGNMENT_EXPR = auto()
    CALL_EXPR = auto()
    MEMBER_EXPR = auto()
    ARRAY_EXPR = auto()
    OBJECT_EXPR = auto()
    PROPERTY = auto()
    CONDITIONAL_EXPR = auto()
    EXPRESSION_STMT = auto()
    VARIABLE_DECL = auto()
    VARIABLE_DECLARATOR = auto()
    FUNCTION_DECL = auto()
    PARAMETER = auto()
    BLOCK_STMT = auto()
    RETURN_STMT = auto()
    IF_STMT = auto()
    WHILE_STMT = auto()
    FOR_STMT = auto()
    BREAK_STMT = auto()
    CONTINUE_STMT = auto()
    THROW_STMT = auto()
    TRY_STMT = auto()
    CATCH_CLAUSE = auto()
    SWITCH_STMT = auto()
    SWITCH_CASE = auto()

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    NodeKind.PROGRAM: "Program",
    NodeKind.IDENTIFIER: "Identifier",
    NodeKind.LITERAL: "Literal",
    NodeKind.BINARY_EXPR: "BinaryExpression",
    NodeKind.UNARY_EXPR: "UnaryExpression",
    NodeKind.ASSIGNMENT_EXPR: "AssignmentExpression",
    NodeKind.CALL_EXPR: "CallExpression",
    NodeKind.MEMBER_EXPR: "MemberExpression",
    NodeKind.ARRAY_EXPR: "ArrayExpression",
    NodeKind.OBJECT_EXPR: "ObjectExpression",
    NodeKind.PROPERTY: "Property",
    NodeKind.CONDITIONAL_EXPR: "ConditionalExpression",
    NodeKind.EXPRESSION_STMT: "ExpressionStatement",
    NodeKind.VARIABLE_DECL: "VariableDeclaration",
    NodeKind.VARIABLE_DECLARATOR: "VariableDeclarator",
    NodeKind.FUNCTION_DECL: "FunctionDeclaration",
    NodeKind.PARAMETER: "Parameter",
    NodeKind.BLOCK_STMT: "BlockStatement",
    NodeKind.RETURN_STMT: "ReturnStatement",
    NodeKind.IF_STMT: "IfStatement",
    NodeKind.WHILE_STMT: "WhileStatement",
    NodeKind.FOR_STMT: "ForStatement",
    NodeKind.BREAK_STMT: "BreakStatement",
    NodeKind.CONTINUE_STMT: "ContinueStatement",
    NodeKind.THROW_STMT: "ThrowStatement",
    NodeKind.TRY_STMT: "TryStatement",
    NodeKind.CATCH_CLAUSE: "CatchClause",
    NodeKind.SWITCH_STMT: "SwitchStatement",
    NodeKind.SWITCH_CASE: "SwitchCase",
}


class LiteralType(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


class VariableKind(Enum):
    VAR = "var"
    LET = "let"
    CONST = "const"


class SourceType(Enum):
    SCRIPT = "script"
    MODULE = "module"


class FieldKind(IntEnum):
    """How a payload field relates to the node that declares it."""

    SCALAR = auto()  # text, number, flag or enum; always present
    OPTIONAL_SCALAR = auto()  # omitted from output when None
    CHILD = auto()  # exactly one owned node
    OPTIONAL_CHILD = auto()  # zero or one owned node
    CHILD_LIST = auto()  # ordered list of owned nodes


class Field:
    """One entry of a node's payload schema."""

    __slots__ = ("name", "kind", "json_name", "serialized")

    def __init__(
        self,
        name: str,
        kind: FieldKind,
        json_name: Optional[str] = None,
        serialized: bool = True,
    ):
        self.name = name
        self.kind = kind
        self.json_name = json_name or name
        self.serialized = serialized  # False: implied by other fields in output

    @property
    def is_child(self) -> bool:
        return self.kind in (
            FieldKind.CHILD,
            FieldKind.OPTIONAL_CHILD,
            FieldKind.CHILD_LIST,
        )

    def __repr__(self):
        return f"Field({self.name!r}, {self.kind.name})"


def _scalar(
    name: str, json_name: Optional[str] = None, serialized: bool = True
) -> Field:
    return Field(name, FieldKind.SCALAR, json_name, serialized)


def _optional_scalar(name: str, json_name: Optional[str] = None) -> Field:
    return Field(name, FieldKind.OPTIONAL_SCALAR, json_name)


def _child(name: str, json_name: Optional[str] = None) -> Field:
    return Field(name, FieldKind.CHILD, json_name)


def _optional_child(name: str, json_name: Optional[str] = None) -> Field:
    return Field(name, FieldKind.OPTIONAL_CHILD, json_name)


def _child_list(name: str, json_name: Optional[str] = None) -> Field:
    return Field(name, FieldKind.CHILD_LIST, json_name)


class Node:
    """Base class for all AST nodes."""

    __slots__ = ("line", "column", "_owned", "_released")

    kind: NodeKind
    FIELDS: Tuple[Field, ...] = ()

    def __init__(self, line: int = 0, column: int = 0):
        self.line = line
        self.column = column
        self._owned = False
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    @property
    def owned(self) -> bool:
        """True once the node has been attached to a parent node."""
        return self._owned

    def _adopt(self, child: Optional["Node"]) -> Optional["Node"]:
        """Take ownership of child; a node may only ever have one owner."""
        if child is None:
            return None
        if child._owned:
            self._reject(child)
        child._owned = True
        return child

    def _adopt_all(self, children: Optional[Iterable["Node"]]) -> List["Node"]:
        """Adopt a whole list, or none of it if any entry is already taken."""
        items = list(children or ())
        seen = set()
        for child in items:
            if child is None:
                continue
            if child._owned or id(child) in seen:
                self._reject(child)
            seen.add(id(child))
        for child in items:
            if child is not None:
                child._owned = True
        return items

    def _reject(self, child: "Node") -> None:
        # A failed constructor must not leave earlier children marked owned.
        for field in self.FIELDS:
            if not field.is_child:
                continue
            value = getattr(self, field.name, None)
            if field.kind == FieldKind.CHILD_LIST:
                for adopted in value or ():
                    if adopted is not None:
                        adopted._owned = False
            elif value is not None:
                value._owned = False
        raise OwnershipError(
            f"{child.kind.display_name} is already owned by another node",
            child.line,
            child.column,
        )

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        if (self.line, self.column) != (other.line, other.column):
            return False
        return all(
            getattr(self, f.name) == getattr(other, f.name) for f in self.FIELDS
        )

    __hash__ = None

    def __repr__(self):
        args = ", ".join(f"{f.name}={getattr(self, f.name)!r}" for f in self.FIELDS)
        return f"{self.__class__.__name__}({args})"


# --------------------------------------------------------------------------
# Expressions
# --------------------------------------------------------------------------


class Identifier(Node):
    """Name reference."""

    __slots__ = ("name",)
    kind = NodeKind.IDENTIFIER
    FIELDS = (_scalar("name"),)

    def __init__(self, name: str, line: int = 0, column: int = 0):
        super().__init__(line, column)
        self.name = str(name)

    def __repr__(self):
        return f"Identifier({self.name!r})"


_LITERAL_COERCE = {
    LiteralType.STRING: str,
    LiteralType.NUMBER: float,
    LiteralType.BOOLEAN: bool,
    LiteralType.NULL: lambda value: None,
}


class Literal(Node):
    """String, number, boolean or null literal; raw keeps the source spelling."""

    __slots__ = ("literal_type", "value", "raw")
    kind = NodeKind.LITERAL
    FIELDS = (
        _scalar("literal_type", serialized=False),
        _scalar("value"),
        _optional_scalar("raw"),
    )

    def __init__(
        self,
        literal_type: LiteralType,
        value: Any,
        raw: Optional[str] = None,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.literal_type = LiteralType(literal_type)
        self.value = _LITERAL_COERCE[self.literal_type](value)
        self.raw = None if raw is None else str(raw)

    @classmethod
    def string(
        cls, value: str, raw: Optional[str] = None, line: int = 0, column: int = 0
    ) -> "Literal":
        return cls(LiteralType.STRING, str(value), raw, line, column)

    @classmethod
    def number(
        cls, value: float, raw: Optional[str] = None, line: int = 0, column: int = 0
    ) -> "Literal":
        return cls(LiteralType.NUMBER, float(value), raw, line, column)

    @classmethod
    def boolean(
        cls, value: bool, raw: Optional[str] = None, line: int = 0, column: int = 0
    ) -> "Literal":
        return cls(LiteralType.BOOLEAN, bool(value), raw, line, column)

    @classmethod
    def null(cls, raw: Optional[str] = None, line: int = 0, column: int = 0) -> "Literal":
        return cls(LiteralType.NULL, None, raw, line, column)

    def __repr__(self):
        return f"Literal({self.literal_type.value}, {self.value!r})"


class BinaryExpr(Node):
    """Binary operation: left op right."""

    __slots__ = ("operator", "left", "right")
    kind = NodeKind.BINARY_EXPR
    FIELDS = (_scalar("operator"), _child("left"), _child("right"))

    def __init__(
        self, operator: str, left: Node, right: Node, line: int = 0, column: int = 0
    ):
        super().__init__(line, column)
        self.operator = str(operator)
        self.left = self._adopt(left)
        self.right = self._adopt(right)


class UnaryExpr(Node):
    """Unary operation: op argument."""

    __slots__ = ("operator", "argument")
    kind = NodeKind.UNARY_EXPR
    FIELDS = (_scalar("operator"), _child("argument"))

    def __init__(self, operator: str, argument: Node, line: int = 0, column: int = 0):
        super().__init__(line, column)
        self.operator = str(operator)
        self.argument = self._adopt(argument)


class AssignmentExpr(Node):
    """Assignment: left op right, where op is '=' or a compound operator."""

    __slots__ = ("operator", "left", "right")
    kind = NodeKind.ASSIGNMENT_EXPR
    FIELDS = (_scalar("operator"), _child("left"), _child("right"))

    def __init__(
        self, operator: str, left: Node, right: Node, line: int = 0, column: int = 0
    ):
        super().__init__(line, column)
        self.operator = str(operator)
        self.left = self._adopt(left)
        self.right = self._adopt(right)


class CallExpr(Node):
    """Call: callee(arguments)."""

    __slots__ = ("callee", "arguments")
    kind = NodeKind.CALL_EXPR
    FIELDS = (_child("callee"), _child_list("arguments"))

    def __init__(
        self,
        callee: Node,
        arguments: Optional[List[Node]] = None,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.callee = self._adopt(callee)
        self.arguments = self._adopt_all(arguments)


class MemberExpr(Node):
    """Member access: object.property, or object[property] when computed."""

    __slots__ = ("object", "property", "computed")
    kind = NodeKind.MEMBER_EXPR
    FIELDS = (_child("object"), _child("property"), _scalar("computed"))

    def __init__(
        self,
        object: Node,
        property: Node,
        computed: bool = False,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.object = self._adopt(object)
        self.property = self._adopt(property)
        self.computed = bool(computed)


class ArrayExpr(Node):
    """Array literal: [elements]."""

    __slots__ = ("elements",)
    kind = NodeKind.ARRAY_EXPR
    FIELDS = (_child_list("elements"),)

    def __init__(
        self, elements: Optional[List[Node]] = None, line: int = 0, column: int = 0
    ):
        super().__init__(line, column)
        self.elements = self._adopt_all(elements)


class Property(Node):
    """key: value entry of an object literal."""

    __slots__ = ("key", "value")
    kind = NodeKind.PROPERTY
    FIELDS = (_child("key"), _child("value"))

    def __init__(self, key: Node, value: Node, line: int = 0, column: int = 0):
        super().__init__(line, column)
        self.key = self._adopt(key)
        self.value = self._adopt(value)


class ObjectExpr(Node):
    """Object literal: {properties}."""

    __slots__ = ("properties",)
    kind = NodeKind.OBJECT_EXPR
    FIELDS = (_child_list("properties"),)

    def __init__(
        self,
        properties: Optional[List[Property]] = None,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.properties = self._adopt_all(properties)


class ConditionalExpr(Node):
    """Ternary: test ? consequent : alternate."""

    __slots__ = ("test", "consequent", "alternate")
    kind = NodeKind.CONDITIONAL_EXPR
    FIELDS = (_child("test"), _child("consequent"), _child("alternate"))

    def __init__(
        self,
        test: Node,
        consequent: Node,
        alternate: Node,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.test = self._adopt(test)
        self.consequent = self._adopt(consequent)
        self.alternate = self._adopt(alternate)


# --------------------------------------------------------------------------
# Statements and declarations
# --------------------------------------------------------------------------


class ExpressionStmt(Node):
    """Expression evaluated for its effect."""

    __slots__ = ("expression",)
    kind = NodeKind.EXPRESSION_STMT
    FIELDS = (_child("expression"),)

    def __init__(self, expression: Node, line: int = 0, column: int = 0):
        super().__init__(line, column)
        self.expression = self._adopt(expression)


class VariableDeclarator(Node):
    """Single binding of a declaration: id [= init]."""

    __slots__ = ("id", "init")
    kind = NodeKind.VARIABLE_DECLARATOR
    FIELDS = (_child("id"), _optional_child("init"))

    def __init__(
        self,
        id: Identifier,
        init: Optional[Node] = None,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.id = self._adopt(id)
        self.init = self._adopt(init)


class VariableDecl(Node):
    """var/let/const declaration with one or more declarators."""

    __slots__ = ("var_kind", "declarations")
    kind = NodeKind.VARIABLE_DECL
    FIELDS = (_scalar("var_kind", "kind"), _child_list("declarations"))

    def __init__(
        self,
        declarations: Optional[List[VariableDeclarator]] = None,
        var_kind: VariableKind = VariableKind.LET,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.var_kind = VariableKind(var_kind)
        self.declarations = self._adopt_all(declarations)


class Parameter(Node):
    """Function parameter with optional type annotation and default."""

    __slots__ = ("name", "param_type", "default_value")
    kind = NodeKind.PARAMETER
    FIELDS = (
        _child("name"),
        _optional_scalar("param_type", "paramType"),
        _optional_child("default_value", "defaultValue"),
    )

    def __init__(
        self,
        name: Identifier,
        param_type: Optional[str] = None,
        default_value: Optional[Node] = None,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.name = self._adopt(name)
        self.param_type = None if param_type is None else str(param_type)
        self.default_value = self._adopt(default_value)


class BlockStmt(Node):
    """Braced statement list."""

    __slots__ = ("body",)
    kind = NodeKind.BLOCK_STMT
    FIELDS = (_child_list("body"),)

    def __init__(self, body: Optional[List[Node]] = None, line: int = 0, column: int = 0):
        super().__init__(line, column)
        self.body = self._adopt_all(body)


class FunctionDecl(Node):
    """Function definition."""

    __slots__ = ("id", "params", "body", "return_type")
    kind = NodeKind.FUNCTION_DECL
    FIELDS = (
        _child("id"),
        _child_list("params"),
        _child("body"),
        _optional_scalar("return_type", "returnType"),
    )

    def __init__(
        self,
        id: Identifier,
        params: Optional[List[Parameter]],
        body: BlockStmt,
        return_type: Optional[str] = None,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.id = self._adopt(id)
        self.params = self._adopt_all(params)
        self.body = self._adopt(body)
        self.return_type = None if return_type is None else str(return_type)


class ReturnStmt(Node):
    """Return statement."""

    __slots__ = ("argument",)
    kind = NodeKind.RETURN_STMT
    FIELDS = (_optional_child("argument"),)

    def __init__(self, argument: Optional[Node] = None, line: int = 0, column: int = 0):
        super().__init__(line, column)
        self.argument = self._adopt(argument)


class IfStmt(Node):
    """If statement."""

    __slots__ = ("test", "consequent", "alternate")
    kind = NodeKind.IF_STMT
    FIELDS = (_child("test"), _child("consequent"), _optional_child("alternate"))

    def __init__(
        self,
        test: Node,
        consequent: Node,
        alternate: Optional[Node] = None,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.test = self._adopt(test)
        self.consequent = self._adopt(consequent)
        self.alternate = self._adopt(alternate)


class WhileStmt(Node):
    """While loop."""

    __slots__ = ("test", "body")
    kind = NodeKind.WHILE_STMT
    FIELDS = (_child("test"), _child("body"))

    def __init__(self, test: Node, body: Node, line: int = 0, column: int = 0):
        super().__init__(line, column)
        self.test = self._adopt(test)
        self.body = self._adopt(body)


class ForStmt(Node):
    """C-style for loop; init may be a declaration or an expression."""

    __slots__ = ("init", "test", "update", "body")
    kind = NodeKind.FOR_STMT
    FIELDS = (
        _optional_child("init"),
        _optional_child("test"),
        _optional_child("update"),
        _child("body"),
    )

    def __init__(
        self,
        init: Optional[Node],
        test: Optional[Node],
        update: Optional[Node],
        body: Node,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.init = self._adopt(init)
        self.test = self._adopt(test)
        self.update = self._adopt(update)
        self.body = self._adopt(body)


class BreakStmt(Node):
    """Break statement."""

    __slots__ = ("label",)
    kind = NodeKind.BREAK_STMT
    FIELDS = (_optional_child("label"),)

    def __init__(
        self, label: Optional[Identifier] = None, line: int = 0, column: int = 0
    ):
        super().__init__(line, column)
        self.label = self._adopt(label)


class ContinueStmt(Node):
    """Continue statement."""

    __slots__ = ("label",)
    kind = NodeKind.CONTINUE_STMT
    FIELDS = (_optional_child("label"),)

    def __init__(
        self, label: Optional[Identifier] = None, line: int = 0, column: int = 0
    ):
        super().__init__(line, column)
        self.label = self._adopt(label)


class ThrowStmt(Node):
    __slots__ = ("argument",)
    kind = NodeKind.THROW_STMT
    FIELDS = (_child("argument"),)

    def __init__(self, argument: Node, line: int = 0, column: int = 0):
        super().__init__(line, column)
        self.argument = self._adopt(argument)


class CatchClause(Node):
    __slots__ = ("param", "body")
    kind = NodeKind.CATCH_CLAUSE
    FIELDS = (_optional_child("param"), _child("body"))

    def __init__(
        self,
        param: Optional[Identifier],
        body: BlockStmt,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.param = self._adopt(param)
        self.body = self._adopt(body)


class TryStmt(Node):
    """try block with an optional handler and finalizer."""

    __slots__ = ("block", "handler", "finalizer")
    kind = NodeKind.TRY_STMT
    FIELDS = (
        _child("block"),
        _optional_child("handler"),
        _optional_child("finalizer"),
    )

    def __init__(
        self,
        block: BlockStmt,
        handler: Optional[CatchClause] = None,
        finalizer: Optional[BlockStmt] = None,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.block = self._adopt(block)
        self.handler = self._adopt(handler)
        self.finalizer = self._adopt(finalizer)


class SwitchCase(Node):
    """case test: consequent...; a missing test is the default case."""

    __slots__ = ("test", "consequent")
    kind = NodeKind.SWITCH_CASE
    FIELDS = (_optional_child("test"), _child_list("consequent"))

    def __init__(
        self,
        test: Optional[Node],
        consequent: Optional[List[Node]] = None,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.test = self._adopt(test)
        self.consequent = self._adopt_all(consequent)


class SwitchStmt(Node):
    __slots__ = ("discriminant", "cases")
    kind = NodeKind.SWITCH_STMT
    FIELDS = (_child("discriminant"), _child_list("cases"))

    def __init__(
        self,
        discriminant: Node,
        cases: Optional[List[SwitchCase]] = None,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.discriminant = self._adopt(discriminant)
        self.cases = self._adopt_all(cases)


class Program(Node):
    """Root node of a program."""

    __slots__ = ("source_type", "body")
    kind = NodeKind.PROGRAM
    FIELDS = (_scalar("source_type", "sourceType"), _child_list("body"))

    def __init__(
        self,
        body: Optional[List[Node]] = None,
        source_type: SourceType = SourceType.SCRIPT,
        line: int = 0,
        column: int = 0,
    ):
        super().__init__(line, column)
        self.source_type = SourceType(source_type)
        self.body = self._adopt_all(body)


NODE_CLASSES = {
    cls.kind: cls
    for cls in (
        Program,
        Identifier,
        Literal,
        BinaryExpr,
        UnaryExpr,
        AssignmentExpr,
        CallExpr,
        MemberExpr,
        ArrayExpr,
        ObjectExpr,
        Property,
        ConditionalExpr,
        ExpressionStmt,
        VariableDecl,
        VariableDeclarator,
        FunctionDecl,
        Parameter,
        BlockStmt,
        ReturnStmt,
        IfStmt,
        WhileStmt,
        ForStmt,
        BreakStmt,
        ContinueStmt,
        ThrowStmt,
        TryStmt,
        CatchClause,
        SwitchStmt,
        SwitchCase,
    )
}
