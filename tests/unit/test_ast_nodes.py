#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

import unittest

from sample_trees import build_demo_program

from lexitree.ast_nodes import (
    NODE_CLASSES,
    BinaryExpr,
    BlockStmt,
    CallExpr,
    FieldKind,
    Identifier,
    Literal,
    LiteralType,
    MemberExpr,
    NodeKind,
    Program,
    ReturnStmt,
    SourceType,
    VariableDecl,
    VariableKind,
)
from lexitree.errors import OwnershipError


class TestNodeModel(unittest.TestCase):
    def test_every_kind_has_a_class(self):
        self.assertEqual(set(NODE_CLASSES), set(NodeKind))
        self.assertEqual(len(NODE_CLASSES), 29)
        for kind, cls in NODE_CLASSES.items():
            with self.subTest(kind=kind):
                self.assertIs(cls.kind, kind)

    def test_fields_match_slots(self):
        for cls in NODE_CLASSES.values():
            with self.subTest(cls=cls.__name__):
                self.assertEqual(
                    tuple(f.name for f in cls.FIELDS), tuple(cls.__slots__)
                )

    def test_display_names(self):
        self.assertEqual(NodeKind.BINARY_EXPR.display_name, "BinaryExpression")
        self.assertEqual(NodeKind.VARIABLE_DECL.display_name, "VariableDeclaration")
        self.assertEqual(NodeKind.SWITCH_CASE.display_name, "SwitchCase")

    def test_header(self):
        ident = Identifier("x", 3, 7)
        self.assertEqual(ident.kind, NodeKind.IDENTIFIER)
        self.assertEqual((ident.line, ident.column), (3, 7))
        self.assertFalse(ident.released)
        self.assertFalse(ident.owned)

    def test_default_position(self):
        node = ReturnStmt()
        self.assertEqual((node.line, node.column), (0, 0))
        self.assertIsNone(node.argument)

    def test_literal_constructors(self):
        cases = [
            (Literal.string("hi", '"hi"'), LiteralType.STRING, "hi", '"hi"'),
            (Literal.number(42, "42"), LiteralType.NUMBER, 42.0, "42"),
            (Literal.boolean(1), LiteralType.BOOLEAN, True, None),
            (Literal.null("null"), LiteralType.NULL, None, "null"),
        ]
        for node, literal_type, value, raw in cases:
            with self.subTest(literal_type=literal_type):
                self.assertEqual(node.kind, NodeKind.LITERAL)
                self.assertEqual(node.literal_type, literal_type)
                self.assertEqual(node.value, value)
                self.assertEqual(node.raw, raw)
        self.assertIsInstance(Literal.number(42).value, float)

    def test_literal_value_follows_type(self):
        cases = [
            (Literal(LiteralType.NUMBER, "42", "42"), 42.0),
            (Literal(LiteralType.NUMBER, 10**20), 1e20),
            (Literal(LiteralType.STRING, 7), "7"),
            (Literal(LiteralType.BOOLEAN, 0), False),
            (Literal(LiteralType.NULL, "anything"), None),
        ]
        for node, value in cases:
            with self.subTest(literal_type=node.literal_type):
                self.assertEqual(node.value, value)
                self.assertIs(type(node.value), type(value))

    def test_literal_type_by_name(self):
        node = Literal("number", 42.0)
        self.assertIs(node.literal_type, LiteralType.NUMBER)
        self.assertEqual(repr(node), "Literal(number, 42.0)")
        with self.assertRaises(ValueError):
            Literal("decimal", 1)

    def test_constructor_adopts_children(self):
        left, right = Identifier("a"), Identifier("b")
        expr = BinaryExpr("+", left, right, 1, 3)
        self.assertIs(expr.left, left)
        self.assertIs(expr.right, right)
        self.assertTrue(left.owned)
        self.assertFalse(expr.owned)

    def test_shared_child_rejected(self):
        shared = Identifier("a", 2, 4)
        BinaryExpr("+", shared, Identifier("b"))
        with self.assertRaises(OwnershipError) as cm:
            BinaryExpr("-", shared, Identifier("c"))
        self.assertEqual(
            str(cm.exception), "2:4: error: Identifier is already owned by another node"
        )

    def test_shared_child_in_list_rejected(self):
        stmt = ReturnStmt()
        with self.assertRaises(OwnershipError):
            BlockStmt([stmt, stmt])
        # the failed block did not keep its claim on stmt
        self.assertFalse(stmt.owned)
        BlockStmt([stmt])

    def test_failed_constructor_releases_earlier_children(self):
        taken = Identifier("b")
        BinaryExpr("+", Identifier("x"), taken)
        fresh = Identifier("a")
        with self.assertRaises(OwnershipError):
            BinaryExpr("+", fresh, taken)
        self.assertFalse(fresh.owned)
        self.assertTrue(taken.owned)
        expr = BinaryExpr("*", fresh, Identifier("c"))
        self.assertIs(expr.left, fresh)

    def test_failed_list_adoption_releases_everything(self):
        callee = Identifier("f")
        first, taken = Identifier("a"), Identifier("b")
        ReturnStmt(taken)
        with self.assertRaises(OwnershipError):
            CallExpr(callee, [first, taken])
        self.assertFalse(callee.owned)
        self.assertFalse(first.owned)
        call = CallExpr(callee, [first])
        self.assertEqual(call.arguments, [first])

    def test_lists_are_copied(self):
        body = [ReturnStmt()]
        block = BlockStmt(body)
        body.append(ReturnStmt())
        self.assertEqual(len(block.body), 1)

    def test_enum_payloads(self):
        decl = VariableDecl([], "const")
        self.assertIs(decl.var_kind, VariableKind.CONST)
        self.assertIs(Program([], "module").source_type, SourceType.MODULE)
        self.assertIs(Program().source_type, SourceType.SCRIPT)

    def test_member_expr(self):
        node = MemberExpr(Identifier("a"), Identifier("b"))
        self.assertFalse(node.computed)
        fields = {f.name: f.kind for f in MemberExpr.FIELDS}
        self.assertEqual(fields["object"], FieldKind.CHILD)
        self.assertEqual(fields["computed"], FieldKind.SCALAR)

    def test_structural_equality(self):
        self.assertEqual(build_demo_program(), build_demo_program())
        self.assertNotEqual(Identifier("a", 1, 1), Identifier("a", 1, 2))
        self.assertNotEqual(Identifier("a"), Identifier("b"))
        self.assertNotEqual(Identifier("a"), Literal.string("a"))

    def test_repr(self):
        self.assertEqual(repr(Identifier("x")), "Identifier('x')")
        self.assertEqual(repr(Literal.number(1)), "Literal(number, 1.0)")
        self.assertEqual(
            repr(BinaryExpr("+", Identifier("a"), Identifier("b"))),
            "BinaryExpr(operator='+', left=Identifier('a'), right=Identifier('b'))",
        )


if __name__ == "__main__":
    unittest.main()
