#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

import sys
import unittest
from unittest import mock

from sample_trees import build_demo_program, build_every_kind

from lexitree.ast_nodes import (
    BinaryExpr,
    ForStmt,
    FunctionDecl,
    Identifier,
    Literal,
    NodeKind,
    ReturnStmt,
    UnaryExpr,
    VariableDecl,
)
from lexitree.errors import NodeReleasedError
from lexitree.walker import (
    children_of,
    count_nodes,
    ensure_live,
    find_nodes,
    query,
    traverse,
)


class TestChildrenOf(unittest.TestCase):
    def test_declared_order(self):
        left, right = Identifier("a"), Identifier("b")
        self.assertEqual(children_of(BinaryExpr("+", left, right)), [left, right])

    def test_absent_optional_children_skipped(self):
        self.assertEqual(children_of(ReturnStmt()), [])
        body = ReturnStmt()
        loop = ForStmt(None, None, None, body)
        self.assertEqual(children_of(loop), [body])

    def test_leaves_have_no_children(self):
        self.assertEqual(children_of(Identifier("x")), [])
        self.assertEqual(children_of(Literal.null()), [])

    def test_function_children(self):
        program = build_demo_program()
        func = program.body[1]
        kinds = [c.kind for c in children_of(func)]
        self.assertEqual(
            kinds,
            [
                NodeKind.IDENTIFIER,
                NodeKind.PARAMETER,
                NodeKind.PARAMETER,
                NodeKind.BLOCK_STMT,
            ],
        )


class TestTraverse(unittest.TestCase):
    def test_none_is_noop(self):
        calls = []
        traverse(None, enter=lambda n, p: calls.append(n))
        self.assertEqual(calls, [])

    def test_enter_exit_order(self):
        events = []
        expr = BinaryExpr("+", Identifier("a"), UnaryExpr("-", Identifier("b")))
        traverse(
            expr,
            enter=lambda n, p: events.append(("enter", n.kind.display_name)),
            exit=lambda n, p: events.append(("exit", n.kind.display_name)),
        )
        self.assertEqual(
            events,
            [
                ("enter", "BinaryExpression"),
                ("enter", "Identifier"),
                ("exit", "Identifier"),
                ("enter", "UnaryExpression"),
                ("enter", "Identifier"),
                ("exit", "Identifier"),
                ("exit", "UnaryExpression"),
                ("exit", "BinaryExpression"),
            ],
        )

    def test_parent_passed_explicitly(self):
        program = build_demo_program()
        parents = {}
        traverse(program, enter=lambda n, p: parents.setdefault(id(n), p))
        self.assertIsNone(parents[id(program)])
        func = program.body[1]
        self.assertIs(parents[id(func)], program)
        self.assertIs(parents[id(func.id)], func)

    def test_explicit_root_parent(self):
        seen = []
        root = Identifier("x")
        marker = ReturnStmt()
        traverse(root, enter=lambda n, p: seen.append(p), parent=marker)
        self.assertEqual(seen, [marker])

    def test_visits_every_node_once(self):
        program = build_every_kind()
        visited = []
        traverse(program, enter=lambda n, p: visited.append(id(n)))
        self.assertEqual(len(visited), len(set(visited)))
        self.assertEqual(
            {n.kind for n in _collect(program)},
            set(NodeKind),
        )

    def test_enter_and_exit_counts_match(self):
        program = build_every_kind()
        entered, exited = [], []
        traverse(
            program,
            enter=lambda n, p: entered.append(n),
            exit=lambda n, p: exited.append(n),
        )
        self.assertEqual(len(entered), len(exited))
        self.assertIs(exited[-1], program)

    def test_each_node_checked_once(self):
        program = build_every_kind()
        total = count_nodes(program)
        with mock.patch("lexitree.walker.ensure_live", wraps=ensure_live) as check:
            traverse(program)
        self.assertEqual(check.call_count, total)

    def test_released_node_never_entered(self):
        leaf = Identifier("a")
        ret = ReturnStmt(leaf)
        leaf._released = True
        entered = []
        with self.assertRaises(NodeReleasedError):
            traverse(ret, enter=lambda n, p: entered.append(n))
        self.assertEqual(entered, [ret])

    def test_deep_tree_beyond_recursion_limit(self):
        depth = sys.getrecursionlimit() + 500
        node = Identifier("leaf")
        for _ in range(depth):
            node = UnaryExpr("-", node)
        self.assertEqual(count_nodes(node), depth + 1)


def _collect(root):
    nodes = []
    traverse(root, enter=lambda n, p: nodes.append(n))
    return nodes


class TestQuery(unittest.TestCase):
    def test_identifiers_in_source_order(self):
        program = build_demo_program()
        names = [n.name for n in find_nodes(program, NodeKind.IDENTIFIER)]
        self.assertEqual(names, ["x", "add", "a", "b", "a", "b"])

    def test_query_by_class(self):
        program = build_demo_program()
        functions = query(program, FunctionDecl)
        self.assertEqual([f.id.name for f in functions], ["add"])

    def test_declarations(self):
        program = build_demo_program()
        decls = find_nodes(program, VariableDecl)
        self.assertEqual(
            [d.id.name for decl in decls for d in decl.declarations], ["x"]
        )

    def test_no_match(self):
        self.assertEqual(find_nodes(build_demo_program(), NodeKind.TRY_STMT), [])

    def test_none_root(self):
        self.assertEqual(find_nodes(None, NodeKind.IDENTIFIER), [])

    def test_root_included(self):
        ident = Identifier("solo")
        self.assertEqual(find_nodes(ident, NodeKind.IDENTIFIER), [ident])

    def test_count_nodes(self):
        self.assertEqual(count_nodes(build_demo_program()), 16)
        self.assertEqual(count_nodes(None), 0)


if __name__ == "__main__":
    unittest.main()
