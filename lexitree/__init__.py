#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
lexitree – scanner and AST toolkit for a small C-like language.
"""

import logging

from lexitree.ast_nodes import (
    NODE_CLASSES,
    ArrayExpr,
    AssignmentExpr,
    BinaryExpr,
    BlockStmt,
    BreakStmt,
    CallExpr,
    CatchClause,
    ConditionalExpr,
    ContinueStmt,
    ExpressionStmt,
    ForStmt,
    FunctionDecl,
    Identifier,
    IfStmt,
    Literal,
    LiteralType,
    MemberExpr,
    Node,
    NodeKind,
    ObjectExpr,
    Parameter,
    Program,
    Property,
    ReturnStmt,
    SourceType,
    SwitchCase,
    SwitchStmt,
    ThrowStmt,
    TryStmt,
    UnaryExpr,
    VariableDecl,
    VariableDeclarator,
    VariableKind,
    WhileStmt,
)
from lexitree.config import DEFAULT_CONFIG, ScannerConfig
from lexitree.errors import (
    ConfigError,
    LexitreeError,
    NodeReleasedError,
    OwnershipError,
    ResourceExhaustedError,
)
from lexitree.lifecycle import clone_node, release_node
from lexitree.printer import format_tree
from lexitree.scanner import Scanner, Token, TokenKind, TokenStream, scan
from lexitree.serializer import to_dict, to_json
from lexitree.walker import children_of, count_nodes, find_nodes, query, traverse

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
