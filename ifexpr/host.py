"""Host syntax-tree interface used by the If-chain engine.

The chain walker never touches ``ast`` directly.  It asks a ``SyntaxHost``
for node kinds, parents, call parts and locations, and hands it freshly
built nodes to splice into the tree.  ``PythonAstHost`` backs the interface
with the standard-library ``ast`` module.
"""

from __future__ import annotations

import ast
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any, Sequence


class NodeKind(Enum):
    CALL = auto()
    MEMBER = auto()
    IDENTIFIER = auto()
    LITERAL = auto()
    EXPRESSION = auto()
    OTHER = auto()


class SyntaxHost(ABC):
    """Operations the chain engine needs from a host syntax tree."""

    # -- Inspection ---------------------------------------------------------

    @abstractmethod
    def kind(self, node: Any) -> NodeKind:
        """Classify *node* by its syntactic kind."""

    @abstractmethod
    def parent(self, node: Any) -> Any | None:
        """Return the nearest syntactic parent of *node*, or None at the root."""

    @abstractmethod
    def callee(self, call: Any) -> Any:
        """Return the expression being invoked by *call*."""

    @abstractmethod
    def arguments(self, call: Any) -> list:
        """Return the positional arguments of *call* as they are now."""

    @abstractmethod
    def keywords(self, call: Any) -> list:
        """Return the keyword arguments of *call*."""

    @abstractmethod
    def member_name(self, member: Any) -> str:
        """Return the property name of a member access."""

    @abstractmethod
    def location(self, node: Any) -> tuple[int, int]:
        """Return ``(line, column)`` of the start of *node*."""

    @abstractmethod
    def contains(self, ancestor: Any, node: Any) -> bool:
        """Return True if *node* is *ancestor* or lies beneath it."""

    # -- Mutation -----------------------------------------------------------

    @abstractmethod
    def replace(self, node: Any, new: Any) -> None:
        """Replace *node* in place with *new*."""

    # -- Construction -------------------------------------------------------

    @abstractmethod
    def undefined(self) -> Any:
        """Build the value of a branch that produced nothing."""

    @abstractmethod
    def sequence(self, exprs: Sequence[Any]) -> Any:
        """Build an expression evaluating *exprs* left to right, valued as the last."""

    @abstractmethod
    def conditional(self, test: Any, consequent: Any, alternate: Any) -> Any:
        """Build ``consequent if test else alternate``."""


class PythonAstHost(SyntaxHost):
    """``SyntaxHost`` over a tree produced by ``ast.parse``.

    Parent links are indexed once up front and kept current across
    ``replace`` calls.
    """

    def __init__(self, tree: ast.AST) -> None:
        self.tree = tree
        self._parents: dict[ast.AST, ast.AST] = {}
        self._index(tree)

    def _index(self, node: ast.AST) -> None:
        """Record parent links for every node beneath *node*."""
        stack = [node]
        while stack:
            current = stack.pop()
            for child in ast.iter_child_nodes(current):
                self._parents[child] = current
                stack.append(child)

    # -- Inspection ---------------------------------------------------------

    def kind(self, node: Any) -> NodeKind:
        if isinstance(node, ast.Call):
            return NodeKind.CALL
        if isinstance(node, ast.Attribute):
            return NodeKind.MEMBER
        if isinstance(node, ast.Name):
            return NodeKind.IDENTIFIER
        if isinstance(node, ast.Constant):
            return NodeKind.LITERAL
        # *args only means something inside an argument list or display
        if isinstance(node, ast.Starred):
            return NodeKind.OTHER
        if isinstance(node, ast.expr):
            return NodeKind.EXPRESSION
        return NodeKind.OTHER

    def parent(self, node: Any) -> Any | None:
        return self._parents.get(node)

    def callee(self, call: ast.Call) -> ast.expr:
        return call.func

    def arguments(self, call: ast.Call) -> list:
        return list(call.args)

    def keywords(self, call: ast.Call) -> list:
        return list(call.keywords)

    def member_name(self, member: ast.Attribute) -> str:
        return member.attr

    def location(self, node: Any) -> tuple[int, int]:
        return getattr(node, "lineno", 0), getattr(node, "col_offset", 0)

    def contains(self, ancestor: Any, node: Any) -> bool:
        current = node
        while current is not None:
            if current is ancestor:
                return True
            current = self._parents.get(current)
        return False

    # -- Mutation -----------------------------------------------------------

    def replace(self, node: Any, new: Any) -> None:
        parent = self._parents.get(node)
        if parent is None or not self._swap_child(parent, node, new):
            raise ValueError(f"{type(node).__name__} node is not attached to the tree")
        ast.copy_location(new, node)
        self._parents[new] = parent
        self._index(new)

    @staticmethod
    def _swap_child(parent: ast.AST, old: ast.AST, new: ast.AST) -> bool:
        """Point the field or list slot of *parent* holding *old* at *new*."""
        for name, value in ast.iter_fields(parent):
            if value is old:
                setattr(parent, name, new)
                return True
            if isinstance(value, list):
                for i, item in enumerate(value):
                    if item is old:
                        value[i] = new
                        return True
        return False

    # -- Construction -------------------------------------------------------

    def undefined(self) -> ast.expr:
        return ast.Constant(value=None)

    def sequence(self, exprs: Sequence[Any]) -> ast.expr:
        # (e1, ..., en)[-1]: a tuple display evaluates left to right
        return ast.Subscript(
            value=ast.Tuple(elts=list(exprs), ctx=ast.Load()),
            slice=ast.UnaryOp(op=ast.USub(), operand=ast.Constant(value=1)),
            ctx=ast.Load(),
        )

    def conditional(self, test: Any, consequent: Any, alternate: Any) -> ast.expr:
        return ast.IfExp(test=test, body=consequent, orelse=alternate)
