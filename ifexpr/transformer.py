"""ifexpr transformer — expands If-chains in a Python source file."""

from __future__ import annotations

import ast
import logging

from ifexpr.config import get_config
from ifexpr.dispatcher import dispatch
from ifexpr.errors import BindingError, ParseError
from ifexpr.host import PythonAstHost

logger = logging.getLogger(__name__)

MACRO_SYMBOL = "If"


class _StripMacroImports(ast.NodeTransformer):
    """Drop ``from <macro module> import ...`` statements, keeping blocks non-empty."""

    def __init__(self, module: str) -> None:
        self.module = module

    def visit_ImportFrom(self, node: ast.ImportFrom):
        if node.level == 0 and node.module == self.module:
            return None
        return node

    def generic_visit(self, node: ast.AST) -> ast.AST:
        # body, orelse, finalbody: any statement list that loses its last statement
        filled = [
            name for name, value in ast.iter_fields(node)
            if isinstance(value, list) and value and isinstance(value[0], ast.stmt)
        ]
        super().generic_visit(node)
        if not isinstance(node, ast.Module):
            for name in filled:
                stmts = getattr(node, name)
                if not stmts:
                    stmts.append(ast.Pass())
        return node


_COMPREHENSIONS = (ast.ListComp, ast.SetComp, ast.DictComp, ast.GeneratorExp)


def _stored_names(nodes: list, macro_module: str) -> set[str]:
    """Names bound directly in a scope whose statements are *nodes*.

    Nested function, class, lambda and comprehension bodies are not entered.
    Imports of the macro module itself do not count as rebinding.
    """
    names: set[str] = set()
    declared: set[str] = set()
    stack = list(nodes)
    while stack:
        node = stack.pop()
        if isinstance(node, ast.Name) and isinstance(node.ctx, (ast.Store, ast.Del)):
            names.add(node.id)
        elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            names.add(node.name)
            continue
        elif isinstance(node, (ast.Lambda,) + _COMPREHENSIONS):
            continue
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module == macro_module:
            continue
        elif isinstance(node, (ast.Import, ast.ImportFrom)):
            names.update((alias.asname or alias.name).split(".")[0] for alias in node.names)
        elif isinstance(node, (ast.Global, ast.Nonlocal)):
            declared.update(node.names)
        elif isinstance(node, (ast.ExceptHandler, ast.MatchAs, ast.MatchStar)) and node.name:
            names.add(node.name)
        elif isinstance(node, ast.MatchMapping) and node.rest:
            names.add(node.rest)
        stack.extend(ast.iter_child_nodes(node))
    return names - declared


def _arg_names(args: ast.arguments) -> set[str]:
    params = args.posonlyargs + args.args + args.kwonlyargs
    params += [a for a in (args.vararg, args.kwarg) if a is not None]
    return {a.arg for a in params}


class _ReferenceCollector(ast.NodeVisitor):
    """Collect loads of *name* that resolve to the macro import.

    A function, lambda, class or comprehension that binds *name* itself
    shadows the macro for the code inside it.  Class scopes are not visible
    from the functions nested in them.
    """

    def __init__(self, name: str, macro_module: str) -> None:
        self.name = name
        self.macro_module = macro_module
        self.refs: list[ast.Name] = []
        self._scopes: list[tuple[bool, bool]] = [(False, False)]  # (shadowed, is_class)

    def _inherited(self) -> bool:
        for shadowed, is_class in reversed(self._scopes):
            if not is_class:
                return shadowed
        return False

    def _enter(self, bound: set[str], children: list, is_class: bool = False) -> None:
        self._scopes.append((self.name in bound or self._inherited(), is_class))
        for child in children:
            self.visit(child)
        self._scopes.pop()

    def visit_Name(self, node: ast.Name) -> None:
        if node.id == self.name and isinstance(node.ctx, ast.Load) and not self._scopes[-1][0]:
            self.refs.append(node)

    def visit_FunctionDef(self, node) -> None:
        # decorators, defaults and annotations run in the enclosing scope
        for child in node.decorator_list:
            self.visit(child)
        self.visit(node.args)
        if node.returns is not None:
            self.visit(node.returns)
        bound = _arg_names(node.args) | _stored_names(node.body, self.macro_module)
        self._enter(bound, node.body)

    visit_AsyncFunctionDef = visit_FunctionDef

    def visit_Lambda(self, node: ast.Lambda) -> None:
        self.visit(node.args)
        self._enter(_arg_names(node.args), [node.body])

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        for child in node.decorator_list + node.bases + node.keywords:
            self.visit(child)
        self._enter(_stored_names(node.body, self.macro_module), node.body, is_class=True)

    def _visit_comprehension(self, node, elts: list) -> None:
        first, *rest = node.generators
        # the outermost iterable is evaluated in the enclosing scope
        self.visit(first.iter)
        bound = _stored_names([gen.target for gen in node.generators], self.macro_module)
        inner = [first.target, *first.ifs]
        for gen in rest:
            inner += [gen.target, gen.iter, *gen.ifs]
        self._enter(bound, inner + elts)

    def visit_ListComp(self, node: ast.ListComp) -> None:
        self._visit_comprehension(node, [node.elt])

    visit_SetComp = visit_ListComp
    visit_GeneratorExp = visit_ListComp

    def visit_DictComp(self, node: ast.DictComp) -> None:
        self._visit_comprehension(node, [node.key, node.value])


class Transformer:
    """Expand every If-chain in *source* into conditional expressions."""

    def __init__(self, source: str, filename: str = "<unknown>", macro_module: str | None = None) -> None:
        self.source = source
        self.filename = filename
        self.macro_module = macro_module or get_config()["macro"]["module"]
        self.expanded: int = 0

    def transform(self) -> str:
        """Return the expanded source.

        Files that never import the macro come back untouched, which also
        makes a second pass over expanded output a no-op.
        """
        tree = self._parse()
        bindings = self._find_bindings(tree)
        if not bindings:
            return self.source

        host = PythonAstHost(tree)
        for name in bindings:
            refs = self._references(tree, name)
            logger.debug("%s: %d reference(s) to %s", self.filename, len(refs), name)
            self.expanded += dispatch(host, name, refs)

        tree = _StripMacroImports(self.macro_module).visit(tree)
        ast.fix_missing_locations(tree)
        return ast.unparse(tree) + "\n"

    # -- Parsing -------------------------------------------------------------

    def _parse(self) -> ast.Module:
        try:
            return ast.parse(self.source, filename=self.filename)
        except SyntaxError as e:
            # SyntaxError.offset is 1-based; diagnostics use 0-based columns
            raise ParseError(e.msg, e.lineno or 0, max((e.offset or 1) - 1, 0)) from e

    # -- Binding discovery ---------------------------------------------------

    def _find_bindings(self, tree: ast.Module) -> list[str]:
        """Return the local names bound to the macro symbol, in order."""
        names: list[str] = []
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name == self.macro_module:
                        raise BindingError(
                            f"Invalid import of {self.macro_module}: "
                            f"use 'from {self.macro_module} import {MACRO_SYMBOL}'",
                            node.lineno,
                            node.col_offset,
                        )
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module == self.macro_module:
                invalid = [alias.name for alias in node.names if alias.name != MACRO_SYMBOL]
                if invalid:
                    raise BindingError(
                        f"Invalid import from {self.macro_module}: {', '.join(invalid)}",
                        node.lineno,
                        node.col_offset,
                    )
                for alias in node.names:
                    local = alias.asname or alias.name
                    if local not in names:
                        names.append(local)
        return names

    def _references(self, tree: ast.Module, name: str) -> list[ast.Name]:
        collector = _ReferenceCollector(name, self.macro_module)
        collector.visit(tree)
        refs = collector.refs
        refs.sort(key=lambda n: (n.lineno, n.col_offset))
        return refs


def transform_source(source: str, filename: str = "<unknown>", macro_module: str | None = None) -> str:
    """Expand the If-chains of *source* and return the new source."""
    return Transformer(source, filename, macro_module).transform()
