"""If-chain walker — recursive descent over a chain's syntactic parents.

Starting at the entry call ``If(condition)``, the walker climbs parent by
parent.  Each step must be a member access naming a continuation, itself
immediately invoked:

    If(c).then(a).then_do(x, y).else_(b).else_do(z).end()
    If(c).then(a).else_if(d).then(b).end()

Branch expressions are gathered in a ``BranchSet``; at the terminator the
whole chain collapses into one conditional expression that replaces the
outermost call.  Chains found inside argument lists are expanded first so
that the outer chain only ever sees finished expressions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ifexpr.branches import Branch, BranchSet
from ifexpr.grammar import (
    Continuation,
    assert_continues,
    assert_expr_like,
    assert_invoked,
    assert_no_args,
    assert_no_keywords,
    continuation_for,
    ensure_single_arg,
)
from ifexpr.host import SyntaxHost
from ifexpr.location import format_location
from ifexpr.synth import make_conditional

logger = logging.getLogger(__name__)


@dataclass
class ChainResult:
    """Outcome of walking one chain.

    ``top`` is the call to replace (the innermost terminator when ``else_if``
    nests chains); ``expr`` is the conditional that replaces it.
    """
    top: Any
    expr: Any


class ChainWalker:
    """Walk and rewrite the chains of one entry symbol within one tree."""

    def __init__(self, host: SyntaxHost, entry_name: str, processed: set | None = None) -> None:
        self.host = host
        self.entry_name = entry_name
        self.processed: set = processed if processed is not None else set()

    # -- Entry ---------------------------------------------------------------

    def process_reference(self, node: Any, remaining: list) -> bool:
        """Expand the chain opened at *node*; return False if already done.

        *remaining* holds the entry references that come after *node*; any of
        them nested inside this chain's arguments are expanded first.
        """
        if node in self.processed:
            return False

        host = self.host
        call = host.parent(node)
        assert_invoked(host, call, node, self.entry_name)
        self.ensure_args_processed(call, remaining)
        assert_no_keywords(host, call, self.entry_name)
        condition = ensure_single_arg(host, call, self.entry_name)
        assert_expr_like(host, condition, call, self.entry_name)

        result = self.process_chain(call, condition, remaining)
        host.replace(result.top, result.expr)
        self.processed.add(node)
        logger.debug("expanded %s-chain at %s", self.entry_name, format_location(*host.location(call)))
        return True

    # -- Chain ---------------------------------------------------------------

    def process_chain(self, position: Any, condition: Any, remaining: list) -> ChainResult:
        """Walk continuations above *position* until a terminator.

        Nothing in the tree changes here except through nested chains; the
        caller performs the single replacement.
        """
        host = self.host
        branches = BranchSet()

        while True:
            member = host.parent(position)
            assert_continues(host, member, position, self.entry_name)
            continuation = continuation_for(host, member, self.entry_name)
            label = f"member {continuation.value}"
            call = host.parent(member)
            assert_invoked(host, call, member, label)

            if continuation.is_terminal:
                assert_no_args(host, call, label)
                assert_no_keywords(host, call, label)
                return ChainResult(call, make_conditional(host, branches, condition))

            self.ensure_args_processed(call, remaining)
            assert_no_keywords(host, call, label)

            if continuation is Continuation.ELSE_IF:
                arg = ensure_single_arg(host, call, label)
                assert_expr_like(host, arg, call, label)
                nested = self.process_chain(call, arg, remaining)
                branches.replace_alternate(nested.expr)
                return ChainResult(nested.top, make_conditional(host, branches, condition))

            branch = Branch.for_continuation(continuation)
            if continuation.takes_single_arg:
                arg = ensure_single_arg(host, call, label)
                assert_expr_like(host, arg, call, label)
                branches.push(branch, arg)
            else:
                branches.push_discarded(branch, host.arguments(call), host.undefined)

            position = call

    # -- Nested chains -------------------------------------------------------

    def ensure_args_processed(self, call: Any, remaining: list) -> None:
        """Expand every pending chain that sits inside an argument of *call*."""
        host = self.host
        for index in range(len(host.arguments(call))):
            for i, ref in enumerate(remaining):
                if ref in self.processed:
                    continue
                # an expansion may have swapped the argument slot itself
                arg = host.arguments(call)[index]
                if host.contains(arg, ref):
                    self.process_reference(ref, remaining[i + 1:])
