"""Reduce accumulated branches into one conditional expression."""

from __future__ import annotations

from typing import Any, Sequence

from ifexpr.branches import BranchSet
from ifexpr.host import SyntaxHost


def synthesize_branch(host: SyntaxHost, exprs: Sequence[Any]) -> Any:
    """Collapse a branch: nothing -> None, one -> itself, many -> a sequence."""
    if not exprs:
        return host.undefined()
    if len(exprs) == 1:
        return exprs[0]
    return host.sequence(exprs)


def make_conditional(host: SyntaxHost, branches: BranchSet, condition: Any) -> Any:
    """Build ``consequent if condition else alternate``."""
    return host.conditional(
        condition,
        synthesize_branch(host, branches.consequent),
        synthesize_branch(host, branches.alternate),
    )
