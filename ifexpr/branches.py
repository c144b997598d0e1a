"""Per-chain accumulation of consequent and alternate expressions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable

from ifexpr.grammar import Continuation


class Branch(Enum):
    CONSEQUENT = "consequent"
    ALTERNATE = "alternate"

    @classmethod
    def for_continuation(cls, continuation: Continuation) -> Branch:
        if continuation in (Continuation.THEN, Continuation.THEN_DO):
            return cls.CONSEQUENT
        if continuation in (Continuation.ELSE, Continuation.ELSE_DO):
            return cls.ALTERNATE
        raise ValueError(f"{continuation.value} does not feed a branch")


@dataclass
class BranchSet:
    """Ordered branch expressions for one chain, in call order."""
    consequent: list = field(default_factory=list)
    alternate: list = field(default_factory=list)

    def get(self, branch: Branch) -> list:
        return self.consequent if branch is Branch.CONSEQUENT else self.alternate

    def push(self, branch: Branch, expr: Any) -> None:
        """Append a result-bearing expression (``then`` / ``else_``)."""
        self.get(branch).append(expr)

    def push_discarded(self, branch: Branch, exprs: Iterable[Any], undefined: Callable[[], Any]) -> None:
        """Append side-effect-only expressions (``then_do`` / ``else_do``).

        The current tail is popped and re-appended after *exprs* so it stays
        the branch value.  An empty branch gets ``undefined()`` as its tail.
        """
        items = self.get(branch)
        tail = items.pop() if items else undefined()
        items.extend(exprs)
        items.append(tail)

    def replace_alternate(self, expr: Any) -> None:
        """Make *expr* the whole alternate branch (``else_if``)."""
        self.alternate = [expr]
