"""Shape checks for If-chains.

Each validator either returns quietly or raises ``ChainShapeError`` pointing
at the offending node.  None of them mutate the tree.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from ifexpr.errors import ChainShapeError
from ifexpr.host import NodeKind, SyntaxHost


class Continuation(Enum):
    THEN = "then"
    THEN_DO = "then_do"
    ELSE = "else_"
    ELSE_DO = "else_do"
    ELSE_IF = "else_if"
    END = "end"
    END_ = "end_"

    @property
    def is_terminal(self) -> bool:
        return self in (Continuation.END, Continuation.END_)

    @property
    def takes_single_arg(self) -> bool:
        return self in (Continuation.THEN, Continuation.ELSE, Continuation.ELSE_IF)


KEYWORDS: dict[str, Continuation] = {c.value: c for c in Continuation}

_EXPR_LIKE = (NodeKind.IDENTIFIER, NodeKind.LITERAL, NodeKind.EXPRESSION,
              NodeKind.CALL, NodeKind.MEMBER)


def _fail(host: SyntaxHost, message: str, node: Any) -> ChainShapeError:
    line, column = host.location(node)
    return ChainShapeError(message, line, column)


def assert_invoked(host: SyntaxHost, node: Any, current: Any, label: str) -> None:
    """*node* must be a call whose callee is *current*."""
    if node is None or host.kind(node) is not NodeKind.CALL or host.callee(node) is not current:
        raise _fail(
            host,
            f"Expected {label} to have been invoked as a function",
            node if node is not None else current,
        )


def assert_no_keywords(host: SyntaxHost, call: Any, label: str) -> None:
    if host.keywords(call):
        raise _fail(host, f"Expected {label} to have been invoked without keyword arguments", call)


def ensure_single_arg(host: SyntaxHost, call: Any, label: str) -> Any:
    """Return the only positional argument of *call*."""
    args = host.arguments(call)
    if len(args) != 1:
        raise _fail(host, f"Expected {label} to have been invoked with one argument", call)
    return args[0]


def assert_no_args(host: SyntaxHost, call: Any, label: str) -> None:
    if host.arguments(call):
        raise _fail(host, f"Expected {label} to have been invoked without arguments", call)


def assert_expr_like(host: SyntaxHost, arg: Any, call: Any, label: str) -> None:
    if host.kind(arg) not in _EXPR_LIKE:
        raise _fail(
            host,
            f"Expected argument passed to {label} to have been an identifier, literal or expression",
            call,
        )


def assert_continues(host: SyntaxHost, parent: Any, position: Any, entry_name: str) -> None:
    """The chain must keep going through a member access until it meets an end."""
    if parent is None or host.kind(parent) is not NodeKind.MEMBER:
        # a call's location is where its whole chain starts
        raise _fail(host, f"Expected the {entry_name}-chain to have been terminated with an end", position)


def continuation_for(host: SyntaxHost, member: Any, entry_name: str) -> Continuation:
    """Map a member access to its continuation tag."""
    name = host.member_name(member)
    try:
        return KEYWORDS[name]
    except KeyError:
        raise _fail(host, f"Unexpected member invocation on {entry_name} chain: {name}", member) from None
