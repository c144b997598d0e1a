"""Tests for If-chain shape validators."""

import ast as python_ast

import pytest

from ifexpr.errors import ChainShapeError
from ifexpr.grammar import (
    KEYWORDS,
    Continuation,
    assert_continues,
    assert_expr_like,
    assert_invoked,
    assert_no_args,
    assert_no_keywords,
    continuation_for,
    ensure_single_arg,
)
from ifexpr.host import PythonAstHost


def setup(src: str):
    tree = python_ast.parse(src)
    host = PythonAstHost(tree)
    entry = next(n for n in python_ast.walk(tree) if isinstance(n, python_ast.Name) and n.id == "If")
    return tree, host, entry


def test_keyword_table():
    assert KEYWORDS["then"] is Continuation.THEN
    assert KEYWORDS["then_do"] is Continuation.THEN_DO
    assert KEYWORDS["else_"] is Continuation.ELSE
    assert KEYWORDS["else_do"] is Continuation.ELSE_DO
    assert KEYWORDS["else_if"] is Continuation.ELSE_IF
    assert KEYWORDS["end"] is Continuation.END
    assert KEYWORDS["end_"] is Continuation.END_
    assert len(KEYWORDS) == 7


def test_terminal_and_arity_flags():
    assert Continuation.END.is_terminal and Continuation.END_.is_terminal
    assert not Continuation.ELSE_IF.is_terminal
    assert Continuation.THEN.takes_single_arg
    assert Continuation.ELSE.takes_single_arg
    assert Continuation.ELSE_IF.takes_single_arg
    assert not Continuation.THEN_DO.takes_single_arg
    assert not Continuation.ELSE_DO.takes_single_arg


def test_assert_invoked_accepts_call():
    _, host, entry = setup("If(c)")
    assert_invoked(host, host.parent(entry), entry, "If")


def test_assert_invoked_rejects_bare_reference():
    _, host, entry = setup("x = If")
    with pytest.raises(ChainShapeError, match="Expected If to have been invoked as a function at L1"):
        assert_invoked(host, host.parent(entry), entry, "If")


def test_assert_invoked_rejects_passing_as_argument():
    _, host, entry = setup("f(If)")
    with pytest.raises(ChainShapeError, match="invoked as a function"):
        assert_invoked(host, host.parent(entry), entry, "If")


def test_single_arg():
    _, host, entry = setup("If(c)")
    call = host.parent(entry)
    arg = ensure_single_arg(host, call, "If")
    assert isinstance(arg, python_ast.Name) and arg.id == "c"


@pytest.mark.parametrize("src", ["If()", "If(a, b)"])
def test_single_arg_rejects_wrong_count(src):
    _, host, entry = setup(src)
    with pytest.raises(ChainShapeError, match="Expected If to have been invoked with one argument"):
        ensure_single_arg(host, host.parent(entry), "If")


def test_no_keywords():
    _, host, entry = setup("If(c, strict=True)")
    with pytest.raises(ChainShapeError, match="without keyword arguments"):
        assert_no_keywords(host, host.parent(entry), "If")


def test_no_args():
    _, host, entry = setup("If(c).end(1)")
    end_call = host.parent(host.parent(host.parent(entry)))
    with pytest.raises(ChainShapeError, match="Expected member end to have been invoked without arguments"):
        assert_no_args(host, end_call, "member end")


@pytest.mark.parametrize("src", ["If(x)", "If(1)", "If(a + b)", "If(f(x))", "If(a.b)", "If(lambda: 1)"])
def test_expr_like_accepts(src):
    _, host, entry = setup(src)
    call = host.parent(entry)
    assert_expr_like(host, call.args[0], call, "If")


def test_expr_like_rejects_starred():
    _, host, entry = setup("If(*conditions)")
    call = host.parent(entry)
    with pytest.raises(ChainShapeError, match="identifier, literal or expression"):
        assert_expr_like(host, call.args[0], call, "If")


def test_continues_requires_member():
    _, host, entry = setup("\nx = If(c)")
    call = host.parent(entry)
    with pytest.raises(ChainShapeError, match="Expected the If-chain to have been terminated with an end at L2C4"):
        assert_continues(host, host.parent(call), call, "If")


def test_continuation_for_unknown_member():
    _, host, entry = setup("If(c).otherwise(a)")
    member = host.parent(host.parent(entry))
    with pytest.raises(ChainShapeError, match="Unexpected member invocation on If chain: otherwise"):
        continuation_for(host, member, "If")


def test_continuation_for_known_member():
    _, host, entry = setup("If(c).else_if(d)")
    member = host.parent(host.parent(entry))
    assert continuation_for(host, member, "If") is Continuation.ELSE_IF
