"""Tests for the branch accumulator."""

import pytest

from ifexpr.branches import Branch, BranchSet
from ifexpr.grammar import Continuation

UNDEFINED = "<undefined>"


def undefined():
    return UNDEFINED


def test_branch_for_continuation():
    assert Branch.for_continuation(Continuation.THEN) is Branch.CONSEQUENT
    assert Branch.for_continuation(Continuation.THEN_DO) is Branch.CONSEQUENT
    assert Branch.for_continuation(Continuation.ELSE) is Branch.ALTERNATE
    assert Branch.for_continuation(Continuation.ELSE_DO) is Branch.ALTERNATE
    with pytest.raises(ValueError):
        Branch.for_continuation(Continuation.END)


def test_push_keeps_call_order():
    branches = BranchSet()
    branches.push(Branch.CONSEQUENT, "a")
    branches.push(Branch.CONSEQUENT, "b")
    branches.push(Branch.ALTERNATE, "c")
    assert branches.consequent == ["a", "b"]
    assert branches.alternate == ["c"]


def test_discarded_keeps_previous_value_last():
    branches = BranchSet()
    branches.push(Branch.CONSEQUENT, "value")
    branches.push_discarded(Branch.CONSEQUENT, ["x", "y"], undefined)
    assert branches.consequent == ["x", "y", "value"]


def test_discarded_on_empty_branch_uses_undefined():
    branches = BranchSet()
    branches.push_discarded(Branch.ALTERNATE, ["x"], undefined)
    assert branches.alternate == ["x", UNDEFINED]


def test_discarded_without_arguments():
    branches = BranchSet()
    branches.push_discarded(Branch.CONSEQUENT, [], undefined)
    assert branches.consequent == [UNDEFINED]


def test_value_after_discarded_becomes_tail():
    branches = BranchSet()
    branches.push(Branch.CONSEQUENT, "a")
    branches.push_discarded(Branch.CONSEQUENT, ["x"], undefined)
    branches.push(Branch.CONSEQUENT, "b")
    assert branches.consequent == ["x", "a", "b"]


def test_replace_alternate_drops_previous_entries():
    branches = BranchSet()
    branches.push(Branch.ALTERNATE, "a")
    branches.push_discarded(Branch.ALTERNATE, ["x"], undefined)
    branches.replace_alternate("nested")
    assert branches.alternate == ["nested"]
