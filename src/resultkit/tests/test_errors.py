"""Tests for Error, CompoundError and AggregateError."""

from __future__ import annotations

import dataclasses

import pytest

from resultkit.errors import COMPOUND_MESSAGE, AggregateError, CompoundError, Error


def test_error_defaults() -> None:
    error = Error("level not found")
    assert error.message == "level not found"
    assert error.extra is None


def test_error_is_immutable() -> None:
    error = Error("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        error.message = "y"  # type: ignore[misc]


def test_error_value_equality_and_hash() -> None:
    assert Error("x", {"field": "id"}) == Error("x", {"field": "id"})
    assert Error("x") != Error("y")
    # extra is not hashed, so unhashable payloads are fine
    assert hash(Error("x", {"field": "id"})) == hash(Error("x"))


def test_from_exception() -> None:
    exc = ValueError("bad answer")
    assert Error.from_exception(exc) == Error("bad answer", exc)
    assert Error.from_exception(exc, include_exception=False) == Error("bad answer")


def test_from_exception_respects_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    from resultkit.config import clear_settings_cache

    monkeypatch.setenv("RESULTKIT_INCLUDE_EXCEPTION", "false")
    clear_settings_cache()
    assert Error.from_exception(ValueError("v")).extra is None


class TestCompoundError:
    def test_fields(self) -> None:
        a, b = Error("a"), Error("b")
        compound = CompoundError(a, b)

        assert compound.main is a
        assert compound.other is b
        assert compound.message == COMPOUND_MESSAGE
        assert compound.extra == {"main": a, "other": b}
        assert isinstance(compound, Error)

    def test_compose_builds_new_node(self) -> None:
        a, b, c = Error("a"), Error("b"), Error("c")
        first = CompoundError(a, b)
        second = first.compose(c)

        assert second.main is first
        assert second.other is c
        assert first.other is b

    def test_leaf_compose(self) -> None:
        a, b = Error("a"), Error("b")
        assert a.compose(b) == CompoundError(a, b)

    def test_aggregate_preorder(self) -> None:
        e1, e2, e3, e4 = (Error(f"e{i}") for i in range(1, 5))
        tree = CompoundError(CompoundError(e1, e2), AggregateError([e3, CompoundError(e4, e1)]))

        assert tree.aggregate().errors == (e1, e2, e3, e4, e1)

    def test_hashable(self) -> None:
        a, b = Error("a"), Error("b")
        assert hash(CompoundError(a, b)) == hash(CompoundError(a, b))


class TestAggregateError:
    def test_derived_message_and_extra(self) -> None:
        exc = KeyError("k")
        agg = AggregateError([Error("first"), Error("second", exc)])

        assert agg.message == "first\nsecond"
        assert agg.extra == (None, exc)
        assert list(agg) == [Error("first"), Error("second", exc)]

    def test_accepts_any_iterable(self) -> None:
        agg = AggregateError(Error(m) for m in "ab")
        assert agg.errors == (Error("a"), Error("b"))

    def test_empty(self) -> None:
        agg = AggregateError([])
        assert agg.message == ""
        assert agg.flatten() == agg

    def test_flatten_nested(self) -> None:
        e1, e2, e3 = Error("e1"), Error("e2"), Error("e3")
        flat = AggregateError([CompoundError(e1, e2), e3]).flatten()

        assert flat.errors == (e1, e2, e3)
        assert not any(isinstance(e, (CompoundError, AggregateError)) for e in flat.errors)

    def test_flatten_deeply_nested_aggregates(self) -> None:
        leaves = [Error(str(i)) for i in range(4)]
        nested = AggregateError([AggregateError([AggregateError([leaves[0]]), leaves[1]]), leaves[2], AggregateError([leaves[3]])])

        assert nested.flatten().errors == tuple(leaves)

    def test_flatten_is_idempotent(self) -> None:
        flat = AggregateError([Error("a"), Error("b")])
        assert flat.flatten() == flat
        assert flat.flatten().flatten() == flat.flatten()

    def test_flatten_long_chain_without_recursion_limit(self) -> None:
        error: Error = Error("0")
        for i in range(1, 5000):
            error = CompoundError(error, Error(str(i)))

        flat = AggregateError([error]).flatten()
        assert len(flat.errors) == 5000
        assert flat.errors[0] == Error("0")
        assert flat.errors[-1] == Error("4999")


def _compose_chain(depth: int) -> Error:
    error: Error = Error("0")
    for i in range(1, depth):
        error = error.compose(Error(str(i)))
    return error


class TestCompositeReprAndEquality:
    def test_repr_of_deep_chain_stays_small(self) -> None:
        text = repr(_compose_chain(30))

        assert text.count("Error(message='0'") == 1
        # only the 30 leaves print an extra
        assert text.count("extra=") == 30
        assert len(text) < 5000

    def test_deep_chains_compare_by_value(self) -> None:
        assert _compose_chain(30) == _compose_chain(30)
        assert _compose_chain(30) != _compose_chain(31)

    def test_aggregate_repr_lists_children_once(self) -> None:
        agg = AggregateError([Error("a", {"field": "id"}), Error("b")])

        assert repr(agg).count("field") == 1
        assert agg == AggregateError([Error("a", {"field": "id"}), Error("b")])
        assert agg.extra == ({"field": "id"}, None)
