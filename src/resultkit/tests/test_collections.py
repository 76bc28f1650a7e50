"""Tests for collection operations: all_ok, any_ok, map_ok_each, flatten_each."""

from __future__ import annotations

from http import HTTPStatus

import pytest

from resultkit.errors import AggregateError, Err, Error, Ok, all_ok, any_ok, flatten_each, map_ok_each


class TestAllOk:
    def test_all_succeed(self) -> None:
        assert all_ok([Ok(3), Ok(5), Ok(7)]) == Ok([3, 5, 7])

    def test_any_failure_fails(self) -> None:
        e = Error("e")
        assert all_ok([Ok(3), Err(e), Ok(5)]) == Err(AggregateError([e]))

    def test_collects_every_error_in_order(self) -> None:
        a, b = Error("a"), Error("b")
        result = all_ok([Err(a), Ok(1), Err(b)])

        assert result.error.errors == (a, b)
        assert result.status_code == HTTPStatus.BAD_REQUEST

    def test_empty_is_error(self) -> None:
        assert all_ok([]) == Err(Error("Empty"))

    def test_consumes_generators(self) -> None:
        assert all_ok(Ok(i) for i in range(3)) == Ok([0, 1, 2])

    def test_empty_message_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from resultkit.config import clear_settings_cache

        monkeypatch.setenv("RESULTKIT_EMPTY_MESSAGE", "nothing to do")
        clear_settings_cache()
        assert all_ok([]).error == Error("nothing to do")


class TestAnyOk:
    def test_keeps_successes(self) -> None:
        assert any_ok([Ok(3), Err(Error("e")), Ok(5)]) == Ok([3, 5])

    def test_all_failed(self) -> None:
        a, b = Error("a"), Error("b")
        assert any_ok([Err(a), Err(b)]) == Err(AggregateError([a, b]))

    def test_empty_is_error(self) -> None:
        assert any_ok([]) == Err(Error("Empty"))


class TestMapOkEach:
    def test_elements_are_independent(self) -> None:
        e = Error("skip")
        mapped = list(map_ok_each([Ok(1), Err(e), Ok(0), Ok(4)], lambda x: 12 // x))

        assert mapped[0] == Ok(12)
        assert mapped[1] == Err(e)
        assert mapped[2].status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert mapped[3] == Ok(3)

    def test_is_lazy(self) -> None:
        calls: list[int] = []

        def record(x: int) -> int:
            calls.append(x)
            return x

        mapped = map_ok_each([Ok(1), Ok(2)], record)
        assert calls == []

        iterator = iter(mapped)
        assert next(iterator) == Ok(1)
        assert calls == [1]

    def test_is_restartable(self) -> None:
        mapped = map_ok_each([Ok(1), Ok(2)], lambda x: x * 10)
        assert list(mapped) == [Ok(10), Ok(20)]
        assert list(mapped) == [Ok(10), Ok(20)]

    def test_composes_with_all_ok(self) -> None:
        assert all_ok(map_ok_each([Ok(1), Ok(2)], str)) == Ok(["1", "2"])


def test_flatten_each() -> None:
    outer, inner = Error("outer"), Error("inner")
    flattened = list(flatten_each([Ok(Ok(1)), Ok(Err(inner)), Err(outer)]))

    assert flattened == [Ok(1), Err(inner), Err(outer)]
