"""Async lifting of Result combinators.

AsyncResult wraps a pending Result (any awaitable resolving to one) and offers
the same combinators, each returning a new AsyncResult. Nothing runs until the
chain is awaited; the combinator logic itself never suspends, only the await
of the wrapped computation does.

Example:
    >>> async def load_question(qid: int) -> Result[dict]:
    ...     return Ok({"id": qid, "text": "2 + 2?"})
    >>>
    >>> text = await AsyncResult(load_question(1)).map_ok(lambda q: q["text"]).or_else("")
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Generator, Iterable
from typing import Any, Generic, TypeVar

from .errors import Error
from .result import (
    Ok,
    Result,
    _current_task_cancelling,
    _fault,
    all_ok,
    any_ok,
    flatten_each,
    map_ok_each,
)

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class _Ready(Generic[T]):
    """Awaitable over an already-resolved Result. Creates no coroutine."""

    __slots__ = ("_result",)

    def __init__(self, result: Result[T]) -> None:
        self._result = result

    def __await__(self) -> Generator[Any, None, Result[T]]:
        return self._result
        yield  # unreachable, makes __await__ a generator


class AsyncResult(Generic[T]):
    """Awaitable Result with chainable combinators.

    Each AsyncResult should be awaited once; chaining consumes the wrapped awaitable.
    """

    __slots__ = ("_awaitable",)

    def __init__(self, awaitable: Awaitable[Result[T]]) -> None:
        self._awaitable = awaitable

    @classmethod
    def from_result(cls, result: Result[T]) -> AsyncResult[T]:
        """Lift an already-resolved Result."""
        return cls(_Ready(result))

    def __await__(self) -> Generator[Any, None, Result[T]]:
        return self._awaitable.__await__()

    def _then(self, op: Callable[[Result[T]], Result[U]]) -> AsyncResult[U]:
        async def step() -> Result[U]:
            return op(await self._awaitable)
        return AsyncResult(step())

    # ─── Combinators ─────────────────────────────────────────────────

    def map_ok(self, f: Callable[[T], U]) -> AsyncResult[U]:
        return self._then(lambda r: r.map_ok(f))

    def map_ok_async(self, f: Callable[[T], Awaitable[U]]) -> AsyncResult[U]:
        async def step() -> Result[U]:
            return await (await self._awaitable).map_ok_async(f)
        return AsyncResult(step())

    def map_error(self, f: Callable[[Error], Error]) -> AsyncResult[T]:
        return self._then(lambda r: r.map_error(f))

    def and_then(self, f: Callable[[T], Result[U]]) -> AsyncResult[U]:
        return self._then(lambda r: r.and_then(f))

    def flatten(self: AsyncResult[Result[U]]) -> AsyncResult[U]:
        return self._then(Result.flatten)  # type: ignore[arg-type]

    def flat_map_ok(self: AsyncResult[Result[U]], f: Callable[[U], R]) -> AsyncResult[R]:
        return self._then(lambda r: r.flat_map_ok(f))  # type: ignore[arg-type]

    def with_status_code(self, status_code: int) -> AsyncResult[T]:
        return self._then(lambda r: r.with_status_code(status_code))

    def or_result(self, alternative: Result[T] | Callable[[], Result[T]]) -> AsyncResult[T]:
        return self._then(lambda r: r.or_result(alternative))

    def when_ok(self, f: Callable[[T], object]) -> AsyncResult[T]:
        """Side effect on Ok once resolved. Exceptions from f propagate to the awaiter."""
        return self._then(lambda r: r.when_ok(f))

    def when_error(self, f: Callable[[Error], object]) -> AsyncResult[T]:
        """Side effect on Err once resolved. Exceptions from f propagate to the awaiter."""
        return self._then(lambda r: r.when_error(f))

    # ─── Terminal Operations ─────────────────────────────────────────

    async def or_else(self, default: T) -> T:
        return (await self._awaitable).or_else(default)

    async def or_else_get(self, producer: Callable[[], T]) -> T:
        return (await self._awaitable).or_else_get(producer)

    async def expect(self, message: str | None = None) -> T:
        return (await self._awaitable).expect(message)

    async def match(self, *, ok: Callable[[T], U], err: Callable[[Error], U]) -> U:
        return (await self._awaitable).match(ok=ok, err=err)

    def __repr__(self) -> str:
        return f"AsyncResult({self._awaitable!r})"


# ═══════════════════════════════════════════════════════════════════════════════
# Guarded Invocation
# ═══════════════════════════════════════════════════════════════════════════════


async def run_safe_async(
    fn: Callable[..., Awaitable[T]] | Callable[..., T],
    *args: Any,
    base_error: Error | None = None,
    **kwargs: Any,
) -> Result[T]:
    """Async run_safe. Coroutine functions are awaited; plain callables run in a thread.

    An awaitable returned by a plain callable is awaited as well.

    Cancellation of the awaited work becomes an Err; cancellation of the
    calling task is re-raised.
    """
    where = getattr(fn, "__name__", "run_safe_async")
    try:
        if inspect.iscoroutinefunction(fn):
            value = await fn(*args, **kwargs)
        else:
            value = await asyncio.to_thread(fn, *args, **kwargs)
        # e.g. a lambda wrapping a coroutine call
        if inspect.isawaitable(value):
            value = await value
        return Ok(value)  # type: ignore[arg-type]
    except asyncio.CancelledError as exc:
        if _current_task_cancelling():
            raise
        return _fault(exc, where, base_error)
    except Exception as exc:
        return _fault(exc, where, base_error)


# ═══════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═══════════════════════════════════════════════════════════════════════════════


async def all_ok_async(results: Awaitable[Iterable[Result[T]]]) -> Result[list[T]]:
    """all_ok over a pending collection of results."""
    return all_ok(await results)


async def any_ok_async(results: Awaitable[Iterable[Result[T]]]) -> Result[list[T]]:
    """any_ok over a pending collection of results."""
    return any_ok(await results)


async def map_ok_each_async(results: Awaitable[Iterable[Result[T]]], f: Callable[[T], U]) -> Iterable[Result[U]]:
    return map_ok_each(await results, f)


async def flatten_each_async(results: Awaitable[Iterable[Result[Result[T]]]]) -> Iterable[Result[T]]:
    return flatten_each(await results)
