"""Status-code-bearing Result type for railway-oriented error handling.

A Result is exactly one of Ok(value) or Err(Error), plus the HTTP status code
the producing service wants the caller to answer with:
- Ok(value)    -> 200 OK
- Err(error)   -> 400 Bad Request
- Fault(exc)   -> 500 Internal Server Error (error derived from a caught exception)

Combinators never raise for the expected error path. Guarded operations
(run_safe, map_ok, map_ok_async, map_error) turn exceptions raised by their
callbacks into Err values; when_ok/when_error let them propagate.

Example:
    >>> def find_level(level_id: int) -> Result[str]:
    ...     return Ok("easy") if level_id == 1 else Err("level not found").with_status_code(404)
    >>>
    >>> find_level(1).map_ok(str.upper).expect()
    'EASY'
    >>> find_level(7).status_code
    <HTTPStatus.NOT_FOUND: 404>
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Iterator
from http import HTTPStatus
from typing import Any, Generic, TypeVar, overload

from ..config.logging import faults_enabled
from .errors import AggregateError, Error

logger = logging.getLogger("resultkit.result")

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")
B = TypeVar("B")

_OK = True
_ERR = False


class ExpectError(RuntimeError):
    """Raised by expect() when called on an Err. Carries the offending Error."""

    __slots__ = ("error",)

    def __init__(self, message: str, error: Error) -> None:
        super().__init__(message)
        self.error = error


class Result(Generic[T]):
    """Discriminated union of Ok(value) / Err(Error) with an HTTP status code.

    One value slot plus a tag: a Result can never hold both data and an error,
    or neither. Instances are never modified; every operation returns a new
    Result (or self when nothing changes).

    Examples:
        >>> Ok(3).map_ok(lambda x: x * 3)
        Ok(9)
        >>> Err("missing").map_ok(lambda x: x * 3)
        Err(Error(message='missing', extra=None))
        >>> Ok(5).map_ok(lambda x: x / 0).is_err()
        True

    Pattern matching binds the single slot for both variants, so branch on
    the tag with a guard:

        match result:
            case Result(value) if result.is_ok(): ...
            case Result(error): ...
    """

    __slots__ = ("_value", "_is_ok", "_status_code")
    __match_args__ = ("_value",)

    def __init__(self, value: T | Error, is_ok: bool, status_code: int) -> None:
        """Private constructor. Use Ok(), Err() or Fault() instead."""
        self._value = value
        self._is_ok = is_ok
        self._status_code = HTTPStatus(status_code)

    # ─── Type Checking ───────────────────────────────────────────────

    def is_ok(self) -> bool:
        """Check if Result is Ok variant."""
        return self._is_ok

    def is_err(self) -> bool:
        """Check if Result is Err variant."""
        return not self._is_ok

    # ─── Accessors ───────────────────────────────────────────────────

    @property
    def data(self) -> T | None:
        """Success value, or None on Err."""
        return self._value if self._is_ok else None  # type: ignore[return-value]

    @property
    def error(self) -> Error | None:
        """Error, or None on Ok."""
        return None if self._is_ok else self._value  # type: ignore[return-value]

    @property
    def status_code(self) -> HTTPStatus:
        return self._status_code

    def try_get_ok(self) -> tuple[bool, T | None]:
        """(True, value) on Ok, (False, None) on Err."""
        return (True, self._value) if self._is_ok else (False, None)  # type: ignore[return-value]

    def try_get_error(self) -> tuple[bool, Error | None]:
        """(True, error) on Err, (False, None) on Ok."""
        return (False, None) if self._is_ok else (True, self._value)  # type: ignore[return-value]

    def expect(self, message: str | None = None) -> T:
        """Extract Ok value, raise ExpectError on Err.

        For call sites where success is already guaranteed, or crashing is fine.
        """
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        if message is None:
            from ..config import get_settings
            message = get_settings().expect_message
        err: Error = self._value  # type: ignore[assignment]
        logger.warning("expect() on Err: %s (%s)", message, err.message)
        cause = err.extra if isinstance(err.extra, BaseException) else None
        raise ExpectError(message, err) from cause

    def with_status_code(self, status_code: int) -> Result[T]:
        """Copy with only the status code changed."""
        return Result(self._value, self._is_ok, status_code)

    # ─── Functor Operations ──────────────────────────────────────────

    def map_ok(self, f: Callable[[T], U]) -> Result[U]:
        """Apply f to Ok value (guarded). Err passes through untouched.

        An exception raised by f becomes Fault(exc) with status 500.
        """
        if not self._is_ok:
            return self  # type: ignore[return-value]
        return run_safe(f, self._value)

    async def map_ok_async(self, f: Callable[[T], Awaitable[U]]) -> Result[U]:
        """Await f(value) on Ok (guarded). Suspends only while awaiting f."""
        if not self._is_ok:
            return self  # type: ignore[return-value]
        try:
            return Ok(await f(self._value))  # type: ignore[arg-type]
        except asyncio.CancelledError as exc:
            if _current_task_cancelling():
                raise
            return _fault(exc, "map_ok_async")
        except Exception as exc:
            return _fault(exc, "map_ok_async")

    def map_error(self, f: Callable[[Error], Error]) -> Result[T]:
        """Apply f to Err value (guarded), keeping the status code. Ok passes through.

        If f raises, the result is an AggregateError of the original error and the fault.
        """
        if self._is_ok:
            return self
        err: Error = self._value  # type: ignore[assignment]
        try:
            return Result(f(err), _ERR, self._status_code)
        except Exception as exc:
            _log_fault(exc, "map_error")
            return Err(AggregateError([err, Error.from_exception(exc)]), status_code=HTTPStatus.INTERNAL_SERVER_ERROR)

    # ─── Monad Operations ────────────────────────────────────────────

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain an operation that can fail. Not guarded: exceptions from f propagate."""
        return f(self._value) if self._is_ok else self  # type: ignore[arg-type,return-value]

    def flatten(self: Result[Result[U]]) -> Result[U]:
        """Result[Result[U]] -> Result[U]. Outer Err wins; inner is returned as-is."""
        return self._value if self._is_ok else self  # type: ignore[return-value]

    def flat_map_ok(self: Result[Result[U]], f: Callable[[U], B]) -> Result[B]:
        """map_ok over the inner value of a nested Result, then flatten."""
        return self.map_ok(lambda inner: inner.map_ok(f)).flatten()

    # ─── Fallbacks ───────────────────────────────────────────────────

    def or_else(self, default: T) -> T:
        """Ok value, or default on Err."""
        return self._value if self._is_ok else default  # type: ignore[return-value]

    def or_else_get(self, producer: Callable[[], T]) -> T:
        """Ok value, or producer() on Err. producer is only called on Err."""
        return self._value if self._is_ok else producer()  # type: ignore[return-value]

    @overload
    def or_result(self, alternative: Result[T]) -> Result[T]: ...
    @overload
    def or_result(self, alternative: Callable[[], Result[T]]) -> Result[T]: ...

    def or_result(self, alternative: Result[T] | Callable[[], Result[T]]) -> Result[T]:
        """Self if Ok, else alternative (called first when it is a factory)."""
        if self._is_ok:
            return self
        return alternative if isinstance(alternative, Result) else alternative()

    # ─── Side Effects ────────────────────────────────────────────────

    def when_ok(self, f: Callable[[T], object]) -> Result[T]:
        """Call f with Ok value, return self. Exceptions from f propagate."""
        if self._is_ok:
            f(self._value)  # type: ignore[arg-type]
        return self

    def when_error(self, f: Callable[[Error], object]) -> Result[T]:
        """Call f with Err value, return self. Exceptions from f propagate."""
        if not self._is_ok:
            f(self._value)  # type: ignore[arg-type]
        return self

    # ─── Pattern Matching ────────────────────────────────────────────

    def match(self, *, ok: Callable[[T], U], err: Callable[[Error], U]) -> U:
        """Exhaustive pattern match. Forces handling both Ok and Err."""
        return ok(self._value) if self._is_ok else err(self._value)  # type: ignore[arg-type]

    def zip(self, other: Result[U]) -> Result[tuple[T, U]]:
        """Pair two results. See zip_results."""
        return zip_results(self, other)

    # ─── Dunder Methods ──────────────────────────────────────────────

    __bool__ = lambda self: self._is_ok  # noqa: E731
    __hash__ = lambda self: hash((self._is_ok, self._value, self._status_code))  # noqa: E731

    def __repr__(self) -> str:
        variant = "Ok" if self._is_ok else "Err"
        default = HTTPStatus.OK if self._is_ok else HTTPStatus.BAD_REQUEST
        status = "" if self._status_code == default else f", status={self._status_code.value}"
        return f"{variant}({self._value!r}{status})"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return (self._is_ok, self._status_code, self._value) == (other._is_ok, other._status_code, other._value)

    def __iter__(self) -> Iterator[T]:
        """Iterate: yields value if Ok, nothing if Err."""
        if self._is_ok:
            yield self._value  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def Ok(value: T, *, status_code: int = HTTPStatus.OK) -> Result[T]:  # noqa: N802
    """Construct Ok variant (success), 200 by default."""
    return Result(value, _OK, status_code)


def Err(error: Error | str, *, status_code: int = HTTPStatus.BAD_REQUEST) -> Result[Any]:  # noqa: N802
    """Construct Err variant (failure), 400 by default. A str is wrapped into Error."""
    return Result(Error(error) if isinstance(error, str) else error, _ERR, status_code)


def Fault(  # noqa: N802
    exc: BaseException,
    *,
    include_exception: bool | None = None,
    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> Result[Any]:
    """Construct Err from a caught exception, 500 by default."""
    return Result(Error.from_exception(exc, include_exception=include_exception), _ERR, status_code)


# ═══════════════════════════════════════════════════════════════════════════════
# Guarded Invocation
# ═══════════════════════════════════════════════════════════════════════════════


def run_safe(fn: Callable[..., T], *args: Any, base_error: Error | None = None, **kwargs: Any) -> Result[T]:
    """Call fn(*args, **kwargs), converting any exception into an Err.

    Without base_error a fault becomes Fault(exc); with it, an AggregateError
    of [base_error, fault error]. Both carry status 500.

    Example:
        >>> run_safe(int, "42")
        Ok(42)
        >>> run_safe(int, "x").status_code
        <HTTPStatus.INTERNAL_SERVER_ERROR: 500>
    """
    try:
        return Ok(fn(*args, **kwargs))
    except Exception as exc:
        return _fault(exc, getattr(fn, "__name__", "run_safe"), base_error)


def zip_results(a: Result[A], b: Result[B]) -> Result[tuple[A, B]]:
    """Both Ok -> Ok((a, b)); one Err -> that Err; both Err -> AggregateError([a, b])."""
    if a._is_ok and b._is_ok:
        return Ok((a._value, b._value))  # type: ignore[arg-type]
    if not a._is_ok and not b._is_ok:
        return Err(AggregateError([a._value, b._value]))  # type: ignore[list-item]
    return a if not a._is_ok else b  # type: ignore[return-value]


def _fault(exc: BaseException, where: str, base_error: Error | None = None) -> Result[Any]:
    _log_fault(exc, where)
    if base_error is None:
        return Fault(exc)
    return Err(AggregateError([base_error, Error.from_exception(exc)]), status_code=HTTPStatus.INTERNAL_SERVER_ERROR)


def _log_fault(exc: BaseException, where: str) -> None:
    if faults_enabled():
        logger.debug("captured fault in %s: %s: %s", where, type(exc).__name__, exc)


def _current_task_cancelling() -> bool:
    """True when the running task itself is being cancelled (not just an awaited future)."""
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


# ═══════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═══════════════════════════════════════════════════════════════════════════════


class _LazyMap(Iterable[Result[U]]):
    """Lazy per-element transform. Re-iterable whenever the source is."""

    __slots__ = ("_source", "_fn")

    def __init__(self, source: Iterable[Result[Any]], fn: Callable[[Result[Any]], Result[U]]) -> None:
        self._source, self._fn = source, fn

    def __iter__(self) -> Iterator[Result[U]]:
        return (self._fn(r) for r in self._source)


def map_ok_each(results: Iterable[Result[T]], f: Callable[[T], U]) -> Iterable[Result[U]]:
    """Lazily map_ok f over each result. Elements succeed or fail independently."""
    return _LazyMap(results, lambda r: r.map_ok(f))


def flatten_each(results: Iterable[Result[Result[T]]]) -> Iterable[Result[T]]:
    """Lazily flatten each nested result."""
    return _LazyMap(results, Result.flatten)


def _partition(results: Iterable[Result[T]]) -> tuple[list[T], list[Error]]:
    values: list[T] = []
    errors: list[Error] = []
    for r in results:
        (values if r._is_ok else errors).append(r._value)  # type: ignore[arg-type]
    return values, errors


def _empty() -> Result[Any]:
    from ..config import get_settings
    return Err(get_settings().empty_message)


def all_ok(results: Iterable[Result[T]]) -> Result[list[T]]:
    """Logical AND: every value if all succeeded, else AggregateError of all failures.

    Empty input is an error ("Empty"), not a vacuous success.

    Example:
        >>> all_ok([Ok(3), Ok(5), Ok(7)])
        Ok([3, 5, 7])
    """
    values, errors = _partition(results)
    if errors:
        return Err(AggregateError(errors))
    return Ok(values) if values else _empty()


def any_ok(results: Iterable[Result[T]]) -> Result[list[T]]:
    """Logical OR: the successful values if any, else AggregateError of all failures.

    Example:
        >>> any_ok([Ok(3), Err("boom"), Ok(5)])
        Ok([3, 5])
    """
    values, errors = _partition(results)
    if values:
        return Ok(values)
    return Err(AggregateError(errors)) if errors else _empty()
