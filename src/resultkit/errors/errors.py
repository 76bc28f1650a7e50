"""Immutable error values carried by Err results.

Three shapes, all frozen dataclasses:
- Error: leaf failure (message + optional extra payload)
- CompoundError: two errors chained (cause, then follow-up failure)
- AggregateError: ordered batch of errors

Composite errors form a tree that only grows by building new nodes, so
flattening always terminates.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

COMPOUND_MESSAGE = "Compound Error"


@dataclass(frozen=True, slots=True)
class Error:
    """A failure: human-readable message plus optional diagnostic payload.

    Example:
        >>> Error("question not found")
        Error(message='question not found', extra=None)
        >>> Error("bad payload", extra={"field": "level"}).extra
        {'field': 'level'}
    """

    message: str
    extra: object = field(default=None, hash=False)

    @classmethod
    def from_exception(cls, exc: BaseException, *, include_exception: bool | None = None) -> Error:
        """Build a fault-derived error. Embeds exc as extra unless disabled."""
        if include_exception is None:
            from ..config import get_settings
            include_exception = get_settings().include_exception
        return Error(str(exc) or type(exc).__name__, exc if include_exception else None)

    def compose(self, other: Error) -> CompoundError:
        """Chain other after this error (returns new node)."""
        return CompoundError(self, other)


@dataclass(frozen=True, slots=True, init=False)
class CompoundError(Error):
    """Two errors stacked together: main happened first, other followed."""

    # Mirrors main/other, so repr and eq skip it
    extra: object = field(default=None, repr=False, compare=False, hash=False)
    main: Error
    other: Error

    def __init__(self, main: Error, other: Error) -> None:
        object.__setattr__(self, "message", COMPOUND_MESSAGE)
        object.__setattr__(self, "extra", {"main": main, "other": other})
        object.__setattr__(self, "main", main)
        object.__setattr__(self, "other", other)

    def aggregate(self) -> AggregateError:
        """Flatten this tree into an AggregateError of leaf errors (pre-order)."""
        return AggregateError(_leaves((self,)))


@dataclass(frozen=True, slots=True, init=False)
class AggregateError(Error):
    """Ordered batch of errors, e.g. every failure of a collection operation.

    message joins child messages with newlines; extra is the tuple of child extras.

    Example:
        >>> agg = AggregateError([Error("a"), Error("b")])
        >>> agg.message
        'a\\nb'
    """

    # Mirrors the children's extras
    extra: object = field(default=None, repr=False, compare=False, hash=False)
    errors: tuple[Error, ...]

    def __init__(self, errors: Iterable[Error]) -> None:
        errs = tuple(errors)
        object.__setattr__(self, "message", "\n".join(e.message for e in errs))
        object.__setattr__(self, "extra", tuple(e.extra for e in errs))
        object.__setattr__(self, "errors", errs)

    def flatten(self) -> AggregateError:
        """Expand nested compound/aggregate children into one flat list (pre-order)."""
        return AggregateError(_leaves(self.errors))

    def __iter__(self) -> Iterator[Error]:
        return iter(self.errors)


def _leaves(errors: Iterable[Error]) -> Iterator[Error]:
    """Pre-order walk yielding leaf errors. Explicit stack, no recursion."""
    stack = list(errors)[::-1]
    while stack:
        err = stack.pop()
        if isinstance(err, CompoundError):
            stack += (err.other, err.main)
        elif isinstance(err, AggregateError):
            stack += err.errors[::-1]
        else:
            yield err
