"""Result/Error core.

- Error/CompoundError/AggregateError: immutable failure values
- Result/Ok/Err/Fault: status-code-bearing success/failure union
- run_safe/run_safe_async: guarded invocation
- all_ok/any_ok/map_ok_each/flatten_each: collection operations
- AsyncResult: the same combinators over pending results
"""

from .aio import (
    AsyncResult,
    all_ok_async,
    any_ok_async,
    flatten_each_async,
    map_ok_each_async,
    run_safe_async,
)
from .errors import COMPOUND_MESSAGE, AggregateError, CompoundError, Error
from .result import (
    Err,
    ExpectError,
    Fault,
    Ok,
    Result,
    all_ok,
    any_ok,
    flatten_each,
    map_ok_each,
    run_safe,
    zip_results,
)

__all__ = [
    # Errors
    "Error", "CompoundError", "AggregateError", "COMPOUND_MESSAGE",
    # Result
    "Result", "Ok", "Err", "Fault", "ExpectError",
    # Guarded invocation
    "run_safe", "run_safe_async", "zip_results",
    # Collection ops
    "all_ok", "any_ok", "map_ok_each", "flatten_each",
    # Async
    "AsyncResult", "all_ok_async", "any_ok_async", "map_ok_each_async", "flatten_each_async",
]
