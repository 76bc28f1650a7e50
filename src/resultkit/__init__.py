"""resultkit - status-code-bearing Result type for service layers.

Services return a Result instead of raising for expected failures (not found,
validation, conflict). Each Result carries the HTTP status code the caller
should respond with, so controllers only copy the code and serialize the body.

Quick Start:
    >>> from resultkit import Err, Ok, Result, resolve
    >>>
    >>> def find_question(qid: int) -> Result[dict]:
    ...     if qid != 1:
    ...         return Err("question not found").with_status_code(404)
    ...     return Ok({"id": 1, "text": "2 + 2?"})
    >>>
    >>> find_question(1).map_ok(lambda q: q["text"]).or_else("")
    '2 + 2?'
    >>> resolve(find_question(9)).status_code
    404

Collections:
    >>> from resultkit import all_ok, any_ok
    >>> all_ok([Ok(3), Ok(5)])
    Ok([3, 5])
    >>> any_ok([Ok(3), Err("boom")])
    Ok([3])

Async:
    >>> from resultkit import AsyncResult
    >>> created = await AsyncResult(service.create(dto)).with_status_code(201)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors & results
from .errors import (
    COMPOUND_MESSAGE,
    AggregateError,
    AsyncResult,
    CompoundError,
    Err,
    Error,
    ExpectError,
    Fault,
    Ok,
    Result,
    all_ok,
    all_ok_async,
    any_ok,
    any_ok_async,
    flatten_each,
    flatten_each_async,
    map_ok_each,
    map_ok_each_async,
    run_safe,
    run_safe_async,
    zip_results,
)

# HTTP
from .http import ErrorPayload, HttpResponse, ResultEnvelope, resolve, to_jsonable

# Configuration
from .config import ResultkitSettings, configure_logging, get_settings

__all__ = [
    "__version__",
    # Errors
    "Error", "CompoundError", "AggregateError", "COMPOUND_MESSAGE",
    # Result
    "Result", "Ok", "Err", "Fault", "ExpectError", "run_safe", "zip_results",
    # Collections
    "all_ok", "any_ok", "map_ok_each", "flatten_each",
    # Async
    "AsyncResult", "run_safe_async", "all_ok_async", "any_ok_async", "map_ok_each_async", "flatten_each_async",
    # HTTP
    "ErrorPayload", "HttpResponse", "ResultEnvelope", "resolve", "to_jsonable",
    # Configuration
    "ResultkitSettings", "configure_logging", "get_settings",
]
