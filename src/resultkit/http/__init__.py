"""HTTP-facing helpers: status code + JSON body for a Result."""

from .envelope import ErrorPayload, HttpResponse, ResultEnvelope, resolve
from .serialize import exception_payload, to_jsonable

__all__ = [
    "ErrorPayload",
    "HttpResponse",
    "ResultEnvelope",
    "exception_payload",
    "resolve",
    "to_jsonable",
]
