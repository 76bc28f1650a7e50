"""Turn a Result into an HTTP response.

The controller side of the contract: copy the result's status code onto the
response and serialize the result as the body.

Body shape:
    Ok  -> {"data": ..., "statusCode": 200}
    Err -> {"error": {"message": ..., "kind": ..., ...}, "statusCode": 400}

Example:
    >>> resp = resolve(Ok({"id": 1}).with_status_code(201))
    >>> resp.status_code, resp.body
    (201, b'{"data":{"id":1},"statusCode":201}')
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Self

import orjson
from pydantic import BaseModel, ConfigDict, Field

from ..errors import AggregateError, CompoundError, Error, Result
from .serialize import JsonDict, to_jsonable

if TYPE_CHECKING:
    from ..config import EnvelopeSettings

ErrorKind = Literal["error", "compound", "aggregate"]


def _envelope_settings(settings: EnvelopeSettings | None) -> EnvelopeSettings:
    if settings is not None:
        return settings
    from ..config import get_settings
    return get_settings().envelope


class ErrorPayload(BaseModel):
    """Serializable form of an Error tree.

    Composite errors keep their structure: a compound error lists [main, other]
    under errors, an aggregate lists its children in order.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "title": "Error Payload",
            "examples": [{"message": "question not found", "kind": "error"}],
        },
    )

    message: str
    kind: ErrorKind = "error"
    extra: Any = Field(default=None, description="JSON-able diagnostic payload")
    errors: tuple[ErrorPayload, ...] | None = None

    @classmethod
    def from_error(cls, error: Error, *, settings: EnvelopeSettings | None = None) -> Self:
        settings = _envelope_settings(settings)
        match error:
            case CompoundError(main=main, other=other):
                children = (main, other)
                kind: ErrorKind = "compound"
            case AggregateError(errors=errors):
                children, kind = errors, "aggregate"
            case _:
                extra = to_jsonable(error.extra, settings) if settings.include_extra else None
                return cls(message=error.message, extra=extra)
        return cls(
            message=error.message,
            kind=kind,
            errors=tuple(cls.from_error(child, settings=settings) for child in children),
        )

    def body(self) -> JsonDict:
        """Plain dict form; absent extra/errors are left out."""
        out: JsonDict = {"message": self.message, "kind": self.kind}
        if self.extra is not None:
            out["extra"] = self.extra
        if self.errors is not None:
            out["errors"] = [child.body() for child in self.errors]
        return out


class ResultEnvelope(BaseModel):
    """Response body for a Result. Exactly one of data/error is meaningful."""

    model_config = ConfigDict(frozen=True)

    ok: bool = Field(exclude=True)
    data: Any = None
    error: ErrorPayload | None = None
    status_code: int
    status_field: str = Field(default="statusCode", exclude=True)

    @classmethod
    def from_result(cls, result: Result[Any], *, settings: EnvelopeSettings | None = None) -> Self:
        settings = _envelope_settings(settings)
        if result.is_ok():
            return cls(
                ok=True,
                data=to_jsonable(result.data, settings),
                status_code=result.status_code.value,
                status_field=settings.status_field,
            )
        return cls(
            ok=False,
            error=ErrorPayload.from_error(result.error, settings=settings),  # type: ignore[arg-type]
            status_code=result.status_code.value,
            status_field=settings.status_field,
        )

    def dump(self) -> JsonDict:
        """Plain dict body. data on Ok, error on Err, plus the status field."""
        if self.ok:
            return {"data": self.data, self.status_field: self.status_code}
        return {"error": self.error.body(), self.status_field: self.status_code}  # type: ignore[union-attr]

    def to_json(self) -> bytes:
        return orjson.dumps(self.dump(), default=str, option=orjson.OPT_NON_STR_KEYS)


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Framework-neutral response: status code, encoded body and content type."""

    status_code: int
    body: bytes
    content_type: str = "application/json"


def resolve(result: Result[Any], *, settings: EnvelopeSettings | None = None) -> HttpResponse:
    """Build the HTTP response for a Result: its status code plus serialized envelope."""
    envelope = ResultEnvelope.from_result(result, settings=settings)
    return HttpResponse(envelope.status_code, envelope.to_json())
