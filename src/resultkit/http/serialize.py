"""Convert arbitrary result payloads into JSON-able structures.

Service data is often an object graph with back-references (a question that
lists its answers, each answer pointing back at its question). A reference to
a container that is already being serialized on the current path is written
as None, so cycles are dropped instead of recursing forever. Shared but
acyclic references are serialized every time they appear.
"""

from __future__ import annotations

import dataclasses
import traceback
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from ..config import EnvelopeSettings

JsonDict = dict[str, Any]

# Left for orjson, which serializes these natively or via default=str
_SCALARS = (str, int, float, bool, type(None), bytes)

# orjson rejects ints outside this range and never hands them to default=
_INT_MIN, _INT_MAX = -(2**63), 2**64


def to_jsonable(obj: Any, settings: EnvelopeSettings | None = None) -> Any:
    """Walk obj and return plain dict/list/scalar data ready for orjson."""
    if settings is None:
        from ..config import get_settings
        settings = get_settings().envelope
    return _convert(obj, settings, set())


def exception_payload(exc: BaseException, *, include_traceback: bool = False) -> JsonDict:
    """Serializable view of an exception."""
    payload: JsonDict = {"type": type(exc).__name__, "message": str(exc)}
    if include_traceback:
        payload["traceback"] = "".join(traceback.format_exception(exc))
    return payload


def _convert(obj: Any, settings: EnvelopeSettings, path: set[int]) -> Any:
    if isinstance(obj, Enum):
        return _convert(obj.value, settings, path)
    if isinstance(obj, int) and not _INT_MIN <= obj < _INT_MAX:
        return str(obj)
    if isinstance(obj, _SCALARS):
        return obj
    if isinstance(obj, BaseException):
        return exception_payload(obj, include_traceback=settings.include_traceback)

    # Lazy: envelope imports this module
    from ..errors import Error, Result
    from .envelope import ErrorPayload, ResultEnvelope
    if isinstance(obj, Error):
        return ErrorPayload.from_error(obj, settings=settings).body()
    if isinstance(obj, Result):
        return ResultEnvelope.from_result(obj, settings=settings).dump()

    key = id(obj)
    if key in path:
        return None
    path.add(key)
    try:
        return _convert_container(obj, settings, path)
    finally:
        path.discard(key)


def _convert_container(obj: Any, settings: EnvelopeSettings, path: set[int]) -> Any:
    if isinstance(obj, BaseModel):
        return {name: _convert(getattr(obj, name), settings, path) for name in type(obj).model_fields}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _convert(getattr(obj, f.name), settings, path) for f in dataclasses.fields(obj)}
    if isinstance(obj, Mapping):
        return {str(k): _convert(v, settings, path) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_convert(v, settings, path) for v in obj]
    if hasattr(obj, "__dict__") and not isinstance(obj, type):
        return {k: _convert(v, settings, path) for k, v in vars(obj).items() if not k.startswith("_")}
    # datetime, UUID, Decimal, ...
    return obj
