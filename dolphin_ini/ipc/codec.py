"""Wire shape of endpoint responses.

`EndpointResult.content` is always `{"data": ..., "meta": ...}`. `data` is the
handler's response converted to plain JSON values, and `meta` carries the
routing info (request id, endpoint name). Errors live next to the content as
`{"type", "message", "details"}`.
"""

from __future__ import annotations

import json
import os
from typing import Any, Mapping

from pydantic import BaseModel

from dolphin_ini.core.types import EndpointResult


def to_json_value(obj: Any) -> Any:
    """Convert handler output to JSON values.

    pydantic models are dumped in JSON mode and paths become strings. Anything
    else that JSON cannot hold raises TypeError, which the registry reports as
    an endpoint failure.
    """

    if obj is None or isinstance(obj, (str, bool, int, float)):
        return obj
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, os.PathLike):
        return os.fspath(obj)
    if isinstance(obj, Mapping):
        out: dict[str, Any] = {}
        for k, v in obj.items():
            if not isinstance(k, str):
                raise TypeError(f"non-string key in endpoint output: {k!r}")
            out[k] = to_json_value(v)
        return out
    if isinstance(obj, (list, tuple)):
        return [to_json_value(v) for v in obj]
    raise TypeError(f"endpoint output is not JSON-serializable: {type(obj).__name__}")


def make_content(data: Any, *, meta: dict[str, Any]) -> dict[str, Any]:
    return {"data": to_json_value(data), "meta": dict(meta)}


def normalize_error(*, error_type: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "type": str(error_type),
        "message": str(message),
        "details": dict(details or {}),
    }


def dumps_payload(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def dumps_result(result: EndpointResult) -> str:
    """Serialize a whole result for the wire (one compact JSON object)."""

    return dumps_payload(result.to_dict())
