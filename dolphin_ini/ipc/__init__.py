"""Request/response layer over the INI codec.

Callers address operations by endpoint name and receive an `EndpointResult`
whose content is always a JSON `{"data": ..., "meta": ...}` envelope.
"""

from __future__ import annotations

from dolphin_ini.ipc.codec import dumps_payload, dumps_result, make_content, normalize_error, to_json_value
from dolphin_ini.ipc.endpoints import IniEndpoints, build_registry
from dolphin_ini.ipc.registry import EndpointRegistry, EndpointRejected

__all__ = [
    "EndpointRegistry",
    "EndpointRejected",
    "IniEndpoints",
    "build_registry",
    "dumps_payload",
    "dumps_result",
    "make_content",
    "normalize_error",
    "to_json_value",
]
