from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class EndpointResult:
    """Response to a single endpoint request (stable structure for callers)."""

    request_id: str
    name: str
    ok: bool
    content: dict[str, Any]
    error: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_id": self.request_id,
            "name": self.name,
            "ok": self.ok,
            "content": self.content,
            "error": self.error,
        }
