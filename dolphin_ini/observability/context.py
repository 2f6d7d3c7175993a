from __future__ import annotations

from contextvars import ContextVar


_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_endpoint: ContextVar[str | None] = ContextVar("endpoint", default=None)
_errors: ContextVar[list[str] | None] = ContextVar("errors", default=None)


def bind_request(*, request_id: str, endpoint: str) -> None:
    _request_id.set(request_id)
    _endpoint.set(endpoint)
    _errors.set([])


def clear_request() -> None:
    _request_id.set(None)
    _endpoint.set(None)
    _errors.set(None)


def add_error(message: str) -> None:
    errs = list(_errors.get() or [])
    errs.append(message)
    _errors.set(errs)


def snapshot() -> dict[str, object]:
    """Return the current request context for logging.

    Outside of a request the snapshot is empty.
    """

    out: dict[str, object] = {}
    if (v := _request_id.get()) is not None:
        out["request_id"] = v
    if (v := _endpoint.get()) is not None:
        out["endpoint"] = v
    if (errs := _errors.get()) is not None:
        out["errors"] = list(errs)
    return out
