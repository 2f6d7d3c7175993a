"""Named request handlers with a uniform response shape.

Failures are non-fatal: callers always receive an `EndpointResult`, with
`ok=False` and a normalized `error` when the request could not be served.
"""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from dolphin_ini.core.types import EndpointResult
from dolphin_ini.observability.context import add_error, bind_request, clear_request
from dolphin_ini.observability.logging import get_logger

from .codec import make_content, normalize_error


class EndpointRejected(RuntimeError):
    """Structured endpoint rejection.

    Raise this from a handler to fail with a normalized error type rather
    than an arbitrary exception.
    """

    def __init__(
        self,
        error_type: str,
        message: str,
        *,
        details: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.details = details or {}


EndpointHandler = Callable[[Any], Any]


class EndpointRegistry:
    def __init__(self, *, enabled: bool = True, whitelist: list[str] | None = None) -> None:
        self._enabled = enabled
        self._whitelist = set(whitelist or [])
        self._handlers: dict[str, tuple[EndpointHandler, type[BaseModel] | None]] = {}
        self._log = get_logger("dolphin_ini.ipc")

    def register(
        self,
        name: str,
        handler: EndpointHandler,
        *,
        request_model: type[BaseModel] | None = None,
    ) -> None:
        """Register `handler` under `name`.

        With `request_model`, arguments are validated first and the handler
        receives the model instance; otherwise it receives the raw dict.
        """

        self._handlers[name] = (handler, request_model)

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def _fail(
        self,
        *,
        request_id: str,
        name: str,
        meta: dict[str, Any],
        error: dict[str, Any],
    ) -> EndpointResult:
        add_error(error["type"])
        return EndpointResult(
            request_id=request_id,
            name=name,
            ok=False,
            content=make_content({}, meta=meta),
            error=error,
        )

    def execute(self, *, request_id: str, name: str, arguments: dict[str, Any] | None = None) -> EndpointResult:
        meta = {"request_id": request_id, "endpoint": name}
        args = arguments or {}
        bind_request(request_id=request_id, endpoint=name)
        try:
            return self._execute(request_id=request_id, name=name, args=args, meta=meta)
        finally:
            clear_request()

    def _execute(self, *, request_id: str, name: str, args: dict[str, Any], meta: dict[str, Any]) -> EndpointResult:
        if not self._enabled:
            return self._fail(
                request_id=request_id,
                name=name,
                meta=meta,
                error=normalize_error(error_type="endpoints_disabled", message="endpoints disabled"),
            )

        if self._whitelist and name not in self._whitelist:
            return self._fail(
                request_id=request_id,
                name=name,
                meta=meta,
                error=normalize_error(error_type="not_allowed", message="not in whitelist"),
            )

        entry = self._handlers.get(name)
        if entry is None:
            return self._fail(
                request_id=request_id,
                name=name,
                meta=meta,
                error=normalize_error(error_type="not_found", message="endpoint not registered"),
            )

        handler, request_model = entry
        if request_model is not None:
            try:
                request: Any = request_model.model_validate(args)
            except ValidationError as e:
                self._log.info("endpoint_invalid_request", endpoint=name, errors=e.error_count())
                return self._fail(
                    request_id=request_id,
                    name=name,
                    meta=meta,
                    error=normalize_error(
                        error_type="invalid_request",
                        message=str(e),
                        details={"errors": str(e.error_count())},
                    ),
                )
        else:
            request = args

        try:
            content = make_content(handler(request), meta=meta)
            self._log.info("endpoint_ok", endpoint=name)
            return EndpointResult(request_id=request_id, name=name, ok=True, content=content)
        except EndpointRejected as e:
            self._log.info("endpoint_rejected", endpoint=name, error_type=e.error_type)
            return self._fail(
                request_id=request_id,
                name=name,
                meta=meta,
                error=normalize_error(error_type=e.error_type, message=e.message, details=e.details),
            )
        except Exception as e:  # noqa: BLE001
            self._log.exception("endpoint_error", endpoint=name)
            return self._fail(
                request_id=request_id,
                name=name,
                meta=meta,
                error=normalize_error(error_type=type(e).__name__, message=str(e), details={"exc": repr(e)}),
            )
