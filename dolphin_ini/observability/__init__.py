from __future__ import annotations

from .context import add_error, bind_request, clear_request
from .logging import JsonFormatter, KVLogger, configure_logging, get_logger

__all__ = [
    "JsonFormatter",
    "KVLogger",
    "add_error",
    "bind_request",
    "clear_request",
    "configure_logging",
    "get_logger",
]
