from __future__ import annotations


class DolphinIniError(Exception):
    """Base exception for this project."""


class ConfigError(DolphinIniError):
    """Raised when configuration is invalid or incomplete."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class GeckoCodeError(DolphinIniError):
    """Raised for a malformed Gecko code line when parsing strictly."""

    def __init__(self, message: str, *, line: str | None = None):
        super().__init__(f"{message}: {line!r}" if line is not None else message)
        self.line = line
