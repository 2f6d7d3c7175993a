from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from dolphin_ini.core.errors import ConfigError


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class DolphinConfig:
    """Where Dolphin keeps its INI files.

    `user_dir` is the writable User directory (Config/, GameSettings/);
    `sys_dir` is the read-only Sys directory shipped with the build.
    """

    user_dir: Path
    sys_dir: Path

    @property
    def user_game_settings(self) -> Path:
        return self.user_dir / "GameSettings"

    @property
    def sys_game_settings(self) -> Path:
        return self.sys_dir / "GameSettings"


@dataclass(frozen=True)
class EndpointsConfig:
    enabled: bool = True
    whitelist: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    dolphin: DolphinConfig
    endpoints: EndpointsConfig = field(default_factory=EndpointsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError("must be a mapping", path=key)
    return value


def _require_str(d: Mapping[str, Any], key: str, *, path: str) -> str:
    value = d.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError("must be a non-empty string", path=f"{path}.{key}")
    return value


def build_app_config(raw: Mapping[str, Any]) -> AppConfig:
    """Turn the expanded YAML mapping into a typed `AppConfig`."""

    dolphin_raw = _section(raw, "dolphin")
    dolphin = DolphinConfig(
        user_dir=Path(_require_str(dolphin_raw, "user_dir", path="dolphin")).expanduser(),
        sys_dir=Path(_require_str(dolphin_raw, "sys_dir", path="dolphin")).expanduser(),
    )

    endpoints_raw = _section(raw, "endpoints")
    whitelist = endpoints_raw.get("whitelist", [])
    if whitelist is None:
        whitelist = []
    if not isinstance(whitelist, list) or not all(isinstance(x, str) for x in whitelist):
        raise ConfigError("must be a list of strings", path="endpoints.whitelist")
    endpoints = EndpointsConfig(
        enabled=bool(endpoints_raw.get("enabled", EndpointsConfig.enabled)),
        whitelist=list(whitelist),
    )

    logging_raw = _section(raw, "logging")
    level = str(logging_raw.get("level", LoggingConfig.level)).upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"unknown log level {level!r}", path="logging.level")

    return AppConfig(dolphin=dolphin, endpoints=endpoints, logging=LoggingConfig(level=level))
