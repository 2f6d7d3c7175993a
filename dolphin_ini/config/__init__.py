"""Configuration loading and schema.

- YAML-first configuration under configs/*.yaml
- Strict ${ENV_VAR} expansion (missing/empty env vars are errors)
"""

from __future__ import annotations

from dolphin_ini.config.loader import load_config, resolve_profile_configs
from dolphin_ini.config.model import AppConfig, DolphinConfig, EndpointsConfig, LoggingConfig, build_app_config
from dolphin_ini.core.errors import ConfigError

__all__ = [
    "AppConfig",
    "ConfigError",
    "DolphinConfig",
    "EndpointsConfig",
    "LoggingConfig",
    "build_app_config",
    "load_config",
    "resolve_profile_configs",
]
