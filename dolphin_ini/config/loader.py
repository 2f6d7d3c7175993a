from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Sequence

import yaml
from dotenv import load_dotenv

from dolphin_ini.core.errors import ConfigError


_ENV_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

PROFILES: dict[str, tuple[str, ...]] = {
    "app": ("app.yaml",),
    "dev": ("app.yaml", "dev.yaml"),
}


@dataclass(frozen=True, slots=True)
class _UnresolvedEnvRef:
    var_name: str
    key_path: str
    reason: str  # "missing" | "empty"


def _deep_merge(base: MutableMapping[str, Any], overlay: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Merge `overlay` into `base`: mappings recursively, everything else replaced."""

    for k, v in overlay.items():
        if isinstance(v, Mapping) and isinstance(base.get(k), Mapping):
            base[k] = _deep_merge(dict(base[k]), v)
        else:
            base[k] = v
    return base


def _load_yaml(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    return yaml.safe_load(text)


def _expand_env(obj: Any, *, key_path: str, unresolved: list[_UnresolvedEnvRef]) -> Any:
    if isinstance(obj, str):

        def repl(match: re.Match[str]) -> str:
            name = match.group(1)
            value = os.getenv(name)
            if value is None or value == "":
                unresolved.append(
                    _UnresolvedEnvRef(
                        var_name=name,
                        key_path=key_path,
                        reason="missing" if value is None else "empty",
                    )
                )
                return match.group(0)
            return value

        return _ENV_PLACEHOLDER_RE.sub(repl, obj)

    if isinstance(obj, Mapping):
        return {
            str(k): _expand_env(v, key_path=f"{key_path}.{k}" if key_path else str(k), unresolved=unresolved)
            for k, v in obj.items()
        }

    if isinstance(obj, list):
        return [
            _expand_env(v, key_path=f"{key_path}[{i}]" if key_path else f"[{i}]", unresolved=unresolved)
            for i, v in enumerate(obj)
        ]

    return obj


def load_config(
    paths: Path | Sequence[Path],
    *,
    load_dotenv_file: bool = True,
    dotenv_path: Path | None = None,
) -> dict[str, Any]:
    """Load YAML config files with strict ${ENV_VAR} expansion.

    Args:
        paths: One or more YAML files. Later files override earlier ones.
        load_dotenv_file: Whether to load a .env file before expansion.
        dotenv_path: Optional explicit .env path. Defaults to `.env` in the
            current working directory.

    Raises:
        ConfigError: If a file is missing or invalid, or a referenced env var
            is missing or empty.
    """

    file_list: list[Path] = [Path(paths)] if isinstance(paths, (str, Path)) else [Path(p) for p in paths]
    if not file_list:
        raise ConfigError("No config files provided")

    if load_dotenv_file:
        # Never override variables that are already set.
        load_dotenv(dotenv_path or Path.cwd() / ".env", override=False)

    merged: dict[str, Any] = {}
    for p in file_list:
        if not p.exists():
            raise ConfigError("Config file not found", path=str(p))
        try:
            fragment = _load_yaml(p)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read YAML config: {e}", path=str(p)) from e

        if fragment is None:
            fragment = {}
        if not isinstance(fragment, Mapping):
            raise ConfigError("Top-level YAML must be a mapping", path=str(p))

        merged = dict(_deep_merge(merged, fragment))

    unresolved: list[_UnresolvedEnvRef] = []
    expanded = _expand_env(merged, key_path="", unresolved=unresolved)

    if unresolved:
        lines = ["Unresolved environment variables in config:"]
        for ref in unresolved:
            lines.append(f"- {ref.var_name} ({ref.reason}) at {ref.key_path or '<root>'}")
        raise ConfigError("\n".join(lines))

    return expanded


def resolve_profile_configs(*, profile: str, configs_dir: Path) -> list[Path]:
    """Resolve the config file list for `profile`.

    - app -> [configs/app.yaml]
    - dev -> [configs/app.yaml, configs/dev.yaml]
    """

    names = PROFILES.get(profile)
    if names is None:
        raise ConfigError(f"Unknown profile: {profile}")
    return [configs_dir / name for name in names]
