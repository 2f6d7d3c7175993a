"""Endpoints exposing INI and Gecko code operations.

Each request is a full load/modify/save cycle on a fresh `IniFile`; nothing is
cached between requests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from dolphin_ini.config.model import AppConfig, DolphinConfig
from dolphin_ini.gecko.store import load_codes, save_codes
from dolphin_ini.ini.document import IniFile
from dolphin_ini.observability.logging import get_logger

from .registry import EndpointRegistry, EndpointRejected
from .requests import (
    FetchGeckoCodesRequest,
    FetchSysInisRequest,
    KeyRequest,
    SectionRequest,
    SetLinesRequest,
    SetValueRequest,
    UpdateGeckosRequest,
)


_log = get_logger("dolphin_ini.ipc.endpoints")


def _success(**extra: Any) -> dict[str, Any]:
    return {"success": True, **extra}


def _load(path: Path) -> IniFile:
    ini = IniFile()
    if path.exists():
        ini.load(path, log=_log)
    return ini


def _save(ini: IniFile, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    ini.save(path, log=_log)


class IniEndpoints:
    def __init__(self, dolphin: DolphinConfig) -> None:
        self._dolphin = dolphin

    def _game_ini(self, base: Path, ini_name: str) -> Path:
        if Path(ini_name).name != ini_name or ini_name in {".", ".."}:
            raise EndpointRejected("invalid_ini_name", f"not a plain file name: {ini_name!r}")
        return base / ini_name

    def fetch_gecko_codes(self, req: FetchGeckoCodesRequest) -> dict[str, Any]:
        global_path = self._game_ini(self._dolphin.sys_game_settings, req.ini_name)
        local_path = self._game_ini(self._dolphin.user_game_settings, req.ini_name)

        codes = load_codes(
            global_path if global_path.exists() else None,
            local_path if local_path.exists() else None,
            log=_log,
        )
        return {"codes": codes}

    def update_geckos(self, req: UpdateGeckosRequest) -> dict[str, Any]:
        """Rewrite the Gecko sections of the user's game INI.

        The rest of the file goes through `IniFile` load/save, so other code
        bodies without `=` (`[ActionReplay]`, `[OnFrame]`) come back as a
        single `=` line.
        """

        local_path = self._game_ini(self._dolphin.user_game_settings, req.ini_name)
        ini = _load(local_path)
        save_codes(ini, req.codes)
        _save(ini, local_path)
        _log.info("geckos_updated", ini_name=req.ini_name, codes=len(req.codes))
        return _success()

    def fetch_sys_inis(self, req: FetchSysInisRequest) -> dict[str, Any]:
        game_settings = self._dolphin.sys_game_settings
        if not game_settings.is_dir():
            raise EndpointRejected("not_found", f"GameSettings directory not found: {game_settings}")
        return {"sysInis": sorted(p.name for p in game_settings.glob("*.ini") if p.is_file())}

    def read_section(self, req: SectionRequest) -> dict[str, Any]:
        ini = _load(Path(req.path))
        section = ini.get_section(req.section)
        if section is None:
            return {"exists": False, "keys": [], "values": {}, "lines": []}
        return {
            "exists": True,
            "keys": section.keys(),
            "values": dict(section.items()),
            "lines": section.get_lines(),
        }

    def set_value(self, req: SetValueRequest) -> dict[str, Any]:
        path = Path(req.path)
        ini = _load(path)
        ini.set(req.section, req.key, req.value)
        _save(ini, path)
        return _success()

    def delete_key(self, req: KeyRequest) -> dict[str, Any]:
        path = Path(req.path)
        ini = _load(path)
        deleted = ini.delete_key(req.section, req.key)
        if deleted:
            _save(ini, path)
        return _success(deleted=deleted)

    def delete_section(self, req: SectionRequest) -> dict[str, Any]:
        path = Path(req.path)
        ini = _load(path)
        deleted = ini.delete_section(req.section)
        if deleted:
            _save(ini, path)
        return _success(deleted=deleted)

    def set_lines(self, req: SetLinesRequest) -> dict[str, Any]:
        path = Path(req.path)
        ini = _load(path)
        ini.set_lines(req.section, req.lines)
        _save(ini, path)
        return _success()


def build_registry(cfg: AppConfig) -> EndpointRegistry:
    """Create a registry with every endpoint wired to `cfg`."""

    endpoints = IniEndpoints(cfg.dolphin)
    registry = EndpointRegistry(enabled=cfg.endpoints.enabled, whitelist=cfg.endpoints.whitelist)

    registry.register("fetchGeckoCodes", endpoints.fetch_gecko_codes, request_model=FetchGeckoCodesRequest)
    registry.register("updateGeckos", endpoints.update_geckos, request_model=UpdateGeckosRequest)
    registry.register("fetchSysInis", endpoints.fetch_sys_inis, request_model=FetchSysInisRequest)
    registry.register("readIniSection", endpoints.read_section, request_model=SectionRequest)
    registry.register("setIniValue", endpoints.set_value, request_model=SetValueRequest)
    registry.register("deleteIniKey", endpoints.delete_key, request_model=KeyRequest)
    registry.register("deleteIniSection", endpoints.delete_section, request_model=SectionRequest)
    registry.register("setIniLines", endpoints.set_lines, request_model=SetLinesRequest)

    return registry
