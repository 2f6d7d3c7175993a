from __future__ import annotations

import argparse
import json
import logging
import sys
import uuid
from pathlib import Path
from typing import Any, Sequence

from dolphin_ini.config.loader import load_config, resolve_profile_configs
from dolphin_ini.config.model import AppConfig, build_app_config
from dolphin_ini.core.errors import ConfigError
from dolphin_ini.ini.document import IniFile
from dolphin_ini.ipc.endpoints import build_registry
from dolphin_ini.observability.logging import configure_logging


logger = logging.getLogger(__name__)

# Commands that operate on a single file and need no config.
_FILE_COMMANDS = {"show", "get", "set"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dolphin-ini",
        description="Read and edit Dolphin INI files and Gecko codes",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING); defaults to the config value",
    )

    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML config file (skips profile resolution)",
    )
    group.add_argument(
        "--profile",
        choices=["app", "dev"],
        default="app",
        help="Config profile under ./configs (app loads app.yaml; dev overlays dev.yaml)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("print-config", help="Load and print the expanded config")

    show_p = sub.add_parser("show", help="Print an INI file as it would be saved")
    show_p.add_argument("path", type=Path)
    show_p.add_argument("--section", default=None, help="Only print this section")

    get_p = sub.add_parser("get", help="Print one value")
    get_p.add_argument("path", type=Path)
    get_p.add_argument("section")
    get_p.add_argument("key")
    get_p.add_argument("--default", default="")

    set_p = sub.add_parser("set", help="Set one value and save the file")
    set_p.add_argument("path", type=Path)
    set_p.add_argument("section")
    set_p.add_argument("key")
    set_p.add_argument("value")

    geckos_p = sub.add_parser("geckos", help="List Gecko codes for a game INI")
    geckos_p.add_argument("ini_name", help="Game INI file name, e.g. GALE01.ini")

    call_p = sub.add_parser("call", help="Invoke an endpoint and print the result")
    call_p.add_argument("endpoint")
    call_p.add_argument("arguments", nargs="?", default="{}", help="JSON object of request arguments")

    return parser


def _write_json(obj: Any) -> None:
    sys.stdout.write(json.dumps(obj, ensure_ascii=False, indent=2))
    sys.stdout.write("\n")


def _load_app_config(ns: argparse.Namespace) -> tuple[dict[str, Any], AppConfig]:
    if ns.config is not None:
        config_paths = [ns.config]
    else:
        config_paths = resolve_profile_configs(profile=ns.profile, configs_dir=Path.cwd() / "configs")

    raw = load_config(config_paths)
    cfg = build_app_config(raw)
    logger.info("config_loaded", extra={"config_files": [str(p) for p in config_paths]})
    return raw, cfg


def _run_file_command(ns: argparse.Namespace) -> int:
    ini = IniFile()
    ini.load(ns.path)

    if ns.command == "show":
        if ns.section is None:
            sys.stdout.write(ini.dumps())
            return 0
        if not ini.exists(ns.section):
            sys.stderr.write(f"No such section: {ns.section}\n")
            return 1
        for name in ini.section_names():
            if name != ns.section:
                ini.delete_section(name)
        sys.stdout.write(ini.dumps())
        return 0

    if ns.command == "get":
        sys.stdout.write(ini.get(ns.section, ns.key, ns.default))
        sys.stdout.write("\n")
        return 0

    ini.set(ns.section, ns.key, ns.value)
    ini.save(ns.path)
    logger.info("ini_value_set", extra={"path": str(ns.path), "section": ns.section, "key": ns.key})
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint referenced by pyproject.toml."""

    parser = _build_parser()

    try:
        ns = parser.parse_args(list(argv) if argv is not None else None)
    except SystemExit as e:
        code = e.code
        return int(code) if isinstance(code, int) else 1

    configure_logging(level=ns.log_level or "INFO")

    try:
        if ns.command in _FILE_COMMANDS:
            return _run_file_command(ns)

        raw, cfg = _load_app_config(ns)
        if ns.log_level is None:
            configure_logging(level=cfg.logging.level)

        if ns.command == "print-config":
            _write_json(raw)
            return 0

        registry = build_registry(cfg)

        if ns.command == "geckos":
            result = registry.execute(
                request_id=uuid.uuid4().hex, name="fetchGeckoCodes", arguments={"iniName": ns.ini_name}
            )
            if not result.ok:
                _write_json(result.to_dict())
                return 1
            _write_json(result.content["data"]["codes"])
            return 0

        try:
            arguments = json.loads(ns.arguments)
        except json.JSONDecodeError as e:
            sys.stderr.write(f"Invalid JSON arguments: {e}\n")
            return 2
        if not isinstance(arguments, dict):
            sys.stderr.write("Endpoint arguments must be a JSON object\n")
            return 2

        result = registry.execute(request_id=uuid.uuid4().hex, name=ns.endpoint, arguments=arguments)
        _write_json(result.to_dict())
        return 0 if result.ok else 1

    except ConfigError as e:
        logger.error("config_error", extra={"error": str(e)})
        sys.stderr.write(f"ConfigError: {e}\n")
        return 2
    except Exception as e:  # noqa: BLE001
        logger.exception("fatal_error")
        sys.stderr.write(f"Fatal error: {e}\n")
        return 1
