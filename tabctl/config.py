"""Runtime settings: defaults, optional JSON config file, env and flag overrides."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional

from tabctl.errors import UsageError

DEFAULT_CFG: Dict = {
    "application": "Google Chrome",
    "osascriptPath": "/usr/bin/osascript",
    "osascriptTimeoutSeconds": 30,
    "closeWindowWithLastTab": True,
    "confirmAddressClose": False,
}

DEFAULT_CONFIG_PATH = "~/.config/tabctl/config.json"


class Mode(Enum):
    CLI = "cli"  # ask in the terminal
    UI = "ui"  # ask with a browser dialog
    YES = "yes"  # answer every question with "y"


@dataclass(frozen=True)
class Settings:
    mode: Mode = Mode.CLI
    prepend_all_item: bool = False
    verbose: bool = False
    application: str = DEFAULT_CFG["application"]
    osascript_path: str = DEFAULT_CFG["osascriptPath"]
    osascript_timeout: float = float(DEFAULT_CFG["osascriptTimeoutSeconds"])
    close_window_with_last_tab: bool = DEFAULT_CFG["closeWindowWithLastTab"]
    confirm_address_close: bool = DEFAULT_CFG["confirmAddressClose"]


def _env_flag(name: str, default: bool = False, env: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if env is None else env
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on", "y"}


def _cfg_bool(value: object, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    v = str(value).strip().lower()
    if v in {"1", "true", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _cfg_timeout(value: object, default: float) -> float:
    try:
        parsed = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def merge_cfg(file_cfg: Dict | None, override_cfg: Dict | None) -> Dict:
    merged = dict(DEFAULT_CFG)
    if file_cfg:
        merged.update(file_cfg)
    if override_cfg:
        merged.update(override_cfg)
    return merged


def config_path(env: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if env is None else env
    return Path(env.get("TABCTL_CONFIG_PATH") or DEFAULT_CONFIG_PATH).expanduser()


def load_cfg(path: Path) -> Dict:
    """Read the optional JSON config file. A missing file means defaults."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise UsageError(f"Invalid config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise UsageError(f"Invalid config file {path}: expected a JSON object")
    return data


def env_overrides(env: Optional[Mapping[str, str]] = None) -> Dict:
    env = os.environ if env is None else env
    out: Dict = {}
    app = (env.get("TABCTL_APP") or "").strip()
    if app:
        out["application"] = app
    osascript = (env.get("TABCTL_OSASCRIPT") or "").strip()
    if osascript:
        out["osascriptPath"] = osascript
    timeout = (env.get("TABCTL_OSASCRIPT_TIMEOUT") or "").strip()
    if timeout:
        out["osascriptTimeoutSeconds"] = timeout
    return out


def build_settings(
    cfg: Dict,
    *,
    mode: Mode = Mode.CLI,
    prepend_all_item: bool = False,
    verbose: bool = False,
) -> Settings:
    default_timeout = float(DEFAULT_CFG["osascriptTimeoutSeconds"])
    return Settings(
        mode=mode,
        prepend_all_item=prepend_all_item,
        verbose=verbose,
        application=str(cfg.get("application") or DEFAULT_CFG["application"]),
        osascript_path=str(cfg.get("osascriptPath") or DEFAULT_CFG["osascriptPath"]),
        osascript_timeout=_cfg_timeout(cfg.get("osascriptTimeoutSeconds"), default_timeout),
        close_window_with_last_tab=_cfg_bool(
            cfg.get("closeWindowWithLastTab"), default=DEFAULT_CFG["closeWindowWithLastTab"]
        ),
        confirm_address_close=_cfg_bool(
            cfg.get("confirmAddressClose"), default=DEFAULT_CFG["confirmAddressClose"]
        ),
    )
