from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = Path.home() / ".centy_tui_config.yaml"
DEFAULT_DAEMON_ADDRESS = "http://127.0.0.1:50051"


def config_path() -> Path:
    override = os.environ.get("CENTY_TUI_CONFIG", "").strip()
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


@dataclass
class TuiConfig:
    issue_sort_field: str = "priority"
    issue_sort_direction: str = "asc"
    pr_sort_field: str = "priority"
    pr_sort_direction: str = "asc"
    show_closed_issues: bool = False
    show_merged_prs: bool = False
    daemon_address: str = ""
    theme: str = "dark"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TuiConfig":
        known = {f.name: f for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            if key not in known or value is None:
                continue
            default = getattr(cls, key)
            kwargs[key] = bool(value) if isinstance(default, bool) else str(value)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Only the keys that differ from the defaults."""
        defaults = asdict(TuiConfig())
        return {k: v for k, v in asdict(self).items() if defaults[k] != v}


def _load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    target = path or config_path()
    if not target.exists():
        return {}
    try:
        data = yaml.safe_load(target.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    target = path or config_path()
    if not data:
        if target.exists():
            target.unlink()
        return
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def load_tui_config(path: Optional[Path] = None) -> TuiConfig:
    return TuiConfig.from_dict(_load_config(path))


def save_tui_config(config: TuiConfig, path: Optional[Path] = None) -> None:
    _save_config(config.to_dict(), path)


def resolve_daemon_address(cli_value: Optional[str] = None, config: Optional[TuiConfig] = None) -> str:
    if cli_value and cli_value.strip():
        return cli_value.strip()
    env_value = os.environ.get("CENTY_DAEMON_ADDRESS", "").strip()
    if env_value:
        return env_value
    if config and config.daemon_address.strip():
        return config.daemon_address.strip()
    return DEFAULT_DAEMON_ADDRESS
