#!/usr/bin/env python3
"""Entry point: parse arguments, configure logging, start the TUI."""

import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from pathlib import Path
from typing import List, Optional

from config import load_tui_config, resolve_daemon_address
from core.desktop.interface.cli_parser import build_parser
from core.desktop.interface.tui_app import cmd_tui
from core.desktop.interface.tui_themes import DEFAULT_THEME, THEMES
from infrastructure.daemon_client import DaemonClient

DEFAULT_LOG_FILE = Path.home() / ".centy_tui.log"


def configure_logging() -> None:
    """File logging when CENTY_TUI_LOG names a level; silent otherwise (the TUI owns the terminal)."""
    root = logging.getLogger("centy_tui")
    level_name = os.environ.get("CENTY_TUI_LOG", "").strip().upper()
    if not level_name:
        root.addHandler(logging.NullHandler())
        root.propagate = False
        return
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    log_file = Path(os.environ.get("CENTY_TUI_LOG_FILE", "").strip() or DEFAULT_LOG_FILE).expanduser()
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser(THEMES, DEFAULT_THEME)
    args = parser.parse_args(argv)
    if args.version:
        try:
            print(pkg_version("centy-tui"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    configure_logging()
    config = load_tui_config()
    address = resolve_daemon_address(args.daemon_address, config)
    logging.getLogger("centy_tui.tui").info("connecting to daemon at %s", address)
    return cmd_tui(args, DaemonClient(address), config)


if __name__ == "__main__":
    sys.exit(main())
