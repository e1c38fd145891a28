"""CLI parser construction for the centy TUI."""

import argparse
from typing import Any, Mapping


def build_parser(themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="centy-tui",
        description="Terminal client for the centy daemon: projects, issues, pull requests and docs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Environment:\n"
            "  CENTY_DAEMON_ADDRESS  daemon URL (overridden by --daemon-address)\n"
            "  CENTY_TUI_CONFIG      path of the YAML preferences file\n"
            "  CENTY_TUI_LOG         log level; enables logging to CENTY_TUI_LOG_FILE"
        ),
    )
    parser.add_argument("--theme", choices=list(themes.keys()), default=None, help=f"palette (default: {default_theme})")
    parser.add_argument("--daemon-address", dest="daemon_address", metavar="URL", help="centy daemon address")
    parser.add_argument("--version", action="store_true", help="print version and exit")
    return parser
