"""CLI entrypoint for the driver dashboard."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from importlib import metadata
from pathlib import Path

from .app import DashboardApp
from .config import VALID_VIEWS, ensure_config_dir, load_config


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="driver-dashboard",
        description="Driver Dashboard - daily earnings calculator for ride-hailing drivers",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="Read configuration from PATH instead of ~/.config/driver-dashboard/config.toml",
    )
    parser.add_argument(
        "--view",
        choices=sorted(VALID_VIEWS),
        help="View to open on start (overrides ui.initial_view)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Ensure configuration exists, load it, apply CLI overrides, and run the TUI."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version:
        try:
            version = metadata.version("driver-dashboard")
        except metadata.PackageNotFoundError:
            version = "0.0.0"
        print(f"driver-dashboard {version}")
        return

    ensure_config_dir()
    config = load_config(args.config)
    if args.view:
        config["ui"]["initial_view"] = args.view
    app = DashboardApp(config=config)
    app.run()


if __name__ == "__main__":
    main()
