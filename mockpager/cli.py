"""Command-line entry point for the mock pagination server."""

from __future__ import annotations

import argparse
import dataclasses
import sys

from .config import ConfigError, load_config
from .logger import create_new_logger
from .paging import PaginatorError
from .router import RouteSetupError
from .server import run_server


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mockpager", description="Serve paginated mock API responses."
    )
    parser.add_argument("--config", help="configuration file (default: $CONFIG_FILE_PATH)")
    parser.add_argument("--port", type=int, help="port to listen on (default: $PORT)")
    parser.add_argument(
        "--base-dir",
        help="directory response files are resolved against "
        "(default: the parent of the working directory)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Load the configuration and serve it until a shutdown signal."""
    args = _parser().parse_args(argv)

    log = create_new_logger()
    log.info("logger successfully initialized")

    try:
        config = load_config(args.config)
    except (OSError, ConfigError) as exc:
        log.error("Error loading config", exc)
        return 1
    log.info("config successfully loaded", {"config": dataclasses.asdict(config)})

    try:
        run_server(config, args.port, args.base_dir)
    except (PaginatorError, RouteSetupError, OSError, RuntimeError, ValueError) as exc:
        log.error("Server error", exc)
        return 1

    log.info("Received shutdown signal")
    return 0


if __name__ == "__main__":
    sys.exit(main())