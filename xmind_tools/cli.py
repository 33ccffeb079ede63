"""Command-line interface for xmind-tools."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from .config import load_settings


def configure_logging(level: str) -> None:
    # stdout carries the MCP protocol, so logs go to stderr only
    logger.remove()
    logger.add(sys.stderr, level=level)


def main(argv=None):
    settings = load_settings()

    parser = argparse.ArgumentParser(
        prog="xmind-tools",
        description="Build mind maps over MCP and save them as .xmind files",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # --- serve ---
    p_serve = sub.add_parser("serve", help="Run the MCP server on stdio")
    p_serve.add_argument("--name", default=settings.server_name, help="Server name reported to clients")
    p_serve.add_argument(
        "--output-dir",
        default=str(settings.output_dir),
        help="Base directory for relative save paths (default: current directory)",
    )
    p_serve.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"Log level (default: {settings.log_level})",
    )

    args = parser.parse_args(argv)

    if args.command == "serve":
        settings.server_name = args.name
        settings.output_dir = Path(args.output_dir).expanduser()
        settings.log_level = args.log_level
        cmd_serve(settings)


def cmd_serve(settings):
    from .server import run

    configure_logging(settings.log_level)
    try:
        run(settings)
    except KeyboardInterrupt:
        logger.info("MCP server stopped")


if __name__ == "__main__":
    main()
