#!/usr/bin/env python3
"""
Entry point for the CHUK Tuning MCP Server.

Runs the tuning tools over stdio (for MCP clients) or http. A settings
file can be passed with --settings; otherwise tuning.yaml in the working
directory is used when present.
"""

import argparse
import asyncio
import logging
import os

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SETTINGS_ENV = "CHUK_TUNING_SETTINGS"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CHUK Tuning MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument("--port", type=int, default=8000, help="HTTP port (http transport only)")
    parser.add_argument("--settings", help="YAML settings file (device id, preset, chunk size, port)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main() -> None:
    """Parse arguments, then import and run the server."""
    args = build_parser().parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.settings:
        os.environ[SETTINGS_ENV] = args.settings

    # The server reads its settings at import
    from chuk_mcp_tuning.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Tuning MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Tuning MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
