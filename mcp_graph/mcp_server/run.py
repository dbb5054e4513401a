#!/usr/bin/env python
"""
MCP Server Launcher
Microsoft 365 Graph MCP 서버를 stdio 또는 Streamable HTTP로 실행
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from ..config import Settings, load_env_file
from ..endpoint_catalog import load_endpoint_catalog, required_scopes
from ..utils.logger import setup_logger
from .server import GraphMCPServer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ms365-graph-mcp",
        description="Expose Microsoft Graph endpoints as MCP tools",
    )
    parser.add_argument("--read-only", action="store_true", default=None,
                        help="Only register GET endpoints")
    parser.add_argument("--enabled-tools", metavar="PATTERN",
                        help="Regex of tool names to register (case-insensitive)")
    parser.add_argument("--org-mode", action="store_true", default=None,
                        help="Include tools that need a work or school account")
    parser.add_argument("--http", nargs="?", const=0, type=int, metavar="PORT",
                        help="Serve Streamable HTTP instead of stdio (default port 3000)")
    parser.add_argument("--list-tools", action="store_true",
                        help="Print the tools that would be registered and exit")
    parser.add_argument("--env-file", help="Path to a .env file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging")
    return parser


def list_tools(server: GraphMCPServer) -> None:
    catalog = load_endpoint_catalog()
    for tool in server.tools:
        access = "read" if tool.read_only_hint else "write"
        print(f"{tool.name:45} {access:5} {tool.endpoint.http_method:6} {tool.endpoint.path}")
    print(f"\n{len(server.tools)} tools")
    print(f"Scopes: {' '.join(required_scopes(catalog, server.settings['org_mode']))}")


def main(argv: Optional[List[str]] = None) -> int:
    """Launch the MCP server"""
    args = build_parser().parse_args(argv)
    load_env_file(args.env_file)

    settings = Settings({
        'read_only': args.read_only,
        'org_mode': args.org_mode,
        'enabled_tools': args.enabled_tools,
        'log_level': 'DEBUG' if args.verbose else None,
    })
    for warning in settings.validate()['warnings']:
        print(f"[WARN] {warning}", file=sys.stderr)

    setup_logger(
        level=settings['log_level'],
        log_file=settings['log_file'],
        silent=settings['silent'],
    )

    server = GraphMCPServer(settings)

    if args.list_tools:
        list_tools(server)
        return 0

    try:
        if args.http is not None:
            asyncio.run(server.run_http(port=args.http or None))
        else:
            asyncio.run(server.run_stdio())
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    return 0


if __name__ == "__main__":
    sys.exit(main())
