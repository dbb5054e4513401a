"""MCP 프로토콜 계층: stdio 및 Streamable HTTP 서버"""

from .server import GraphMCPServer

__all__ = ["GraphMCPServer"]
