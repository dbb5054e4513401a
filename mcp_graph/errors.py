"""
Graph MCP exceptions
mcp_graph 전체에서 사용하는 예외 클래스
"""

from typing import Optional


class GraphMcpError(Exception):
    """Base class for every error raised by mcp_graph"""


class CatalogError(GraphMcpError):
    """The endpoint catalog file is missing or malformed"""


class RegistryFrozenError(GraphMcpError):
    """An override was registered after the registry was frozen"""


class AuthenticationError(GraphMcpError):
    """No usable access token could be obtained"""


class GraphApiError(GraphMcpError):
    """Microsoft Graph answered with a non-2xx status"""

    def __init__(self, status: int, message: str, body: Optional[str] = None):
        self.status = status
        self.body = body
        super().__init__(f"Microsoft Graph API error: {status} {message}" + (f" - {body}" if body else ""))
