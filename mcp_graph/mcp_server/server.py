"""MCP server exposing Microsoft Graph endpoints as tools."""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Iterable, List, Optional

import uvicorn
from fastapi import FastAPI
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from mcp.types import CallToolResult, Tool

from core.protocols import TokenProviderProtocol
from session import AuthManager

from ..config import Settings
from ..graph_client import GraphClient
from ..graph_types import EndpointDescriptor
from ..override_registry import OverrideRegistry
from ..response_normalizer import error_result
from ..tool_binder import ToolRegistry, register_graph_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "ms365-graph-mcp"


class GraphMCPServer:
    """MCP server for Microsoft 365 Graph tools."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        token_provider: Optional[TokenProviderProtocol] = None,
        graph_client: Optional[GraphClient] = None,
        catalog: Optional[Iterable[EndpointDescriptor]] = None,
        overrides: Optional[OverrideRegistry] = None,
    ):
        """Initialize MCP server.

        Args:
            settings: Server settings (environment defaults if omitted)
            token_provider: Access token source (AuthManager if omitted)
            graph_client: Transport client (built from settings if omitted)
            catalog: Endpoint catalog (packaged catalog if omitted)
            overrides: Override registry (default overrides if omitted)
        """
        self.settings = settings or Settings()
        self.token_provider = token_provider or AuthManager()
        self.graph_client = graph_client or GraphClient(
            self.token_provider,
            base_url=self.settings['graph_base_url'],
            timeout=self.settings['request_timeout'],
        )

        self.tools = register_graph_tools(
            ToolRegistry(),
            self.graph_client,
            read_only=self.settings['read_only'],
            enabled_tools_pattern=self.settings['enabled_tools'],
            org_mode=self.settings['org_mode'],
            catalog=catalog,
            overrides=overrides,
        )

        self.server = Server(SERVER_NAME)
        self._setup_handlers()

    def _setup_handlers(self):
        """Setup MCP server handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[Tool]:
            return self.tools.list_mcp_tools()

        # Arguments are validated by each tool's own pydantic model
        @self.server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> CallToolResult:
            return await self.call_tool(name, arguments)

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        tool = self.tools.get(name)
        if tool is None:
            logger.warning(f"Unknown tool requested: {name}")
            return error_result(name, ValueError(f"Unknown tool: {name}"))
        return await tool(arguments)

    async def close(self):
        """Release the Graph and token sessions."""
        await self.graph_client.close()
        await self.token_provider.close()

    async def run_stdio(self):
        """Serve MCP over stdin/stdout."""
        logger.info(f"Starting {SERVER_NAME} on stdio with {len(self.tools)} tools")
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.close()

    def create_http_app(self) -> FastAPI:
        """FastAPI app with the Streamable HTTP endpoint at /mcp."""
        session_manager = StreamableHTTPSessionManager(app=self.server, stateless=True)

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            async with session_manager.run():
                logger.info(f"{SERVER_NAME} HTTP transport started")
                yield
            await self.close()
            logger.info(f"{SERVER_NAME} HTTP transport stopped")

        app = FastAPI(title="Microsoft 365 Graph MCP Server", version="1.0.0", lifespan=lifespan)

        @app.get("/health")
        async def health_check():
            return {"status": "healthy", "server": SERVER_NAME, "tools": len(self.tools)}

        async def handle_mcp(scope, receive, send):
            await session_manager.handle_request(scope, receive, send)

        app.mount("/mcp", app=handle_mcp)
        return app

    async def run_http(self, host: Optional[str] = None, port: Optional[int] = None):
        """Serve MCP over Streamable HTTP with uvicorn."""
        host = host or self.settings['http_host']
        port = port or self.settings['http_port']
        logger.info(f"Starting {SERVER_NAME} on http://{host}:{port}/mcp with {len(self.tools)} tools")

        config = uvicorn.Config(self.create_http_app(), host=host, port=port, log_level="info")
        await uvicorn.Server(config).serve()
