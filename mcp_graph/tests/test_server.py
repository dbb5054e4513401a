"""
GraphMCPServer tests
Runs against FakeGraphClient and the tiny catalog; nothing leaves the process
"""

import json
from importlib.metadata import version

import pytest
from fastapi.testclient import TestClient
from mcp import types

from conftest import FakeGraphClient, json_response

from mcp_graph.config import Settings
from mcp_graph.mcp_server import GraphMCPServer
from mcp_graph.mcp_server.run import build_parser
from mcp_graph.override_registry import OverrideRegistry


class StubTokenProvider:
    def __init__(self):
        self.closed = False

    async def get_access_token(self):
        return "token"

    async def close(self):
        self.closed = True


def make_server(tiny_catalog, client=None, **settings):
    return GraphMCPServer(
        settings=Settings(settings),
        token_provider=StubTokenProvider(),
        graph_client=client or FakeGraphClient(),
        catalog=tiny_catalog,
        overrides=OverrideRegistry(),
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("READ_ONLY", "MS365_MCP_ORG_MODE", "ENABLED_TOOLS"):
        monkeypatch.delenv(name, raising=False)


class TestToolSet:

    def test_settings_drive_registration(self, tiny_catalog):
        assert make_server(tiny_catalog).tools.names() == [
            "list-things", "get-thing", "create-thing", "download-thing",
        ]
        assert "create-thing" not in make_server(tiny_catalog, read_only=True).tools
        assert "list-org-things" in make_server(tiny_catalog, org_mode=True).tools
        assert make_server(tiny_catalog, enabled_tools="-thing$").tools.names() == [
            "get-thing", "create-thing", "download-thing",
        ]


class TestHandlers:

    @pytest.mark.asyncio
    async def test_list_tools(self, tiny_catalog):
        server = make_server(tiny_catalog)
        handler = server.server.request_handlers[types.ListToolsRequest]

        result = await handler(types.ListToolsRequest(method="tools/list"))

        names = [tool.name for tool in result.root.tools]
        assert names == server.tools.names()

    @pytest.mark.asyncio
    async def test_call_tool_through_protocol_handler(self, tiny_catalog):
        client = FakeGraphClient(json_response({"value": [1]}))
        server = make_server(tiny_catalog, client)
        handler = server.server.request_handlers[types.CallToolRequest]

        result = await handler(types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name="list-things", arguments={"top": 1}),
        ))

        assert result.root.isError is False
        assert json.loads(result.root.content[0].text) == {"value": [1]}
        assert client.last_path == "/me/things?$top=1"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, tiny_catalog):
        result = await make_server(tiny_catalog).call_tool("no-such-tool", {})

        assert result.isError is True
        assert "Error in tool no-such-tool: Unknown tool: no-such-tool" in result.content[0].text

    @pytest.mark.asyncio
    async def test_close_releases_clients(self, tiny_catalog):
        client = FakeGraphClient()
        server = make_server(tiny_catalog, client)

        await server.close()

        assert client.closed is True
        assert server.token_provider.closed is True


class TestHttpApp:

    def test_health(self, tiny_catalog):
        app = make_server(tiny_catalog).create_http_app()
        response = TestClient(app).get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "server": "ms365-graph-mcp", "tools": 4}


class TestCommandLine:

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.http is None
        assert args.read_only is None
        assert args.list_tools is False

    def test_http_with_and_without_port(self):
        assert build_parser().parse_args(["--http"]).http == 0
        assert build_parser().parse_args(["--http", "8080"]).http == 8080

    def test_filters(self):
        args = build_parser().parse_args(["--read-only", "--org-mode", "--enabled-tools", "mail"])
        assert args.read_only is True
        assert args.org_mode is True
        assert args.enabled_tools == "mail"


def test_supported_mcp_major_version():
    # Server.list_tools / call_tool decorators exist only in the 1.x SDK
    assert version("mcp").split(".")[0] == "1"
