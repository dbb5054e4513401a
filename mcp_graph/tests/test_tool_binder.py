"""
Tool Binder tests
"""

import json

import pytest

from conftest import FakeGraphClient, json_response, make_endpoint, param

from mcp_graph.endpoint_catalog import load_endpoint_catalog
from mcp_graph.graph_types import OverrideRecord, ParameterDeclaration, ParamSchema, ParamType
from mcp_graph.override_registry import OverrideRegistry
from mcp_graph.tool_binder import (
    ToolRegistry,
    build_effective_schema,
    describe,
    register_graph_tools,
)


def bind(catalog, client=None, overrides=None, **kwargs):
    return register_graph_tools(
        ToolRegistry(),
        client or FakeGraphClient(),
        catalog=catalog,
        overrides=overrides or OverrideRegistry(),
        **kwargs,
    )


class TestEffectiveSchema:

    def test_mechanical_schema_plus_fetch_all_pages(self, tiny_catalog):
        schema = build_effective_schema(tiny_catalog[0])
        assert list(schema) == ["top", "filter", "fetchAllPages"]

    def test_no_fetch_all_pages_for_writes(self, tiny_catalog):
        assert list(build_effective_schema(tiny_catalog[2])) == ["body"]

    def test_undeclared_schema_accepts_anything(self):
        endpoint = make_endpoint(parameters=[ParameterDeclaration("x", ParamType.QUERY)])
        assert build_effective_schema(endpoint)["x"] == ParamSchema.any()

    def test_body_transform_removes_body_params(self):
        endpoint = make_endpoint("create", "post", "/t/{id}", [
            param("id", "Path", str, required=True),
            param("subject", "Body", str),
            param("body", "Body", dict),
        ])
        override = OverrideRecord(schema={"title": ParamSchema(str)}, body_transform=lambda p: {})

        assert list(build_effective_schema(endpoint, override)) == ["id", "title"]

    def test_query_transform_removes_query_params(self, tiny_catalog):
        override = OverrideRecord(schema={"count": ParamSchema(int)}, query_transform=lambda p: {})
        assert list(build_effective_schema(tiny_catalog[0], override)) == ["fetchAllPages", "count"]

    def test_override_schema_can_readd_names(self, tiny_catalog):
        override = OverrideRecord(schema={"top": ParamSchema(str)}, query_transform=lambda p: {})
        assert build_effective_schema(tiny_catalog[0], override)["top"].annotation is str

    def test_override_without_schema_keeps_mechanical(self, tiny_catalog):
        override = OverrideRecord(description="d", query_transform=lambda p: {})
        assert "top" in build_effective_schema(tiny_catalog[0], override)

    def test_description_fallbacks(self, tiny_catalog):
        endpoint = tiny_catalog[0]
        assert describe(endpoint, OverrideRecord(description="Custom")) == "Custom"
        assert describe(endpoint) == "Execute GET request to /me/things"


class TestRegistration:

    def test_registers_everything_in_catalog_order(self, tiny_catalog):
        registry = bind(tiny_catalog, org_mode=True)
        assert registry.names() == [e.tool_name for e in tiny_catalog]

    def test_work_tools_need_org_mode(self, tiny_catalog):
        assert "list-org-things" not in bind(tiny_catalog)
        assert "list-org-things" in bind(tiny_catalog, org_mode=True)

    def test_read_only_mode(self, tiny_catalog):
        registry = bind(tiny_catalog, read_only=True)
        assert "create-thing" not in registry
        assert all(tool.read_only_hint for tool in registry)

    def test_name_filter_is_case_insensitive(self, tiny_catalog):
        registry = bind(tiny_catalog, enabled_tools_pattern="^GET-")
        assert registry.names() == ["get-thing"]

    def test_invalid_filter_disables_filtering(self, tiny_catalog):
        registry = bind(tiny_catalog, enabled_tools_pattern="[unclosed")
        assert len(registry) == 4

    def test_mcp_tool_shape(self, tiny_catalog):
        tool = bind(tiny_catalog).get("get-thing")
        mcp_tool = tool.to_mcp_tool()

        assert mcp_tool.name == "get-thing"
        assert mcp_tool.annotations.readOnlyHint is True
        assert mcp_tool.annotations.title == "get-thing"
        assert set(mcp_tool.inputSchema["properties"]) == {"thing-id", "fetchAllPages"}
        assert mcp_tool.inputSchema["required"] == ["thing-id"]

    def test_write_tool_hint(self, tiny_catalog):
        assert bind(tiny_catalog).get("create-thing").read_only_hint is False


class TestInvocation:

    @pytest.mark.asyncio
    async def test_success(self, tiny_catalog):
        client = FakeGraphClient(json_response({"value": [1]}))
        tool = bind(tiny_catalog, client).get("list-things")

        result = await tool({"top": 1, "filter": "x eq 1"})

        assert result.isError is False
        assert json.loads(result.content[0].text) == {"value": [1]}
        assert client.last_path == "/me/things?$top=1&$filter=x%20eq%201"

    @pytest.mark.asyncio
    async def test_explicit_null_is_treated_as_omitted(self, tiny_catalog):
        client = FakeGraphClient()
        tool = bind(tiny_catalog, client).get("list-things")

        result = await tool({"top": None, "filter": None})

        assert result.isError is False
        assert client.last_path == "/me/things"

    def test_validate_drops_nulls(self, tiny_catalog):
        tool = bind(tiny_catalog).get("list-things")
        assert tool.validate({"top": None, "filter": "x eq 1", "body": None}) == {"filter": "x eq 1"}

    @pytest.mark.asyncio
    async def test_null_override_argument_not_sent(self):
        client = FakeGraphClient()
        registry = register_graph_tools(ToolRegistry(), client, catalog=load_endpoint_catalog())

        await registry.get("list-mail-folders")({"top": None, "select": None})

        assert client.last_path == "/me/mailFolders"

    @pytest.mark.asyncio
    async def test_fetch_all_pages(self, tiny_catalog):
        next_link = "https://graph.microsoft.com/v1.0/me/things?$skip=2"
        client = FakeGraphClient(
            json_response({"value": [1, 2], "@odata.nextLink": next_link}),
            json_response({"value": [3]}),
        )
        tool = bind(tiny_catalog, client).get("list-things")

        result = await tool({"fetchAllPages": True})

        assert json.loads(result.content[0].text)["value"] == [1, 2, 3]
        assert len(client.calls) == 2

    @pytest.mark.asyncio
    async def test_without_flag_returns_first_page(self, tiny_catalog):
        next_link = "https://graph.microsoft.com/v1.0/me/things?$skip=2"
        client = FakeGraphClient(json_response({"value": [1], "@odata.nextLink": next_link}))
        tool = bind(tiny_catalog, client).get("list-things")

        result = await tool({})

        assert "@odata.nextLink" in json.loads(result.content[0].text)
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_transport_error_is_normalized(self, tiny_catalog):
        client = FakeGraphClient(RuntimeError("connection reset"))
        tool = bind(tiny_catalog, client).get("list-things")

        result = await tool({})

        assert result.isError is True
        assert len(result.content) == 1
        assert result.content[0].type == "text"
        assert "Error in tool list-things" in result.content[0].text
        assert "connection reset" in result.content[0].text

    @pytest.mark.asyncio
    async def test_validation_error_is_normalized(self, tiny_catalog):
        client = FakeGraphClient()
        tool = bind(tiny_catalog, client).get("get-thing")

        result = await tool({})

        assert result.isError is True
        assert "Error in tool get-thing" in result.content[0].text
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_override_end_to_end(self, tiny_catalog):
        overrides = OverrideRegistry()
        overrides.register("create-thing", OverrideRecord(
            description="Create a thing",
            schema={"name": ParamSchema(str, "Thing name", required=True)},
            body_transform=lambda p: {"displayName": p["name"]},
        ))
        client = FakeGraphClient(json_response({"id": "1"}))
        tool = bind(tiny_catalog, client, overrides).get("create-thing")

        result = await tool({"name": "Widget"})

        assert tool.description == "Create a thing"
        assert result.isError is False
        assert json.loads(client.last_options.body) == {"displayName": "Widget"}
