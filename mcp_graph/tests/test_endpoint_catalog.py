"""
Endpoint Catalog tests
"""

from typing import Any, Literal

import pytest

from mcp_graph.endpoint_catalog import (
    build_param_schema,
    load_endpoint_catalog,
    parse_endpoint,
    required_scopes,
)
from mcp_graph.errors import CatalogError
from mcp_graph.graph_types import ParamType


@pytest.fixture(scope="module")
def catalog():
    return load_endpoint_catalog()


class TestPackagedCatalog:

    def test_loads_unique_names(self, catalog):
        names = [e.tool_name for e in catalog]
        assert len(names) > 50
        assert len(names) == len(set(names))

    def test_odata_names_are_stripped(self, catalog):
        endpoint = next(e for e in catalog if e.tool_name == "list-mail-messages")
        query_names = endpoint.names_of(ParamType.QUERY)
        assert "filter" in query_names
        assert "top" in query_names
        assert not any(name.startswith("$") for name in query_names)

    def test_path_placeholders_become_required_path_params(self, catalog):
        endpoint = next(e for e in catalog if e.tool_name == "get-mail-message")
        declaration = endpoint.get_parameter("message-id")
        assert declaration.param_type == ParamType.PATH
        assert declaration.schema.required is True

    def test_media_endpoint_flag(self, catalog):
        endpoint = next(e for e in catalog if e.tool_name == "download-onedrive-file-content")
        assert endpoint.media_content is True

    def test_work_only_endpoints(self, catalog):
        endpoint = next(e for e in catalog if e.tool_name == "list-users")
        assert endpoint.requires_org_mode is True
        assert next(e for e in catalog if e.tool_name == "get-current-user").requires_org_mode is False

    def test_methods_are_lowercase(self, catalog):
        assert all(e.method == e.method.lower() for e in catalog)


class TestLoader:

    def test_custom_path(self, catalog_file):
        path = catalog_file(
            "endpoints:\n"
            "  - tool_name: list-notes\n"
            "    method: GET\n"
            "    path: /me/notes/{note-id}/items\n"
            "    odata: item\n"
            "    parameters:\n"
            "      - {name: $top, type: Query, schema: {type: integer}}\n"
        )
        (endpoint,) = load_endpoint_catalog(path)

        assert endpoint.method == "get"
        assert [p.name for p in endpoint.parameters] == ["note-id", "select", "expand", "top"]
        assert endpoint.get_parameter("top").schema.annotation is int

    def test_environment_path(self, catalog_file, monkeypatch):
        path = catalog_file("endpoints:\n  - {tool_name: a, method: get, path: /a}\n")
        monkeypatch.setenv("MS365_MCP_ENDPOINTS_PATH", str(path))
        assert [e.tool_name for e in load_endpoint_catalog()] == ["a"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            load_endpoint_catalog(tmp_path / "missing.yaml")

    def test_duplicate_names(self, catalog_file):
        path = catalog_file(
            "endpoints:\n"
            "  - {tool_name: a, method: get, path: /a}\n"
            "  - {tool_name: a, method: get, path: /b}\n"
        )
        with pytest.raises(CatalogError, match="Duplicate"):
            load_endpoint_catalog(path)

    def test_no_endpoint_list(self, catalog_file):
        with pytest.raises(CatalogError):
            load_endpoint_catalog(catalog_file("tools: []\n"))

    def test_entry_missing_method(self):
        with pytest.raises(CatalogError):
            parse_endpoint({"tool_name": "a", "path": "/a"})

    def test_invalid_parameter_type(self):
        with pytest.raises(CatalogError):
            parse_endpoint({
                "tool_name": "a",
                "method": "get",
                "path": "/a",
                "parameters": [{"name": "x", "type": "Cookie"}],
            })

    def test_unknown_odata_shape(self):
        with pytest.raises(CatalogError):
            parse_endpoint({"tool_name": "a", "method": "get", "path": "/a", "odata": "table"})


class TestParamSchema:

    def test_empty_accepts_anything(self):
        schema = build_param_schema(None)
        assert schema.annotation is Any
        assert schema.required is False

    def test_enum_is_literal(self):
        schema = build_param_schema({"enum": ["low", "high"], "required": True})
        assert schema.annotation == Literal["low", "high"]
        assert schema.required is True


class TestRequiredScopes:

    def test_readwrite_replaces_read(self, tiny_catalog):
        assert required_scopes(tiny_catalog) == ["Things.ReadWrite"]

    def test_work_scopes_only_in_org_mode(self, tiny_catalog):
        assert "Things.Read.All" in required_scopes(tiny_catalog, org_mode=True)
        assert "Things.Read.All" not in required_scopes(tiny_catalog, org_mode=False)
