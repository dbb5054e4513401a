"""
MCP Graph Module
Microsoft Graph REST 엔드포인트를 MCP 도구로 노출
"""

from .call_executor import CallExecutor
from .endpoint_catalog import load_endpoint_catalog, required_scopes
from .errors import (
    AuthenticationError,
    CatalogError,
    GraphApiError,
    GraphMcpError,
    RegistryFrozenError,
)
from .graph_client import GraphClient
from .graph_types import (
    EndpointDescriptor,
    GraphRequest,
    GraphResponse,
    OverrideRecord,
    ParameterDeclaration,
    ParamSchema,
    ParamType,
    RequestOptions,
    TextContentItem,
)
from .override_registry import OverrideRegistry
from .pagination import MAX_PAGES, PaginationEngine
from .tool_binder import GraphTool, ToolRegistry, build_effective_schema, register_graph_tools
from .tool_overrides import build_default_overrides

__all__ = [
    # Catalog
    "load_endpoint_catalog",
    "required_scopes",
    # Binding
    "register_graph_tools",
    "build_effective_schema",
    "GraphTool",
    "ToolRegistry",
    # Overrides
    "OverrideRegistry",
    "build_default_overrides",
    # Execution
    "CallExecutor",
    "PaginationEngine",
    "MAX_PAGES",
    # Client
    "GraphClient",
    # Types
    "EndpointDescriptor",
    "ParameterDeclaration",
    "ParamSchema",
    "ParamType",
    "OverrideRecord",
    "RequestOptions",
    "GraphRequest",
    "GraphResponse",
    "TextContentItem",
    # Errors
    "GraphMcpError",
    "GraphApiError",
    "AuthenticationError",
    "CatalogError",
    "RegistryFrozenError",
]

__version__ = "1.0.0"
