"""
Tool Binder
카탈로그 엔드포인트를 호출 가능한 MCP 도구로 변환

시작 시 한 번 실행: 카탈로그를 필터링하고 도구별 입력 schema를 pydantic 모델로
만든 뒤 CallExecutor와 연결
"""

import logging
import re
from typing import Any, Dict, Iterable, Iterator, List, Optional, Type

from mcp.types import CallToolResult, Tool, ToolAnnotations
from pydantic import BaseModel, ConfigDict, create_model

from core.protocols import GraphTransportProtocol

from .call_executor import FETCH_ALL_PAGES, CallExecutor
from .endpoint_catalog import load_endpoint_catalog
from .graph_types import EndpointDescriptor, OverrideRecord, ParamSchema, ParamType
from .override_registry import OverrideRegistry
from .pagination import PaginationEngine
from .response_normalizer import error_result, log_response_summary, to_call_tool_result
from .tool_overrides import build_default_overrides

logger = logging.getLogger(__name__)

FETCH_ALL_PAGES_SCHEMA = ParamSchema(bool, "Automatically fetch all pages of results")


def build_effective_schema(
    endpoint: EndpointDescriptor, override: Optional[OverrideRecord] = None
) -> Dict[str, ParamSchema]:
    """
    Input schema actually exposed for a tool

    Args:
        endpoint: 카탈로그 엔드포인트
        override: override 레코드 (없으면 None)

    Returns:
        공개 파라미터 이름 -> ParamSchema (선언 순서 유지)
    """
    schema: Dict[str, ParamSchema] = {
        param.name: param.schema or ParamSchema.any() for param in endpoint.parameters
    }

    if endpoint.is_read and "/" in endpoint.path:
        schema[FETCH_ALL_PAGES] = FETCH_ALL_PAGES_SCHEMA

    if override and override.schema:
        if override.body_transform:
            for name in endpoint.names_of(ParamType.BODY):
                schema.pop(name, None)
            schema.pop("body", None)
        if override.query_transform:
            for name in endpoint.names_of(ParamType.QUERY):
                schema.pop(name, None)
        schema.update(override.schema)

    return schema


def _model_name(tool_name: str) -> str:
    return "".join(part.capitalize() for part in re.split(r"[^0-9A-Za-z]+", tool_name) if part) + "Params"


def build_params_model(tool_name: str, schema: Dict[str, ParamSchema]) -> Type[BaseModel]:
    """
    Compile an effective schema into a pydantic model

    "from", "If-Match" 같은 공개 이름은 식별자로 쓸 수 없으므로 필드는 순번 이름을
    갖고 공개 이름은 alias로 지정. "body" fallback이 executor까지 전달되도록
    정의되지 않은 인자도 유지
    """
    fields = {f"field_{i}": param.to_field(name) for i, (name, param) in enumerate(schema.items())}
    return create_model(
        _model_name(tool_name),
        __config__=ConfigDict(extra="allow"),
        **fields,
    )


def describe(endpoint: EndpointDescriptor, override: Optional[OverrideRecord] = None) -> str:
    if override and override.description:
        return override.description
    if endpoint.description:
        return endpoint.description
    return f"Execute {endpoint.http_method} request to {endpoint.path}"


class GraphTool:
    """One catalog endpoint exposed as an MCP tool"""

    def __init__(
        self,
        endpoint: EndpointDescriptor,
        description: str,
        schema: Dict[str, ParamSchema],
        executor: CallExecutor,
    ):
        self.endpoint = endpoint
        self.description = description
        self.schema = schema
        self.executor = executor
        self.params_model = build_params_model(endpoint.tool_name, schema)

    @property
    def name(self) -> str:
        return self.endpoint.tool_name

    @property
    def read_only_hint(self) -> bool:
        return self.endpoint.is_read

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self.params_model.model_json_schema(by_alias=True)

    def to_mcp_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
            annotations=ToolAnnotations(title=self.name, readOnlyHint=self.read_only_hint),
        )

    def validate(self, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """검증된 호출 파라미터 (호출자가 넘긴 null이 아닌 키만 유지)"""
        model = self.params_model.model_validate(arguments or {})
        return model.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)

    async def __call__(self, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
        logger.info(f"Tool {self.name} called with params: {arguments}")
        try:
            params = self.validate(arguments)
            request = self.executor.build_request(params)
            response = await self.executor.send(request)

            if FETCH_ALL_PAGES in self.schema and params.get(FETCH_ALL_PAGES) is True:
                response = await PaginationEngine(self.executor).collect(request, response)

            log_response_summary(self.name, response)
            return to_call_tool_result(response)
        except Exception as e:
            logger.error(f"Error in tool {self.name}: {e}")
            return error_result(self.name, e)


class ToolRegistry:
    """Registered tools by name, in registration order"""

    def __init__(self):
        self._tools: Dict[str, GraphTool] = {}

    def register(self, tool: GraphTool) -> None:
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[GraphTool]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def list_mcp_tools(self) -> List[Tool]:
        return [tool.to_mcp_tool() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[GraphTool]:
        return iter(self._tools.values())


def compile_tool_filter(pattern: Optional[str]) -> Optional["re.Pattern"]:
    """Case-insensitive name filter; an invalid pattern disables filtering"""
    if not pattern:
        return None
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        logger.error(f"Invalid tool filter regex pattern: {pattern}. Ignoring filter. ({e})")
        return None


def register_graph_tools(
    registry: ToolRegistry,
    graph_client: GraphTransportProtocol,
    read_only: bool = False,
    enabled_tools_pattern: Optional[str] = None,
    org_mode: bool = False,
    catalog: Optional[Iterable[EndpointDescriptor]] = None,
    overrides: Optional[OverrideRegistry] = None,
) -> ToolRegistry:
    """
    Register one tool per catalog endpoint that survives filtering

    Args:
        registry: 도구를 등록할 레지스트리
        graph_client: 모든 도구가 공유하는 전송 클라이언트
        read_only: GET 엔드포인트만 등록
        enabled_tools_pattern: 도구 이름이 일치해야 하는 정규식 (대소문자 무시)
        org_mode: 업무/학교 계정이 필요한 엔드포인트 포함
        catalog: 엔드포인트 목록 (기본값: 패키지의 endpoints.yaml)
        overrides: override 레지스트리 (기본값: build_default_overrides())

    Returns:
        채워진 레지스트리
    """
    if catalog is None:
        catalog = load_endpoint_catalog()
    if overrides is None:
        overrides = build_default_overrides()

    tool_filter = compile_tool_filter(enabled_tools_pattern)
    if tool_filter:
        logger.info(f"Tool filtering enabled with pattern: {enabled_tools_pattern}")

    for endpoint in catalog:
        name = endpoint.tool_name

        if not org_mode and endpoint.requires_org_mode:
            logger.info(f"Skipping work account tool {name} - not in org mode")
            continue

        if read_only and not endpoint.is_read:
            logger.info(f"Skipping write operation {name} in read-only mode")
            continue

        if tool_filter and not tool_filter.search(name):
            logger.info(f"Skipping tool {name} - doesn't match filter pattern")
            continue

        override = overrides.get(name)
        try:
            tool = GraphTool(
                endpoint=endpoint,
                description=describe(endpoint, override),
                schema=build_effective_schema(endpoint, override),
                executor=CallExecutor(endpoint, graph_client, override),
            )
        except Exception as e:
            logger.error(f"Skipping tool {name} - cannot build input schema: {e}")
            continue

        registry.register(tool)

    logger.info(f"Registered {len(registry)} Graph tools")
    return registry
