"""
Call Executor
도구 호출 1회에 대한 실제 Graph 요청을 만들고 전송 클라이언트로 보냄
"""

import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode

from core.protocols import GraphTransportProtocol

from .graph_types import (
    EndpointDescriptor,
    GraphRequest,
    GraphResponse,
    OverrideRecord,
    ParamType,
    RequestOptions,
)
from .param_router import RequestParts, route_parameter

logger = logging.getLogger(__name__)

FETCH_ALL_PAGES = "fetchAllPages"

MEDIA_SUFFIXES = ("/content", "/$value")


def encode_query(query: Dict[str, str]) -> str:
    """URL-encode a query mapping, keeping OData '$' keys literal"""
    return urlencode(query, quote_via=quote, safe="$")


def expects_media(endpoint: EndpointDescriptor, path: str) -> bool:
    """Raw (non-JSON) response heuristic"""
    if endpoint.media_content:
        return True
    return path.split("?", 1)[0].endswith(MEDIA_SUFFIXES)


def serialize_body(body: Any) -> str:
    if isinstance(body, str):
        return body
    return json.dumps(body)


class CallExecutor:
    """
    Executes one Graph call for a tool

    바인딩된 endpoint와 override 외에는 상태가 없으므로 인스턴스 하나가
    해당 도구의 모든 호출을 처리
    """

    def __init__(
        self,
        endpoint: EndpointDescriptor,
        transport: GraphTransportProtocol,
        override: Optional[OverrideRecord] = None,
    ):
        self.endpoint = endpoint
        self.transport = transport
        self.override = override

    def build_request(self, params: Dict[str, Any]) -> GraphRequest:
        """
        Build the request for validated call parameters

        Args:
            params: 공개 이름 기준 호출 파라미터 (호출자가 넘긴 키만 포함)

        Returns:
            경로가 확정된 GraphRequest (쿼리 문자열 포함)
        """
        endpoint = self.endpoint
        override = self.override
        parts = RequestParts(path=endpoint.path)

        if override and override.path_transform:
            parts.path = override.path_transform(parts.path, params)

        owns_body = bool(override and override.body_transform)
        if owns_body:
            parts.body = override.body_transform(params)

        owns_query = bool(override and override.query_transform)
        if owns_query:
            parts.query.update(override.query_transform(params))

        override_names = set(override.schema) if override and override.schema else set()

        for name, value in params.items():
            if name == FETCH_ALL_PAGES or name in override_names or value is None:
                continue

            declaration = endpoint.get_parameter(name)
            if declaration is None:
                if name == "body" and not owns_body:
                    parts.body = value
                else:
                    logger.debug(f"{endpoint.tool_name}: ignoring undeclared parameter {name}")
                continue

            if owns_body and declaration.param_type == ParamType.BODY:
                continue
            if owns_query and declaration.param_type == ParamType.QUERY:
                continue

            route_parameter(parts, declaration, value)

        path = parts.path
        if parts.query:
            separator = "&" if "?" in path else "?"
            path = f"{path}{separator}{encode_query(parts.query)}"

        options = RequestOptions(method=endpoint.http_method, headers=dict(parts.headers))
        if endpoint.http_method != "GET" and parts.body is not None:
            options.body = serialize_body(parts.body)
        options.raw_response = expects_media(endpoint, path)

        return GraphRequest(path=path, options=options)

    async def send(self, request: GraphRequest) -> GraphResponse:
        logger.info(f"{self.endpoint.tool_name}: {request.options.method} {request.path}")
        return await self.transport.graph_request(request.path, request.options)

    async def execute(self, params: Dict[str, Any]) -> GraphResponse:
        """Build and send the request; transport errors propagate"""
        return await self.send(self.build_request(params))

    async def follow(self, request: GraphRequest, path: str, query_params: Dict[str, str]) -> GraphResponse:
        """
        Re-issue a request against another path

        다음 페이지 링크에 사용: 메서드와 헤더는 그대로, 경로와 쿼리 파라미터만 변경
        """
        follow_up = GraphRequest(path=path, options=request.options.with_query(query_params))
        logger.debug(f"{self.endpoint.tool_name}: following {path}")
        return await self.send(follow_up)
