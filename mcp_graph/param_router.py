"""
Parameter Router
파라미터 종류 (Path, Query, Body, Header)에 따라 (이름, 값) 한 쌍을 요청에 반영하고
OData 쿼리 이름을 복원

MCP 클라이언트는 파라미터 이름의 '$'를 거부하므로 카탈로그는 $filter, $select ... 를
filter, select ... 로 노출하고, 이 모듈이 요청 전송 전에 '$'를 다시 붙임
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import quote

from .graph_types import ParamType, ParameterDeclaration

logger = logging.getLogger(__name__)

ODATA_QUERY_NAMES = frozenset([
    "filter",
    "select",
    "expand",
    "orderby",
    "skip",
    "top",
    "count",
    "search",
    "format",
])

# encodeURIComponent keeps these unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


def restore_param_name(name: str) -> str:
    """Wire name for a query/header parameter (filter -> $filter)"""
    lowered = name.lower()
    if lowered in ODATA_QUERY_NAMES:
        return f"${lowered}"
    return name


def strip_param_name(name: str) -> str:
    """Public name for a catalog parameter ($filter -> filter)"""
    return name[1:] if name.startswith("$") else name


def encode_path_value(value: Any) -> str:
    return quote(stringify_value(value), safe=_URI_COMPONENT_SAFE)


def stringify_value(value: Any) -> str:
    """Render a value the way it appears in a URL or header"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def substitute_path(path: str, name: str, value: Any) -> str:
    """Replace every {name} and :name placeholder with the encoded value"""
    encoded = encode_path_value(value)
    return path.replace(f"{{{name}}}", encoded).replace(f":{name}", encoded)


@dataclass
class RequestParts:
    """Request under construction"""
    path: str
    query: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None

    def set_body(self, name: str, value: Any) -> None:
        """이름이 body인 파라미터는 본문 전체, 나머지는 본문의 키로 추가"""
        if name == "body" or not isinstance(self.body, (dict, type(None))):
            self.body = value
            return
        if self.body is None:
            self.body = {}
        self.body[name] = value


def route_parameter(parts: RequestParts, declaration: ParameterDeclaration, value: Any) -> None:
    """
    Apply one declared parameter to the request

    Args:
        parts: 구성 중인 요청 (직접 수정됨)
        declaration: 라우팅 종류를 정하는 카탈로그 선언
        value: 호출자가 넘긴 값
    """
    name = declaration.name
    param_type = declaration.param_type

    if param_type == ParamType.PATH:
        parts.path = substitute_path(parts.path, name, value)
    elif param_type == ParamType.QUERY:
        parts.query[restore_param_name(name)] = stringify_value(value)
    elif param_type == ParamType.BODY:
        parts.set_body(name, value)
    elif param_type == ParamType.HEADER:
        parts.headers[restore_param_name(name)] = stringify_value(value)
    else:
        raise ValueError(f"Unknown parameter type: {param_type}")
