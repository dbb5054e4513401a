"""
Graph Tool Types
엔드포인트 카탈로그, override 선언, 요청 파이프라인이 공유하는 타입 정의
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import Field


class ParamType(str, Enum):
    """Part of the HTTP request a parameter feeds into"""
    PATH = "Path"
    QUERY = "Query"
    BODY = "Body"
    HEADER = "Header"


@dataclass(frozen=True)
class ParamSchema:
    """
    Validator for one tool parameter

    annotation은 pydantic이 이해하는 모든 타입 (str, int, Literal[...],
    List[str], Any ...). 선택 파라미터의 기본값은 None이며, 호출자가 값을 넘기지 않거나
    null을 넘기면 호출 파라미터에서 제외됨
    """
    annotation: Any = Any
    description: Optional[str] = None
    required: bool = False

    @classmethod
    def any(cls) -> "ParamSchema":
        return cls()

    def to_field(self, alias: str) -> Tuple[Any, Any]:
        """pydantic create_model field definition exposed under alias"""
        if self.required:
            return (self.annotation, Field(..., alias=alias, title=alias, description=self.description))
        return (Optional[self.annotation], Field(None, alias=alias, title=alias, description=self.description))


@dataclass(frozen=True)
class ParameterDeclaration:
    """Catalog parameter"""
    name: str
    param_type: ParamType
    schema: Optional[ParamSchema] = None


@dataclass(frozen=True)
class EndpointDescriptor:
    """One Graph operation from the static catalog"""
    tool_name: str
    method: str
    path: str
    parameters: Tuple[ParameterDeclaration, ...] = ()
    description: Optional[str] = None
    scopes: Tuple[str, ...] = ()
    work_scopes: Tuple[str, ...] = ()
    media_content: bool = False

    @property
    def http_method(self) -> str:
        return self.method.upper()

    @property
    def is_read(self) -> bool:
        return self.http_method == "GET"

    @property
    def requires_org_mode(self) -> bool:
        """Only work/school scopes are declared"""
        return not self.scopes and bool(self.work_scopes)

    def get_parameter(self, name: str) -> Optional[ParameterDeclaration]:
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def names_of(self, param_type: ParamType) -> List[str]:
        return [p.name for p in self.parameters if p.param_type == param_type]


BodyTransform = Callable[[Dict[str, Any]], Any]
QueryTransform = Callable[[Dict[str, Any]], Dict[str, str]]
PathTransform = Callable[[str, Dict[str, Any]], str]


@dataclass(frozen=True)
class OverrideRecord:
    """
    Per-tool custom behavior

    모든 필드는 선택 사항. transform이 없으면 해당 요청 부분은 기본 라우팅을 따름

    Attributes:
        description: Replaces the catalog description
        schema: Parameters added to (or replacing) the mechanical schema
        body_transform: call parameters -> request body (owns all Body parameters)
        query_transform: call parameters -> query mapping (owns all Query parameters)
        path_transform: (path template, call parameters) -> resolved path
    """
    description: Optional[str] = None
    schema: Optional[Dict[str, ParamSchema]] = None
    body_transform: Optional[BodyTransform] = None
    query_transform: Optional[QueryTransform] = None
    path_transform: Optional[PathTransform] = None


@dataclass
class RequestOptions:
    """Options handed to the transport client"""
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    raw_response: bool = False
    query_params: Optional[Dict[str, str]] = None

    def with_query(self, query_params: Dict[str, str]) -> "RequestOptions":
        return replace(self, headers=dict(self.headers), query_params=dict(query_params))


@dataclass
class GraphRequest:
    """Fully built request: resolved path plus options"""
    path: str
    options: RequestOptions


@dataclass
class TextContentItem:
    """Text content returned by the transport client"""
    text: str
    type: str = "text"


@dataclass
class GraphResponse:
    """Content-bearing transport result"""
    content: List[TextContentItem] = field(default_factory=list)
    meta: Optional[Dict[str, Any]] = None
    is_error: bool = False

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    @property
    def first_text(self) -> Optional[str]:
        return self.content[0].text if self.content else None

    def with_first_text(self, text: str) -> "GraphResponse":
        """Copy with the first content item's text replaced"""
        content = [TextContentItem(text=text)] + [TextContentItem(text=c.text) for c in self.content[1:]]
        return GraphResponse(content=content, meta=self.meta, is_error=self.is_error)
