"""
Endpoint Catalog
정적 Graph 엔드포인트 목록 (endpoints.yaml)을 불변 EndpointDescriptor 객체로 로드

OData 파라미터는 실제 이름 ($filter, $top ...)으로 선언됨.
MCP 클라이언트가 파라미터 이름의 '$'를 거부하므로 로더에서 제거하고,
요청을 만들 때 param_router가 다시 붙임
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional, Tuple

import yaml

from .errors import CatalogError
from .graph_types import EndpointDescriptor, ParamSchema, ParamType, ParameterDeclaration
from .param_router import strip_param_name

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "endpoints.yaml"

_PLACEHOLDER = re.compile(r"\{([^}]+)\}")

_JSON_TYPES: Dict[str, Any] = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
    "array": List[Any],
    "object": Dict[str, Any],
}

# Standard OData system query options, by endpoint shape
_ODATA_ITEM = [
    ("$select", {"type": "string", "description": "Comma-separated properties to return"}),
    ("$expand", {"type": "string", "description": "Related entities to expand"}),
]
_ODATA_LIST = [
    ("$top", {"type": "integer", "description": "Show only the first n items"}),
    ("$skip", {"type": "integer", "description": "Skip the first n items"}),
    ("$search", {"type": "string", "description": "Search items by search phrases"}),
    ("$filter", {"type": "string", "description": "Filter items by property values"}),
    ("$count", {"type": "boolean", "description": "Include count of items"}),
    ("$orderby", {"type": "string", "description": "Order items by property values"}),
] + _ODATA_ITEM


def build_param_schema(schema: Optional[Dict[str, Any]]) -> ParamSchema:
    """
    Convert a catalog schema mapping into a ParamSchema

    Args:
        schema: {type, required, description, enum} 또는 None

    Returns:
        ParamSchema (schema가 비어 있으면 모든 값 허용)
    """
    if not schema:
        return ParamSchema.any()

    if schema.get("enum"):
        annotation: Any = Literal[tuple(schema["enum"])]
    else:
        annotation = _JSON_TYPES.get(schema.get("type", ""), Any)

    return ParamSchema(
        annotation=annotation,
        description=schema.get("description"),
        required=bool(schema.get("required", False)),
    )


def _build_parameters(entry: Dict[str, Any]) -> Tuple[ParameterDeclaration, ...]:
    declared: List[ParameterDeclaration] = []
    seen = set()

    def add(name: str, param_type: ParamType, schema: Optional[Dict[str, Any]]) -> None:
        public_name = strip_param_name(name)
        if public_name in seen:
            return
        seen.add(public_name)
        declared.append(ParameterDeclaration(public_name, param_type, build_param_schema(schema)))

    for placeholder in _PLACEHOLDER.findall(entry["path"]):
        add(placeholder, ParamType.PATH, {"type": "string", "required": True})

    odata = entry.get("odata")
    if odata == "list":
        odata_params = _ODATA_LIST
    elif odata == "item":
        odata_params = _ODATA_ITEM
    elif odata is None:
        odata_params = []
    else:
        raise CatalogError(f"{entry['tool_name']}: unknown odata shape {odata!r}")
    for name, schema in odata_params:
        add(name, ParamType.QUERY, schema)

    for param in entry.get("parameters") or []:
        try:
            param_type = ParamType(param["type"])
        except (KeyError, ValueError) as e:
            raise CatalogError(f"{entry['tool_name']}: invalid parameter {param!r}") from e
        add(param["name"], param_type, param.get("schema"))

    return tuple(declared)


def parse_endpoint(entry: Dict[str, Any]) -> EndpointDescriptor:
    """Build one descriptor from a catalog entry"""
    for key in ("tool_name", "method", "path"):
        if not entry.get(key):
            raise CatalogError(f"Catalog entry missing '{key}': {entry!r}")

    return EndpointDescriptor(
        tool_name=entry["tool_name"],
        method=entry["method"].lower(),
        path=entry["path"],
        parameters=_build_parameters(entry),
        description=entry.get("description"),
        scopes=tuple(entry.get("scopes") or ()),
        work_scopes=tuple(entry.get("work_scopes") or ()),
        media_content=bool(entry.get("media_content", False)),
    )


def load_endpoint_catalog(path: Optional[os.PathLike] = None) -> Tuple[EndpointDescriptor, ...]:
    """
    Load the endpoint catalog

    경로 결정 순서:
    1. path 인자
    2. 환경변수 MS365_MCP_ENDPOINTS_PATH
    3. 패키지에 포함된 endpoints.yaml

    Returns:
        카탈로그 순서대로 정렬된 descriptor 튜플
    """
    if path is None:
        path = os.environ.get("MS365_MCP_ENDPOINTS_PATH") or DEFAULT_CATALOG_PATH
    catalog_path = Path(path)

    if not catalog_path.exists():
        raise CatalogError(f"Endpoint catalog not found: {catalog_path}")

    with open(catalog_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("endpoints")
    if not isinstance(entries, list):
        raise CatalogError(f"Endpoint catalog has no 'endpoints' list: {catalog_path}")

    endpoints = tuple(parse_endpoint(entry) for entry in entries)

    names = [e.tool_name for e in endpoints]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise CatalogError(f"Duplicate tool names in catalog: {', '.join(duplicates)}")

    logger.info(f"Loaded {len(endpoints)} endpoints from {catalog_path}")
    return endpoints


def required_scopes(endpoints: Iterable[EndpointDescriptor], org_mode: bool = False) -> List[str]:
    """
    Delegated scopes needed by the catalog

    업무용 전용 scope는 org 모드에서만 포함. ReadWrite scope가 있으면 같은 이름의
    Read scope는 제외
    """
    scopes = set()
    for endpoint in endpoints:
        scopes.update(endpoint.scopes)
        if org_mode:
            scopes.update(endpoint.work_scopes)

    for scope in list(scopes):
        if ".ReadWrite" in scope:
            scopes.discard(scope.replace(".ReadWrite", ".Read"))

    return sorted(scopes)
