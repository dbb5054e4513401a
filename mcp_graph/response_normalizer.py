"""
Response Normalizer
전송 결과와 예외를 MCP CallToolResult 객체로 변환
"""

import json
import logging

from mcp.types import CallToolResult, TextContent

from .graph_types import GraphResponse

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 500


def to_call_tool_result(response: GraphResponse) -> CallToolResult:
    """Copy content items, metadata and the error flag"""
    content = [TextContent(type="text", text=item.text) for item in response.content]
    return CallToolResult(content=content, isError=response.is_error, _meta=response.meta)


def error_result(tool_name: str, exc: BaseException) -> CallToolResult:
    """
    Uniform error result

    Args:
        tool_name: 실패한 도구 이름
        exc: 검증 또는 실행 중 발생한 예외

    Returns:
        {"error": ...} 텍스트 항목 하나와 isError=True를 담은 CallToolResult
    """
    message = json.dumps({"error": f"Error in tool {tool_name}: {exc}"})
    return CallToolResult(content=[TextContent(type="text", text=message)], isError=True)


def log_response_summary(tool_name: str, response: GraphResponse) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    if not response.has_content:
        logger.debug(f"{tool_name}: empty response")
        return

    text = response.first_text or ""
    summary = f"{tool_name}: response {len(text)} chars"
    try:
        document = json.loads(text)
    except ValueError:
        document = None
    if isinstance(document, dict):
        if isinstance(document.get("value"), list):
            summary += f", {len(document['value'])} items"
        if document.get("@odata.nextLink"):
            summary += ", has nextLink"

    logger.debug(summary)
    logger.debug(f"{tool_name}: preview {text[:PREVIEW_LENGTH]}")
