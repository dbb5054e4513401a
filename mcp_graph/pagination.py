"""
Pagination Engine
@odata.nextLink를 따라가며 모든 페이지의 value 배열을 첫 응답에 병합
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

from .call_executor import CallExecutor
from .graph_types import GraphRequest, GraphResponse

logger = logging.getLogger(__name__)

MAX_PAGES = 100

NEXT_LINK = "@odata.nextLink"
COUNT = "@odata.count"

_VERSION_PREFIX = re.compile(r"^/(v1\.0|beta)(?=/|$)")


def split_next_link(next_link: str) -> Tuple[str, Dict[str, str]]:
    """
    Split an absolute nextLink into a client-relative path and its query

    Args:
        next_link: 절대 URL, 예: https://graph.microsoft.com/v1.0/me/messages?$skip=10

    Returns:
        ("/me/messages", {"$skip": "10"})
    """
    parts = urlsplit(next_link)
    path = _VERSION_PREFIX.sub("", parts.path) or "/"
    return path, dict(parse_qsl(parts.query, keep_blank_values=True))


def _parse_page(response: GraphResponse) -> Optional[Dict[str, Any]]:
    """JSON document of a page, or None when it is not a value page"""
    if not response.has_content:
        return None
    try:
        document = json.loads(response.first_text)
    except (TypeError, ValueError):
        return None
    if not isinstance(document, dict) or not isinstance(document.get("value"), list):
        return None
    return document


class PaginationEngine:
    """
    Collects every page of a list response

    누적 결과는 collect() 호출 한 번 동안만 유지됨. 각 커서가 이전 페이지에서
    나오므로 페이지는 순차적으로 조회
    """

    def __init__(self, executor: CallExecutor, max_pages: int = MAX_PAGES):
        self.executor = executor
        self.max_pages = max_pages

    async def collect(self, request: GraphRequest, first: GraphResponse) -> GraphResponse:
        """
        Follow nextLink cursors starting from the first response

        Args:
            request: 첫 페이지를 만든 요청
            first: 첫 페이지 응답

        Returns:
            병합된 문서를 담은 첫 응답의 복사본. value 페이지가 아니거나
            후속 요청이 실패하면 첫 응답을 그대로 반환
        """
        combined = _parse_page(first)
        if combined is None:
            return first

        tool_name = self.executor.endpoint.tool_name
        items: List[Any] = list(combined["value"])
        next_link = combined.get(NEXT_LINK)
        page_count = 1

        try:
            while next_link and page_count < self.max_pages:
                logger.info(f"{tool_name}: fetching page {page_count + 1} from {next_link}")
                path, query_params = split_next_link(next_link)
                response = await self.executor.follow(request, path, query_params)

                if not response.has_content:
                    logger.warning(f"{tool_name}: page {page_count + 1} returned no content, stopping")
                    break

                page = json.loads(response.first_text)
                page_items = page.get("value") if isinstance(page, dict) else None
                if isinstance(page_items, list):
                    items.extend(page_items)
                next_link = page.get(NEXT_LINK) if isinstance(page, dict) else None
                page_count += 1

            if next_link and page_count >= self.max_pages:
                logger.warning(f"{tool_name}: reached the {self.max_pages} page limit, returning partial results")
        except Exception as e:
            logger.error(f"{tool_name}: pagination failed, returning first page: {e}")
            return first

        combined["value"] = items
        if COUNT in combined:
            combined[COUNT] = len(items)
        combined.pop(NEXT_LINK, None)

        logger.info(f"{tool_name}: collected {len(items)} items across {page_count} pages")
        return first.with_first_text(json.dumps(combined))
