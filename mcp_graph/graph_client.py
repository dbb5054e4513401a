"""
Microsoft Graph Client
모든 Graph 도구가 사용하는 aiohttp 전송 계층
액세스 토큰은 TokenProviderProtocol (session.AuthManager)에서 조회
"""

import base64
import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode

import aiohttp

from core.protocols import TokenProviderProtocol

from .errors import AuthenticationError, GraphApiError
from .graph_types import GraphResponse, RequestOptions, TextContentItem

logger = logging.getLogger(__name__)

_TEXT_CONTENT_TYPES = ("text/", "application/json", "application/xml")


class GraphClient:
    """Microsoft Graph REST 클라이언트"""

    GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"

    def __init__(
        self,
        token_provider: TokenProviderProtocol,
        base_url: Optional[str] = None,
        timeout: int = 60,
    ):
        """
        클라이언트 초기화

        Args:
            token_provider: Bearer 토큰 제공자
            base_url: API 버전을 포함한 Graph 루트 URL
            timeout: 요청 전체 타임아웃 (초)
        """
        self.token_provider = token_provider
        self.base_url = (base_url or self.GRAPH_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None
        self._initialized = False

    async def initialize(self) -> bool:
        if self._initialized:
            return True

        self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        self._initialized = True
        logger.info("GraphClient initialized")
        return True

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None
        self._initialized = False

    def build_url(self, path: str, query_params: Optional[Dict[str, str]] = None) -> str:
        url = f"{self.base_url}{path}"
        if query_params:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{urlencode(query_params, quote_via=quote, safe='$')}"
        return url

    async def _get_access_token(self) -> str:
        token = await self.token_provider.get_access_token()
        if not token:
            raise AuthenticationError("No access token available. Configure MS365_MCP_ACCESS_TOKEN or MS365_MCP_REFRESH_TOKEN")
        return token

    async def graph_request(self, path: str, options: RequestOptions) -> GraphResponse:
        """
        Graph 요청 1회 수행

        Args:
            path: API 루트 기준 경로 (쿼리 문자열 포함 가능)
            options: 메서드, 헤더, 본문, raw_response, query_params

        Returns:
            텍스트 항목 하나를 담은 GraphResponse

        Raises:
            AuthenticationError: 사용할 토큰 없음
            GraphApiError: Graph가 2xx 이외의 상태로 응답
            aiohttp.ClientError: 네트워크 오류
        """
        if not self._initialized:
            await self.initialize()

        access_token = await self._get_access_token()
        headers = {"Authorization": f"Bearer {access_token}"}
        if options.body is not None:
            headers["Content-Type"] = "application/json"
        headers.update(options.headers)

        url = self.build_url(path, options.query_params)
        logger.debug(f"{options.method} {url}")

        async with self._session.request(
            options.method,
            url,
            headers=headers,
            data=options.body.encode("utf-8") if options.body is not None else None,
        ) as response:
            if response.status >= 400:
                error_text = await response.text()
                logger.error(f"Graph request failed: {response.status} - {error_text}")
                raise GraphApiError(response.status, response.reason or "", error_text)

            if response.status == 204:
                return _text_response(json.dumps({"message": "OK!"}))

            if options.raw_response:
                payload = await response.read()
                return _text_response(json.dumps(_wrap_media(payload, response.content_type)))

            text = await response.text()
            if not text:
                return _text_response(json.dumps({"message": "OK!"}))
            return _text_response(text)


def _text_response(text: str) -> GraphResponse:
    return GraphResponse(content=[TextContentItem(text=text)])


def _wrap_media(payload: bytes, content_type: str) -> Dict[str, Any]:
    """원본 미디어를 JSON으로 변환: 텍스트는 그대로, 나머지는 base64"""
    if content_type.startswith(_TEXT_CONTENT_TYPES):
        try:
            return {"contentType": content_type, "content": payload.decode("utf-8")}
        except UnicodeDecodeError:
            pass
    return {
        "contentType": content_type,
        "encoding": "base64",
        "content": base64.b64encode(payload).decode("ascii"),
    }
