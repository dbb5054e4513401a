"""
Core Protocols - 모듈 간 공유되는 추상화

현재 정의:
    - TokenProviderProtocol: GraphClient가 session.AuthManager에 직접 의존하지 않고
      Bearer 토큰을 얻도록 함
    - GraphTransportProtocol: 도구 어댑터가 aiohttp 클라이언트에 직접 의존하지 않고
      Graph 요청을 보내도록 함

Example:
    # 테스트에서 mock 주입
    client = GraphClient(token_provider=MockTokenProvider())

    # 실제 사용
    client = GraphClient(token_provider=AuthManager())
"""

from typing import Protocol, Optional, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from mcp_graph.graph_types import GraphResponse, RequestOptions


@runtime_checkable
class TokenProviderProtocol(Protocol):
    """
    Token provider protocol - AuthManager abstraction

    Interface responsible for acquiring and refreshing OAuth access tokens.
    session.AuthManager implements this Protocol.
    """

    async def get_access_token(self) -> Optional[str]:
        """
        Return a valid access token (refreshing it when needed)

        Returns:
            Access token or None when no credentials are configured
        """
        ...

    async def close(self) -> None:
        """Release resources"""
        ...


@runtime_checkable
class GraphTransportProtocol(Protocol):
    """
    Graph transport protocol - GraphClient abstraction

    Performs one HTTP call against Microsoft Graph and returns a
    content-bearing response, or raises.
    """

    async def graph_request(self, path: str, options: "RequestOptions") -> "GraphResponse":
        """
        Issue one Graph request

        Args:
            path: Resolved path relative to the Graph base URL, query string included
            options: Method, headers, optional body and raw-response flag

        Returns:
            GraphResponse with zero or more text content items
        """
        ...
