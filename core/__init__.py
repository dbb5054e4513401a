"""
Core Module - TokenProviderProtocol / GraphTransportProtocol definitions

mcp_graph가 session.AuthManager와 aiohttp 클라이언트에 직접 의존하지 않도록 분리
"""

from .protocols import TokenProviderProtocol, GraphTransportProtocol

__all__ = ['TokenProviderProtocol', 'GraphTransportProtocol']
