"""
Authentication Manager
Graph 액세스 토큰 제공
설정된 액세스 토큰을 그대로 쓰거나, refresh token grant로 발급받아 만료 직전까지 캐시
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import aiohttp

from mcp_graph.errors import AuthenticationError

from .azure_config import AzureConfig

logger = logging.getLogger(__name__)


def is_token_expired(expires_at: Any, buffer_seconds: int = 300) -> bool:
    """
    Token expiry check

    Args:
        expires_at: 만료 시각 (datetime 또는 ISO 문자열)
        buffer_seconds: 만료 몇 초 전부터 만료로 간주할지

    Returns:
        토큰 갱신이 필요하면 True
    """
    if isinstance(expires_at, str):
        expires_at = datetime.fromisoformat(expires_at)

    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)

    return datetime.now(timezone.utc) >= (expires_at - timedelta(seconds=buffer_seconds))


class AuthManager:
    """GraphClient용 토큰 제공자"""

    def __init__(self, config: Optional[AzureConfig] = None, buffer_seconds: int = 300):
        """
        매니저 초기화

        Args:
            config: Azure 설정 (없으면 환경변수에서 로드)
            buffer_seconds: 만료 몇 초 전에 갱신할지
        """
        self.config = config or AzureConfig()
        self.buffer_seconds = buffer_seconds
        self.session: Optional[aiohttp.ClientSession] = None

        self._refresh_token = self.config.refresh_token
        self._access_token: Optional[str] = None
        self._expires_at: Optional[datetime] = None
        self._lock = asyncio.Lock()

    async def _get_session(self) -> aiohttp.ClientSession:
        if not self.session or self.session.closed:
            self.session = aiohttp.ClientSession()
        return self.session

    async def get_access_token(self) -> Optional[str]:
        """
        Current access token

        MS365_MCP_ACCESS_TOKEN이 설정되어 있으면 그대로 반환하고, 아니면
        캐시된 토큰이 만료에 가까울 때 refresh token으로 갱신

        Returns:
            액세스 토큰, 설정이 없으면 None

        Raises:
            AuthenticationError: 토큰 갱신 실패
        """
        if self.config.access_token:
            return self.config.access_token

        if not self.config.can_refresh():
            logger.warning("No access token or refresh token configured")
            return None

        async with self._lock:
            if self._access_token and self._expires_at and not is_token_expired(self._expires_at, self.buffer_seconds):
                return self._access_token

            token_data = await self.refresh_tokens(self._refresh_token)
            self._access_token = token_data["access_token"]
            self._expires_at = token_data["expires_at"]
            self._refresh_token = token_data["refresh_token"]
            return self._access_token

    async def refresh_tokens(self, refresh_token: str) -> Dict[str, Any]:
        """
        Refresh-token grant

        Args:
            refresh_token: 리프레시 토큰

        Returns:
            access_token, refresh_token (새로 발급된 값 또는 기존 값), expires_at
        """
        data = {
            "client_id": self.config.azure_client_id,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
            "scope": " ".join(self.config.scopes),
        }
        if self.config.azure_client_secret:
            data["client_secret"] = self.config.azure_client_secret

        session = await self._get_session()
        async with session.post(self.config.token_endpoint, data=data) as response:
            if response.status != 200:
                error_text = await response.text()
                logger.error(f"Token refresh failed: {response.status} - {error_text}")
                if "invalid_grant" in error_text:
                    raise AuthenticationError("Refresh token expired or revoked")
                raise AuthenticationError(f"Token refresh failed: {error_text}")

            token_data = await response.json()

        expires_in = token_data.get("expires_in", 3600)
        logger.info("Token refreshed successfully")
        return {
            "access_token": token_data["access_token"],
            "refresh_token": token_data.get("refresh_token") or refresh_token,
            "expires_at": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        }

    async def close(self):
        if self.session and not self.session.closed:
            await self.session.close()
            logger.info("Auth manager closed")
