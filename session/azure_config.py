"""
Azure AD configuration
Graph 토큰 제공자가 사용하는 앱 등록 정보 및 토큰 설정
"""

import logging
import os
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_SCOPES = ["https://graph.microsoft.com/.default", "offline_access"]


class AzureConfig:
    """환경변수에서 로드하는 Azure AD 앱 설정"""

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ):
        """
        설정 로드

        Args:
            client_id: AZURE_CLIENT_ID 대신 사용할 값
            client_secret: AZURE_CLIENT_SECRET 대신 사용할 값
            tenant_id: AZURE_TENANT_ID 대신 사용할 값 (기본값 "common")
        """
        self.load_config_from_env()

        if client_id:
            self.azure_client_id = client_id
        if client_secret:
            self.azure_client_secret = client_secret
        if tenant_id:
            self.azure_tenant_id = tenant_id

    def load_config_from_env(self):
        self.azure_client_id = os.getenv("AZURE_CLIENT_ID")
        self.azure_client_secret = os.getenv("AZURE_CLIENT_SECRET")
        self.azure_tenant_id = os.getenv("AZURE_TENANT_ID", "common")

        # 미리 발급된 토큰
        self.access_token = os.getenv("MS365_MCP_ACCESS_TOKEN")
        self.refresh_token = os.getenv("MS365_MCP_REFRESH_TOKEN")

        self.scopes = self._load_scopes_from_env()

        if self.azure_client_id:
            logger.info(f"Azure config loaded from environment: client_id={self.azure_client_id[:8]}...")
        elif not self.access_token:
            logger.warning("Azure config not found in environment variables")

    def _load_scopes_from_env(self) -> List[str]:
        scopes = os.getenv("AZURE_SCOPES")
        if not scopes:
            return list(DEFAULT_SCOPES)
        return [scope for scope in scopes.replace(",", " ").split() if scope]

    @property
    def authority(self) -> str:
        return f"https://login.microsoftonline.com/{self.azure_tenant_id}"

    @property
    def token_endpoint(self) -> str:
        return f"{self.authority}/oauth2/v2.0/token"

    def can_refresh(self) -> bool:
        """refresh token grant에는 client id와 refresh token이 모두 필요"""
        return bool(self.azure_client_id and self.refresh_token)

    def is_configured(self) -> bool:
        return bool(self.access_token) or self.can_refresh()
