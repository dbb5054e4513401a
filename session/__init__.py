"""
Session Module
Azure AD 설정 및 Graph 액세스 토큰 관리
"""

from .auth_manager import AuthManager, is_token_expired
from .azure_config import AzureConfig

__all__ = [
    "AuthManager",
    "AzureConfig",
    "is_token_expired",
]
