"""
Tool Overrides
카탈로그 도구에 대한 수동 작성 schema, 설명, 요청 변환
"""

from ..override_registry import OverrideRegistry
from . import calendar, contacts, files, mail, sharepoint, tasks, teams

_DOMAINS = (mail, calendar, tasks, contacts, teams, files, sharepoint)


def build_default_overrides() -> OverrideRegistry:
    """
    Build the frozen override registry used by the server

    Returns:
        OverrideRegistry with every domain's overrides registered
    """
    registry = OverrideRegistry()
    for domain in _DOMAINS:
        domain.register(registry)
    return registry.freeze()


__all__ = ["build_default_overrides"]
