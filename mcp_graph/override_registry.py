"""
Override Registry
도구 이름 -> OverrideRecord 조회 테이블 (시작 시 한 번만 채움)
"""

import logging
from types import MappingProxyType
from typing import Dict, ItemsView, Iterator, List, Mapping, Optional

from .errors import RegistryFrozenError
from .graph_types import OverrideRecord

logger = logging.getLogger(__name__)


class OverrideRegistry:
    """
    Per-tool override table

    도구 이름당 레코드는 하나: 같은 이름을 다시 등록하면 마지막 레코드가 유지됨.
    freeze() 이후에는 읽기 전용이므로 모든 도구 호출이 잠금 없이 공유
    """

    def __init__(self, records: Optional[Mapping[str, OverrideRecord]] = None):
        self._records: Dict[str, OverrideRecord] = {}
        self._frozen = False
        for name, record in (records or {}).items():
            self.register(name, record)

    def register(self, tool_name: str, record: OverrideRecord) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register override for {tool_name}: registry is frozen")
        if tool_name in self._records:
            logger.debug(f"Replacing override for {tool_name}")
        self._records[tool_name] = record

    def get(self, tool_name: str) -> Optional[OverrideRecord]:
        return self._records.get(tool_name)

    def freeze(self) -> "OverrideRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def names(self) -> List[str]:
        return list(self._records)

    def items(self) -> ItemsView[str, OverrideRecord]:
        return MappingProxyType(self._records).items()

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)
