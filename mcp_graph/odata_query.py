"""
OData Query Builder
override query transform에서 사용하는 $filter / $search 빌더

Classes:
    - FilterBuilder: $filter 표현식 빌더
"""

from typing import List


def odata_literal(value: str) -> str:
    """Quote a string literal for $filter (single quotes doubled)"""
    return "'" + str(value).replace("'", "''") + "'"


def search_phrase(text: str) -> str:
    """Quote a $search phrase"""
    return '"' + str(text).replace('"', '\\"') + '"'


class FilterBuilder:
    """
    Graph API $filter expression builder

    Conditions are joined with 'and'.
    """

    def __init__(self):
        self._filters: List[str] = []

    def unread(self, value: bool = True) -> "FilterBuilder":
        """Unread mail only"""
        self._filters.append(f"isRead eq {str(not value).lower()}")
        return self

    def from_sender(self, email: str) -> "FilterBuilder":
        self._filters.append(f"from/emailAddress/address eq {odata_literal(email)}")
        return self

    def subject_contains(self, text: str) -> "FilterBuilder":
        self._filters.append(f"contains(subject, {odata_literal(text)})")
        return self

    def eq(self, field: str, value: str) -> "FilterBuilder":
        self._filters.append(f"{field} eq {odata_literal(value)}")
        return self

    def ge(self, field: str, value: str) -> "FilterBuilder":
        self._filters.append(f"{field} ge {odata_literal(value)}")
        return self

    def le(self, field: str, value: str) -> "FilterBuilder":
        self._filters.append(f"{field} le {odata_literal(value)}")
        return self

    def build(self) -> str:
        """
        Build the $filter expression

        Returns:
            Expression string (empty when no condition was added)
        """
        return " and ".join(self._filters) if self._filters else ""
