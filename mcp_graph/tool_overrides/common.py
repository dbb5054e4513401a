"""
Override Helpers
override 선언에서 공통으로 쓰는 schema 생성기와 변환 도우미
"""

from typing import Any, Dict, Iterable, List, Literal, Optional
from urllib.parse import quote

from ..graph_types import ParamSchema


def text(description: str, required: bool = False) -> ParamSchema:
    return ParamSchema(str, description, required)


def number(description: str, required: bool = False) -> ParamSchema:
    return ParamSchema(float, description, required)


def integer(description: str, required: bool = False) -> ParamSchema:
    return ParamSchema(int, description, required)


def flag(description: str) -> ParamSchema:
    return ParamSchema(bool, description)


def choice(values: Iterable[str], description: str, required: bool = False) -> ParamSchema:
    return ParamSchema(Literal[tuple(values)], description, required)


def split_csv(value: Any) -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']"""
    if not value or not isinstance(value, str):
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_recipients(value: Any) -> List[Dict[str, Dict[str, str]]]:
    """쉼표로 구분된 주소 -> Graph 수신자 목록"""
    return [{"emailAddress": {"address": address}} for address in split_csv(value)]


def path_segment(value: Any) -> str:
    return quote(str(value), safe="@")


def user_scoped_path(path: str, params: Dict[str, Any]) -> str:
    """
    userId가 있으면 /me/... 를 /users/{userId}/... 로 변경

    같은 도구로 공유 사서함에 접근할 때 사용
    """
    user_id = params.get("userId")
    if not user_id:
        return path
    if path == "/me":
        return f"/users/{path_segment(user_id)}"
    if path.startswith("/me/"):
        return f"/users/{path_segment(user_id)}{path[3:]}"
    return path


def top(params: Dict[str, Any], default: int) -> str:
    return str(params.get("count") or default)


def due_date_time(date: Optional[str]) -> Dict[str, str]:
    return {"dateTime": f"{date}T00:00:00", "timeZone": "UTC"}
