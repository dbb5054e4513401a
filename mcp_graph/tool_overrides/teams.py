"""
Teams and chat overrides
팀, 채널, 채팅 메시지 도구 정의
"""

from typing import Any, Dict

from ..graph_types import OverrideRecord
from ..override_registry import OverrideRegistry
from .common import integer, text, top


def build_chat_message(p: Dict[str, Any]) -> Dict[str, Any]:
    return {"body": {"content": p.get("content")}}


def build_chat_messages_query(p: Dict[str, Any]) -> Dict[str, str]:
    return {"$top": top(p, 20)}


def register(registry: OverrideRegistry) -> None:
    # ── Teams ─────────────────────────────────────────────────────────────
    registry.register("list-joined-teams", OverrideRecord(
        description="List the Microsoft Teams you are a member of. Returns team names and IDs.",
    ))

    registry.register("get-team", OverrideRecord(
        description="Get a team by its team ID.",
    ))

    registry.register("list-team-channels", OverrideRecord(
        description="List channels in a team. Use list-joined-teams to get the team ID.",
    ))

    registry.register("get-team-channel", OverrideRecord(
        description="Get a channel in a team by team ID and channel ID.",
    ))

    registry.register("list-team-members", OverrideRecord(
        description="List the members of a team.",
    ))

    registry.register("get-channel-message", OverrideRecord(
        description="Get a specific message from a team channel.",
    ))

    registry.register("send-channel-message", OverrideRecord(
        description="Send a message to a Teams channel.",
        schema={"content": text("Message text", required=True)},
        body_transform=build_chat_message,
    ))

    # ── Chats ─────────────────────────────────────────────────────────────
    registry.register("list-chats", OverrideRecord(
        description="List your Teams chats (one-on-one, group, and meeting chats).",
    ))

    registry.register("get-chat", OverrideRecord(
        description="Get a Teams chat by its chat ID.",
    ))

    registry.register("list-chat-messages", OverrideRecord(
        description="List recent messages in a Teams chat. Use list-chats to get the chat ID.",
        schema={"count": integer("Number of messages to return (default: 20)")},
        query_transform=build_chat_messages_query,
    ))

    registry.register("get-chat-message", OverrideRecord(
        description="Get a specific message from a Teams chat.",
    ))

    registry.register("send-chat-message", OverrideRecord(
        description="Send a message in a Teams chat.",
        schema={"content": text("Message text", required=True)},
        body_transform=build_chat_message,
    ))

    registry.register("list-chat-message-replies", OverrideRecord(
        description="List the replies to a message in a Teams chat.",
    ))

    registry.register("reply-to-chat-message", OverrideRecord(
        description="Reply to a message in a Teams chat.",
        schema={"content": text("Reply text", required=True)},
        body_transform=build_chat_message,
    ))
