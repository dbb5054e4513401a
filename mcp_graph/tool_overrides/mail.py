"""
Mail overrides

list-mail-messages, get-mail-message, send-mail은 path transform으로
공유 사서함 (userId)과 메일 폴더 (folderId)도 처리
"""

from typing import Any, Dict

from ..graph_types import OverrideRecord
from ..odata_query import FilterBuilder, search_phrase
from ..override_registry import OverrideRegistry
from .common import flag, integer, parse_recipients, path_segment, text, user_scoped_path

DEFAULT_MAIL_SELECT = "id,subject,from,toRecipients,receivedDateTime,isRead,bodyPreview,hasAttachments"

USER_ID = text("Shared mailbox owner (user ID or email). Omit for your own mailbox")


def build_mail_query(p: Dict[str, Any]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if p.get("search"):
        params["$search"] = search_phrase(p["search"])

    filters = FilterBuilder()
    if p.get("from"):
        filters.from_sender(p["from"])
    if p.get("subject"):
        filters.subject_contains(p["subject"])
    if p.get("unreadOnly"):
        filters.unread()
    filter_query = filters.build()
    if filter_query:
        params["$filter"] = filter_query

    params["$top"] = str(p.get("count") or 10)
    # Graph rejects $orderby combined with $search
    if not p.get("search"):
        params["$orderby"] = "receivedDateTime desc"
    params["$select"] = DEFAULT_MAIL_SELECT
    return params


def mail_list_path(path: str, p: Dict[str, Any]) -> str:
    if p.get("folderId"):
        path = f"/me/mailFolders/{path_segment(p['folderId'])}/messages"
    return user_scoped_path(path, p)


def _message_body(p: Dict[str, Any]) -> Dict[str, Any]:
    return {"contentType": "HTML" if p.get("isHtml") else "Text", "content": p.get("content")}


def build_send_mail(p: Dict[str, Any]) -> Dict[str, Any]:
    message: Dict[str, Any] = {
        "subject": p.get("subject"),
        "body": _message_body(p),
        "toRecipients": parse_recipients(p.get("to")),
    }
    if p.get("cc"):
        message["ccRecipients"] = parse_recipients(p["cc"])
    if p.get("bcc"):
        message["bccRecipients"] = parse_recipients(p["bcc"])
    return {"message": message, "saveToSentItems": True}


def build_draft(p: Dict[str, Any]) -> Dict[str, Any]:
    draft: Dict[str, Any] = {"subject": p.get("subject"), "body": _message_body(p)}
    if p.get("to"):
        draft["toRecipients"] = parse_recipients(p["to"])
    return draft


def build_file_attachment(p: Dict[str, Any]) -> Dict[str, Any]:
    attachment = {
        "@odata.type": "#microsoft.graph.fileAttachment",
        "name": p.get("name"),
        "contentBytes": p.get("contentBytes"),
    }
    if p.get("contentType"):
        attachment["contentType"] = p["contentType"]
    return attachment


def register(registry: OverrideRegistry) -> None:
    # ── Read ──────────────────────────────────────────────────────────────
    registry.register("list-mail-messages", OverrideRecord(
        description=(
            "List emails from your mailbox, a mail folder, or a shared mailbox. "
            "Can search and filter by sender, subject, or read status."
        ),
        schema={
            "search": text("Search text to find in emails"),
            "from": text("Filter by sender email address"),
            "subject": text("Filter by subject text"),
            "unreadOnly": flag("Only return unread emails"),
            "count": integer("Number of emails to return (default: 10)"),
            "folderId": text("Mail folder ID or well-known name (inbox, sentitems, drafts). Use list-mail-folders"),
            "userId": USER_ID,
        },
        query_transform=build_mail_query,
        path_transform=mail_list_path,
    ))

    registry.register("get-mail-message", OverrideRecord(
        description=(
            "Get a specific email by its message ID. Returns full email details "
            "including body, recipients, and attachments."
        ),
        schema={"userId": USER_ID},
        path_transform=user_scoped_path,
    ))

    registry.register("list-mail-folders", OverrideRecord(
        description="List your mail folders (inbox, sent items, drafts, etc.). Returns folder names and IDs.",
    ))

    registry.register("list-mail-attachments", OverrideRecord(
        description="List all attachments on a specific email. Provide the message-id.",
    ))

    registry.register("get-mail-attachment", OverrideRecord(
        description="Get a specific attachment from an email. Provide message-id and attachment-id.",
    ))

    # ── Write ─────────────────────────────────────────────────────────────
    registry.register("send-mail", OverrideRecord(
        description="Send an email, from your mailbox or a shared mailbox. Provide recipients, subject, and content.",
        schema={
            "to": text("Comma-separated recipient email addresses", required=True),
            "subject": text("Email subject line", required=True),
            "content": text("Email body content", required=True),
            "cc": text("Comma-separated CC email addresses"),
            "bcc": text("Comma-separated BCC email addresses"),
            "isHtml": flag("Set true if content is HTML (default: plain text)"),
            "userId": USER_ID,
        },
        body_transform=build_send_mail,
        path_transform=user_scoped_path,
    ))

    registry.register("create-draft-email", OverrideRecord(
        description="Create a draft email that can be edited and sent later.",
        schema={
            "subject": text("Email subject line", required=True),
            "content": text("Email body content", required=True),
            "to": text("Comma-separated recipient email addresses"),
            "isHtml": flag("Set true if content is HTML (default: plain text)"),
        },
        body_transform=build_draft,
    ))

    registry.register("delete-mail-message", OverrideRecord(
        description="Delete an email by its message ID. The email is moved to Deleted Items.",
    ))

    registry.register("move-mail-message", OverrideRecord(
        description=(
            "Move an email to a folder. Use list-mail-folders to find folder IDs. "
            'Common names: "inbox", "drafts", "deleteditems", "sentitems".'
        ),
        schema={"destinationId": text("Destination folder ID or well-known name", required=True)},
        body_transform=lambda p: {"destinationId": p.get("destinationId")},
    ))

    registry.register("add-mail-attachment", OverrideRecord(
        description="Add a file attachment to a draft email message.",
        schema={
            "name": text('File name, e.g. "report.pdf"', required=True),
            "contentBytes": text("Base64-encoded file content", required=True),
            "contentType": text('MIME type, e.g. "application/pdf"'),
        },
        body_transform=build_file_attachment,
    ))

    registry.register("delete-mail-attachment", OverrideRecord(
        description="Delete an attachment from an email. Provide message-id and attachment-id.",
    ))
