"""
SharePoint and Microsoft Search overrides
사이트, 목록 항목, 통합 검색 도구 정의
"""

from typing import Any, Dict

from ..graph_types import OverrideRecord
from ..odata_query import search_phrase
from ..override_registry import OverrideRegistry
from .common import integer, split_csv, text, top


def build_site_search_query(p: Dict[str, Any]) -> Dict[str, str]:
    return {"search": p["search"]} if p.get("search") else {}


def build_list_items_query(p: Dict[str, Any]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if p.get("search"):
        params["$search"] = search_phrase(p["search"])
    params["$top"] = top(p, 50)
    params["$expand"] = "fields"
    return params


def build_search_request(p: Dict[str, Any]) -> Dict[str, Any]:
    request: Dict[str, Any] = {
        "entityTypes": split_csv(p.get("entityTypes")),
        "query": {"queryString": p.get("query")},
    }
    if p.get("size"):
        request["size"] = p["size"]
    return {"requests": [request]}


def register(registry: OverrideRegistry) -> None:
    # ── Sites ─────────────────────────────────────────────────────────────
    registry.register("search-sharepoint-sites", OverrideRecord(
        description="Search SharePoint sites by keyword. Returns site names, URLs, and IDs.",
        schema={"search": text("Keyword to search site names and descriptions", required=True)},
        query_transform=build_site_search_query,
    ))

    registry.register("get-sharepoint-site", OverrideRecord(
        description='Get a SharePoint site by ID. Use "root" for the organization root site.',
    ))

    registry.register("get-sharepoint-site-by-path", OverrideRecord(
        description='Get a SharePoint site by its server-relative path, e.g. "/sites/marketing".',
    ))

    registry.register("get-sharepoint-sites-delta", OverrideRecord(
        description="Get SharePoint sites changed since the last sync.",
    ))

    registry.register("list-sharepoint-site-drives", OverrideRecord(
        description="List the document libraries (drives) of a SharePoint site.",
    ))

    registry.register("get-sharepoint-site-drive-by-id", OverrideRecord(
        description="Get a document library of a SharePoint site by drive ID.",
    ))

    registry.register("list-sharepoint-site-items", OverrideRecord(
        description="List the items of a SharePoint site.",
    ))

    registry.register("get-sharepoint-site-item", OverrideRecord(
        description="Get an item of a SharePoint site by item ID.",
    ))

    registry.register("list-sharepoint-site-lists", OverrideRecord(
        description="List the lists of a SharePoint site. Returns list names and IDs.",
    ))

    registry.register("get-sharepoint-site-list", OverrideRecord(
        description="Get a SharePoint list by site ID and list ID.",
    ))

    # ── List items ────────────────────────────────────────────────────────
    registry.register("list-sharepoint-site-list-items", OverrideRecord(
        description="List the items of a SharePoint list, with their column values.",
        schema={
            "search": text("Search text to find in list items"),
            "count": integer("Number of items to return (default: 50)"),
        },
        query_transform=build_list_items_query,
    ))

    registry.register("get-sharepoint-site-list-item", OverrideRecord(
        description="Get a SharePoint list item by site ID, list ID, and item ID.",
    ))

    # ── Microsoft Search ──────────────────────────────────────────────────
    registry.register("search-query", OverrideRecord(
        description=(
            "Search across Microsoft 365: emails, calendar, files, SharePoint, Teams. "
            "Provide a query and what to search."
        ),
        schema={
            "query": text('Search text, e.g. "budget report", "from:user@example.com"', required=True),
            "entityTypes": text(
                'Comma-separated types to search: "message" (email), "event" (calendar), '
                '"driveItem" (files), "chatMessage" (Teams), "site" (SharePoint), "person"',
                required=True,
            ),
            "size": integer("Number of results (default: 25)"),
        },
        body_transform=build_search_request,
    ))
