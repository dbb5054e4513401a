"""
Calendar overrides
일정 조회, 생성, 응답 도구의 schema와 요청 변환
"""

from typing import Any, Dict

from ..graph_types import OverrideRecord
from ..odata_query import FilterBuilder
from ..override_registry import OverrideRegistry
from .common import flag, integer, parse_recipients, text, top

DEFAULT_EVENT_SELECT = "id,subject,start,end,location,organizer,attendees,isOnlineMeeting,onlineMeeting,bodyPreview"


def build_event_query(p: Dict[str, Any]) -> Dict[str, str]:
    """Date-range filter for list-calendar-events"""
    params: Dict[str, str] = {}

    filters = FilterBuilder()
    if p.get("startDate"):
        filters.ge("start/dateTime", f"{p['startDate']}T00:00:00Z")
    if p.get("endDate"):
        filters.le("end/dateTime", f"{p['endDate']}T23:59:59Z")
    filter_query = filters.build()
    if filter_query:
        params["$filter"] = filter_query

    params["$top"] = top(p, 25)
    params["$orderby"] = "start/dateTime"
    params["$select"] = DEFAULT_EVENT_SELECT
    return params


def build_calendar_view_query(p: Dict[str, Any]) -> Dict[str, str]:
    return {
        "startDateTime": p.get("startDateTime"),
        "endDateTime": p.get("endDateTime"),
        "$top": top(p, 50),
        "$orderby": "start/dateTime",
        "$select": DEFAULT_EVENT_SELECT,
    }


def _when(date_time: str, time_zone: str) -> Dict[str, str]:
    return {"dateTime": date_time, "timeZone": time_zone or "UTC"}


def build_new_event(p: Dict[str, Any]) -> Dict[str, Any]:
    event: Dict[str, Any] = {
        "subject": p.get("subject"),
        "start": _when(p.get("startDateTime"), p.get("timeZone")),
        "end": _when(p.get("endDateTime"), p.get("timeZone")),
    }
    if p.get("location"):
        event["location"] = {"displayName": p["location"]}
    if p.get("attendees"):
        event["attendees"] = [
            {"emailAddress": r["emailAddress"], "type": "required"}
            for r in parse_recipients(p["attendees"])
        ]
    if p.get("body"):
        event["body"] = {"contentType": "Text", "content": p["body"]}
    if p.get("isOnlineMeeting"):
        event["isOnlineMeeting"] = True
        event["onlineMeetingProvider"] = "teamsForBusiness"
    return event


def build_event_update(p: Dict[str, Any]) -> Dict[str, Any]:
    changes: Dict[str, Any] = {}
    if p.get("subject"):
        changes["subject"] = p["subject"]
    if p.get("startDateTime"):
        changes["start"] = _when(p["startDateTime"], p.get("timeZone"))
    if p.get("endDateTime"):
        changes["end"] = _when(p["endDateTime"], p.get("timeZone"))
    if p.get("location"):
        changes["location"] = {"displayName": p["location"]}
    if p.get("body"):
        changes["body"] = {"contentType": "Text", "content": p["body"]}
    return changes


def register(registry: OverrideRegistry) -> None:
    registry.register("list-calendar-events", OverrideRecord(
        description=(
            "List calendar events, optionally within a date range. "
            'Dates use YYYY-MM-DD format, e.g. "2025-03-01".'
        ),
        schema={
            "startDate": text("Only events starting on or after this date (YYYY-MM-DD)"),
            "endDate": text("Only events ending on or before this date (YYYY-MM-DD)"),
            "count": integer("Number of events to return (default: 25)"),
        },
        query_transform=build_event_query,
    ))

    registry.register("get-calendar-view", OverrideRecord(
        description=(
            "Get calendar events in a time window, with recurring events expanded. "
            'Provide ISO 8601 start and end, e.g. "2025-03-01T00:00:00".'
        ),
        schema={
            "startDateTime": text("Window start in ISO 8601", required=True),
            "endDateTime": text("Window end in ISO 8601", required=True),
            "count": integer("Number of events to return (default: 50)"),
        },
        query_transform=build_calendar_view_query,
    ))

    registry.register("get-calendar-event", OverrideRecord(
        description="Get a specific calendar event by its event ID, with attendees and body.",
    ))

    registry.register("list-calendars", OverrideRecord(
        description="List your calendars. Returns calendar names, IDs, and owners.",
    ))

    registry.register("create-calendar-event", OverrideRecord(
        description=(
            "Create a calendar event. Provide subject, start/end datetimes. "
            'Dates should be ISO 8601 format like "2025-03-15T09:00:00".'
        ),
        schema={
            "subject": text("Event title", required=True),
            "startDateTime": text('Start date/time in ISO 8601, e.g. "2025-03-15T09:00:00"', required=True),
            "endDateTime": text('End date/time in ISO 8601, e.g. "2025-03-15T10:00:00"', required=True),
            "timeZone": text('IANA time zone, e.g. "America/New_York" (default: "UTC")'),
            "location": text("Location name"),
            "attendees": text("Comma-separated attendee email addresses"),
            "body": text("Event description/notes"),
            "isOnlineMeeting": flag("Create as Teams online meeting"),
        },
        body_transform=build_new_event,
    ))

    registry.register("update-calendar-event", OverrideRecord(
        description="Update a calendar event. Only provide the fields you want to change.",
        schema={
            "subject": text("New event title"),
            "startDateTime": text("New start date/time in ISO 8601"),
            "endDateTime": text("New end date/time in ISO 8601"),
            "timeZone": text('IANA time zone (default: "UTC")'),
            "location": text("New location name"),
            "body": text("New event description"),
        },
        body_transform=build_event_update,
    ))

    registry.register("delete-calendar-event", OverrideRecord(
        description="Delete a calendar event by its event ID.",
    ))
