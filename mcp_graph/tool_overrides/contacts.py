"""
Contacts and directory overrides
연락처 및 조직 디렉터리 (사용자, 그룹) 도구 정의
"""

from typing import Any, Dict

from ..graph_types import OverrideRecord
from ..odata_query import search_phrase
from ..override_registry import OverrideRegistry
from .common import integer, text, top

DEFAULT_USER_SELECT = "id,displayName,mail,userPrincipalName,jobTitle,department,officeLocation"

CONTACT_FIELDS = ("givenName", "surname", "email", "phone", "company", "jobTitle")


def build_contact_query(p: Dict[str, Any]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if p.get("search"):
        params["$search"] = search_phrase(p["search"])
    params["$top"] = top(p, 50)
    return params


def build_user_query(p: Dict[str, Any]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if p.get("search"):
        params["$search"] = search_phrase(p["search"])
    params["$top"] = top(p, 25)
    params["$select"] = DEFAULT_USER_SELECT
    return params


def build_contact(p: Dict[str, Any]) -> Dict[str, Any]:
    """Contact fields -> Graph contact; only provided fields are written"""
    contact: Dict[str, Any] = {}
    if p.get("givenName"):
        contact["givenName"] = p["givenName"]
    if p.get("surname"):
        contact["surname"] = p["surname"]
    if p.get("email"):
        contact["emailAddresses"] = [{"address": p["email"], "name": ""}]
    if p.get("phone"):
        contact["businessPhones"] = [p["phone"]]
    if p.get("company"):
        contact["companyName"] = p["company"]
    if p.get("jobTitle"):
        contact["jobTitle"] = p["jobTitle"]
    return contact


def _contact_schema(first_name_required: bool) -> Dict[str, Any]:
    return {
        "givenName": text("First name", required=first_name_required),
        "surname": text("Last name"),
        "email": text("Email address"),
        "phone": text("Phone number"),
        "company": text("Company name"),
        "jobTitle": text("Job title"),
    }


def register(registry: OverrideRegistry) -> None:
    registry.register("list-outlook-contacts", OverrideRecord(
        description="List your Outlook contacts, optionally searching by name or email.",
        schema={
            "search": text("Search text to find in contacts"),
            "count": integer("Number of contacts to return (default: 50)"),
        },
        query_transform=build_contact_query,
    ))

    registry.register("get-outlook-contact", OverrideRecord(
        description="Get a specific Outlook contact by its contact ID.",
    ))

    registry.register("create-outlook-contact", OverrideRecord(
        description="Create an Outlook contact.",
        schema=_contact_schema(first_name_required=True),
        body_transform=build_contact,
    ))

    registry.register("update-outlook-contact", OverrideRecord(
        description="Update an Outlook contact. Only provide the fields you want to change.",
        schema=_contact_schema(first_name_required=False),
        body_transform=build_contact,
    ))

    registry.register("delete-outlook-contact", OverrideRecord(
        description="Delete an Outlook contact by its contact ID.",
    ))

    registry.register("get-current-user", OverrideRecord(
        description="Get the profile of the signed-in user: name, email, job title, and IDs.",
    ))

    registry.register("list-users", OverrideRecord(
        description="Search the organization directory for users by name or email. Work accounts only.",
        schema={
            "search": text("Name or email text to search for"),
            "count": integer("Number of users to return (default: 25)"),
        },
        query_transform=build_user_query,
    ))
