"""
To-Do and Planner overrides
할 일 목록과 Planner 작업 도구 정의
"""

from typing import Any, Dict

from ..graph_types import OverrideRecord
from ..odata_query import FilterBuilder
from ..override_registry import OverrideRegistry
from .common import choice, due_date_time, integer, split_csv, text, top

TODO_STATUSES = ("notStarted", "inProgress", "completed", "waitingOnOthers", "deferred")
IMPORTANCE = ("low", "normal", "high")


def build_todo_query(p: Dict[str, Any]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if p.get("status"):
        params["$filter"] = FilterBuilder().eq("status", p["status"]).build()
    params["$top"] = top(p, 50)
    return params


def _notes(notes: str) -> Dict[str, str]:
    return {"content": notes, "contentType": "text"}


def build_todo_task(p: Dict[str, Any]) -> Dict[str, Any]:
    task: Dict[str, Any] = {"title": p.get("title")}
    if p.get("dueDate"):
        task["dueDateTime"] = due_date_time(p["dueDate"])
    if p.get("notes"):
        task["body"] = _notes(p["notes"])
    if p.get("importance"):
        task["importance"] = p["importance"]
    return task


def build_todo_update(p: Dict[str, Any]) -> Dict[str, Any]:
    changes: Dict[str, Any] = {}
    if p.get("title"):
        changes["title"] = p["title"]
    if p.get("status"):
        changes["status"] = p["status"]
    if p.get("dueDate"):
        changes["dueDateTime"] = due_date_time(p["dueDate"])
    if p.get("importance"):
        changes["importance"] = p["importance"]
    if p.get("notes"):
        changes["body"] = _notes(p["notes"])
    return changes


def build_planner_task(p: Dict[str, Any]) -> Dict[str, Any]:
    task: Dict[str, Any] = {"planId": p.get("planId"), "title": p.get("title")}
    if p.get("bucketId"):
        task["bucketId"] = p["bucketId"]
    if p.get("dueDate"):
        task["dueDateTime"] = p["dueDate"]
    if p.get("assignedTo"):
        task["assignments"] = {
            user_id: {"@odata.type": "#microsoft.graph.plannerAssignment", "orderHint": " !"}
            for user_id in split_csv(p["assignedTo"])
        }
    return task


def build_planner_update(p: Dict[str, Any]) -> Dict[str, Any]:
    # Keys present in p were supplied by the caller; an empty dueDate clears it
    changes: Dict[str, Any] = {}
    if p.get("title"):
        changes["title"] = p["title"]
    if p.get("percentComplete") is not None:
        changes["percentComplete"] = p["percentComplete"]
    if "dueDate" in p:
        changes["dueDateTime"] = p["dueDate"] or None
    if p.get("priority") is not None:
        changes["priority"] = p["priority"]
    return changes


def register(registry: OverrideRegistry) -> None:
    # ── To-Do ─────────────────────────────────────────────────────────────
    registry.register("list-todo-task-lists", OverrideRecord(
        description="List your Microsoft To-Do task lists. Returns list names and IDs.",
    ))

    registry.register("list-todo-tasks", OverrideRecord(
        description="List tasks in a To-Do list. Use list-todo-task-lists to get the list ID.",
        schema={
            "status": choice(TODO_STATUSES, "Only return tasks with this status"),
            "count": integer("Number of tasks to return (default: 50)"),
        },
        query_transform=build_todo_query,
    ))

    registry.register("get-todo-task", OverrideRecord(
        description="Get a specific To-Do task by list ID and task ID.",
    ))

    registry.register("create-todo-task", OverrideRecord(
        description="Create a To-Do task. Requires a title. Use list-todo-task-lists to get the task list ID.",
        schema={
            "title": text("Task title", required=True),
            "dueDate": text('Due date in YYYY-MM-DD format, e.g. "2025-03-15"'),
            "notes": text("Task notes/details"),
            "importance": choice(IMPORTANCE, "Task importance"),
        },
        body_transform=build_todo_task,
    ))

    registry.register("update-todo-task", OverrideRecord(
        description="Update a To-Do task. Only provide the fields you want to change.",
        schema={
            "title": text("New task title"),
            "status": choice(TODO_STATUSES, "Task status"),
            "dueDate": text("Due date in YYYY-MM-DD format"),
            "importance": choice(IMPORTANCE, "Task importance"),
            "notes": text("Task notes/details"),
        },
        body_transform=build_todo_update,
    ))

    registry.register("delete-todo-task", OverrideRecord(
        description="Delete a To-Do task by list ID and task ID.",
    ))

    # ── Planner ───────────────────────────────────────────────────────────
    registry.register("list-planner-tasks", OverrideRecord(
        description="List Planner tasks assigned to you across all plans.",
    ))

    registry.register("get-planner-plan", OverrideRecord(
        description="Get a Planner plan by its plan ID.",
    ))

    registry.register("list-plan-tasks", OverrideRecord(
        description="List all tasks in a Planner plan.",
    ))

    registry.register("get-planner-task", OverrideRecord(
        description="Get a Planner task by its task ID. The response includes the ETag needed for updates.",
    ))

    registry.register("create-planner-task", OverrideRecord(
        description=(
            "Create a Planner task. Requires planId and title. "
            "Use list-planner-tasks or get-planner-plan to find the planId."
        ),
        schema={
            "planId": text("Plan ID (from list-planner-tasks or get-planner-plan)", required=True),
            "title": text("Task title", required=True),
            "bucketId": text("Bucket ID to place the task in"),
            "dueDate": text('Due date in ISO 8601 format, e.g. "2025-03-15T00:00:00Z"'),
            "assignedTo": text("Comma-separated user IDs to assign the task to"),
        },
        body_transform=build_planner_task,
    ))

    registry.register("update-planner-task", OverrideRecord(
        description=(
            "Update a Planner task. Only provide the fields you want to change. "
            "Requires the task ETag as If-Match (from get-planner-task)."
        ),
        schema={
            "title": text("New task title"),
            "percentComplete": integer("Percentage complete (0-100)"),
            "dueDate": text("Due date in ISO 8601 format, or empty to clear"),
            "priority": integer("Priority: 0=urgent, 1=important, 2=medium, 5=low"),
        },
        body_transform=build_planner_update,
    ))

    registry.register("update-planner-task-details", OverrideRecord(
        description="Update the description of a Planner task. Requires the details ETag as If-Match.",
        schema={"description": text("Task description/notes", required=True)},
        body_transform=lambda p: {"description": p.get("description")},
    ))
