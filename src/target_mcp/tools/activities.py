"""Activity tools: list, read, create, update and change state."""

from typing import Any, Dict, Literal, Optional

from pydantic import Field

from ..models.tool import ToolArguments, define_tool
from ..services.context import ExecutionContext
from ..services.defaults import apply_activity_defaults
from .common import with_query


class ListActivitiesArguments(ToolArguments):
    limit: Optional[int] = Field(default=None, description="Maximum number of activities to return")
    offset: Optional[int] = Field(default=None, description="Number of activities to skip")
    sort_by: Optional[str] = Field(
        default=None, alias="sortBy", description='Field to sort by (e.g., "id", "name", "state")'
    )


class ActivityIdArguments(ToolArguments):
    id: int = Field(..., description="Activity ID")


class CreateABActivityArguments(ToolArguments):
    name: str = Field(..., description="Activity name")
    activity: Dict[str, Any] = Field(
        ...,
        description=(
            "Full A/B Test activity definition with locations, experiences, metrics and options. "
            "Missing priority, workspace, locations, metrics and entry constraint fields are filled from configured defaults."
        ),
    )


class UpdateABActivityArguments(ToolArguments):
    id: int = Field(..., description="Activity ID")
    activity: Dict[str, Any] = Field(
        ..., description="Complete updated activity definition (PUT - replaces the existing definition)"
    )


class UpdateActivityStateArguments(ToolArguments):
    id: int = Field(..., description="Activity ID")
    state: Literal["approved", "deactivated", "saved"] = Field(
        ..., description='New state - "approved" (Live), "deactivated" (Inactive), or "saved"'
    )


async def list_activities(args: ListActivitiesArguments, context: ExecutionContext) -> Any:
    path = with_query("/target/activities", limit=args.limit, offset=args.offset, sortBy=args.sort_by)
    return await context.request("GET", path, api_version="v3")


async def get_ab_activity(args: ActivityIdArguments, context: ExecutionContext) -> Any:
    return await context.request("GET", f"/target/activities/ab/{args.id}", api_version="v3")


async def create_ab_activity(args: CreateABActivityArguments, context: ExecutionContext) -> Any:
    activity = dict(args.activity)
    activity.setdefault("name", args.name)
    payload = apply_activity_defaults(activity, context.config)
    return await context.request("POST", "/target/activities/ab", payload, api_version="v3")


async def update_ab_activity(args: UpdateABActivityArguments, context: ExecutionContext) -> Any:
    payload = apply_activity_defaults(args.activity, context.config)
    return await context.request("PUT", f"/target/activities/ab/{args.id}", payload, api_version="v3")


async def update_activity_state(args: UpdateActivityStateArguments, context: ExecutionContext) -> Any:
    return await context.request("PUT", f"/target/activities/{args.id}/state", {"state": args.state})


TOOLS = [
    define_tool(
        "listActivities",
        "List all Target activities with optional filtering and sorting",
        list_activities,
        ListActivitiesArguments,
    ),
    define_tool(
        "getABActivity",
        "Get details of a specific A/B Test activity",
        get_ab_activity,
        ActivityIdArguments,
    ),
    define_tool(
        "createABActivity",
        (
            "Create a new A/B Test activity. Activities created through the Admin API cannot be edited "
            "in the Target UI; prefer createOffer for normal workflows. Create in state \"saved\" and "
            "activate later with updateActivityState."
        ),
        create_ab_activity,
        CreateABActivityArguments,
    ),
    define_tool(
        "updateABActivity",
        "Update an existing A/B Test activity definition. Missing fields are filled from configured defaults.",
        update_ab_activity,
        UpdateABActivityArguments,
    ),
    define_tool(
        "updateActivityState",
        "Change the state of an activity (approve, deactivate or save as draft)",
        update_activity_state,
        UpdateActivityStateArguments,
    ),
]
