"""Audience tools."""

from typing import Any, Dict, Optional

from pydantic import Field

from ..models.tool import ToolArguments, define_tool
from ..services.context import ExecutionContext
from .common import with_query


class ListAudiencesArguments(ToolArguments):
    limit: Optional[int] = Field(default=None, description="Maximum number of audiences to return")
    offset: Optional[int] = Field(default=None, description="Number of audiences to skip")


class CreateAudienceArguments(ToolArguments):
    name: str = Field(..., description="Audience name")
    description: Optional[str] = Field(default=None, description="Audience description")
    target_rule: Optional[Dict[str, Any]] = Field(
        default=None, alias="targetRule", description="Audience targeting rules"
    )


async def list_audiences(args: ListAudiencesArguments, context: ExecutionContext) -> Any:
    path = with_query("/target/audiences", limit=args.limit, offset=args.offset)
    return await context.request("GET", path, api_version="v3")


async def create_audience(args: CreateAudienceArguments, context: ExecutionContext) -> Any:
    audience: Dict[str, Any] = {"name": args.name}
    if args.description:
        audience["description"] = args.description
    if args.target_rule:
        audience["targetRule"] = args.target_rule
    return await context.request("POST", "/target/audiences", audience, api_version="v3")


TOOLS = [
    define_tool("listAudiences", "List audiences defined in Target", list_audiences, ListAudiencesArguments),
    define_tool("createAudience", "Create a new audience", create_audience, CreateAudienceArguments),
]
