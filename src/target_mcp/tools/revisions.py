"""Revision (audit log) tools."""

from typing import Any, Literal, Optional
from urllib.parse import urlencode

from pydantic import Field

from ..models.tool import ToolArguments, define_tool
from ..services.context import ExecutionContext

RevisionResourceType = Literal[
    "activity", "audience", "offer", "profileScript", "property",
    "environment", "responseToken", "host", "authorizedHosts",
]


class GetRevisionsArguments(ToolArguments):
    revision_resource_type: RevisionResourceType = Field(
        ..., alias="revisionResourceType", description="Entity type to fetch revisions for"
    )
    modified_by: str = Field(..., alias="modifiedBy", description="Author's name to filter revisions")
    modified_at: Optional[str] = Field(
        default=None,
        alias="modifiedAt",
        description="Optional modified-after timestamp (ISO-8601). The API defaults to the last day.",
    )


class GetEntityRevisionsArguments(ToolArguments):
    revision_resource_type: RevisionResourceType = Field(
        ..., alias="revisionResourceType", description="Entity type to fetch revisions for"
    )
    id: int = Field(..., description="Entity ID (for authorizedHosts, use client ID)")


async def get_revisions(args: GetRevisionsArguments, context: ExecutionContext) -> Any:
    # modifiedBy is always sent, even when empty
    params = [("modifiedBy", args.modified_by)]
    if args.modified_at:
        params.append(("modifiedAt", args.modified_at))
    path = f"/target/revisions/{args.revision_resource_type}?{urlencode(params)}"
    return await context.request("GET", path, api_version="v1")


async def get_entity_revisions(args: GetEntityRevisionsArguments, context: ExecutionContext) -> Any:
    path = f"/target/revisions/{args.revision_resource_type}/{args.id}"
    return await context.request("GET", path, api_version="v1")


TOOLS = [
    define_tool(
        "getRevisions",
        "Get revisions (audit log) for a resource type, filtered by author and optionally by modified-after timestamp",
        get_revisions,
        GetRevisionsArguments,
    ),
    define_tool(
        "getEntityRevisions",
        (
            "Get all revisions of a specific entity, newest first. Only the latest 100 revisions "
            "are retained per entity."
        ),
        get_entity_revisions,
        GetEntityRevisionsArguments,
    ),
]
