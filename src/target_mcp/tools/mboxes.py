"""Mbox tools."""

from typing import Any
from urllib.parse import quote

from pydantic import Field

from ..models.tool import EmptyArguments, ToolArguments, define_tool
from ..services.context import ExecutionContext


class GetMboxArguments(ToolArguments):
    mbox_name: str = Field(
        ..., alias="mboxName", description='The name of the mbox (e.g., "target-global-mbox", "hero-mbox")'
    )


async def list_mboxes(args: EmptyArguments, context: ExecutionContext) -> Any:
    return await context.request("GET", "/target/mboxes", api_version="v1")


async def get_mbox(args: GetMboxArguments, context: ExecutionContext) -> Any:
    return await context.request("GET", f"/target/mbox/{quote(args.mbox_name, safe='')}", api_version="v1")


async def list_mbox_profile_attributes(args: EmptyArguments, context: ExecutionContext) -> Any:
    return await context.request("GET", "/target/profileattributes/mbox", api_version="v1")


TOOLS = [
    define_tool("listMboxes", "List all mboxes seen by Target for this account", list_mboxes),
    define_tool(
        "getMbox",
        "Get details of a specific mbox by name, including location ID, name, and associated audience IDs",
        get_mbox,
        GetMboxArguments,
    ),
    define_tool(
        "listMboxProfileAttributes",
        "List the profile attributes passed through mbox calls",
        list_mbox_profile_attributes,
    ),
]
