"""AT.js library tools."""

from typing import Any

from ..models.tool import EmptyArguments, define_tool
from ..services.context import ExecutionContext


async def get_atjs_settings(args: EmptyArguments, context: ExecutionContext) -> Any:
    return await context.request("GET", "/target/atjs/settings", api_version="v1")


async def get_atjs_versions(args: EmptyArguments, context: ExecutionContext) -> Any:
    return await context.request("GET", "/target/atjs/versions", api_version="v1")


TOOLS = [
    define_tool(
        "getAtjsSettings",
        (
            "Retrieve AT.js settings including client code, decisioning method, timeout, "
            "global mbox configuration, and other AT.js library settings"
        ),
        get_atjs_settings,
    ),
    define_tool(
        "getAtjsVersions",
        "List the available AT.js library versions",
        get_atjs_versions,
    ),
]
