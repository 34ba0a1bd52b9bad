"""Property tools."""

from typing import Any

from ..models.tool import EmptyArguments, define_tool
from ..services.context import ExecutionContext


async def list_properties(args: EmptyArguments, context: ExecutionContext) -> Any:
    return await context.request("GET", "/target/properties", api_version="v1")


TOOLS = [
    define_tool("listProperties", "List Target properties (at_property tokens) and their channels", list_properties),
]
