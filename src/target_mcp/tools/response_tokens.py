"""Response token tools."""

from typing import Any, Dict, Literal, Optional

from pydantic import Field

from ..models.tool import EmptyArguments, ToolArguments, define_tool
from ..services.context import ExecutionContext


class CreateResponseTokenArguments(ToolArguments):
    id: Optional[int] = Field(default=None, description="Response token ID (optional)")
    token: str = Field(
        ..., description='Token identifier (e.g., "experience.id", "profile.scriptName", "geo.city")'
    )
    type: Literal["BUILT_IN", "ACTIVITY", "GEO", "CRS", "MBOX", "SCRIPT"] = Field(..., description="Token type")


async def list_response_tokens(args: EmptyArguments, context: ExecutionContext) -> Any:
    return await context.request("GET", "/target/responsetokens", api_version="v1")


async def create_response_token(args: CreateResponseTokenArguments, context: ExecutionContext) -> Any:
    token: Dict[str, Any] = {"token": args.token, "type": args.type}
    if args.id is not None:
        token["id"] = args.id
    return await context.request("POST", "/target/responsetokens", token, api_version="v1")


TOOLS = [
    define_tool(
        "listResponseTokens",
        "Retrieve list of response tokens, including built-in and custom tokens with their active status",
        list_response_tokens,
    ),
    define_tool(
        "createResponseToken",
        "Create a response token so its value is returned with Target responses",
        create_response_token,
        CreateResponseTokenArguments,
    ),
]
