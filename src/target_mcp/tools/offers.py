"""Offer tools: HTML and JSON offers."""

from typing import Any, Dict, Optional

from pydantic import Field

from ..models.tool import ToolArguments, define_tool
from ..services.context import ExecutionContext
from .common import with_query

_WORKSPACE_DESCRIPTION = (
    "Workspace ID (optional). If not provided, uses the default workspace from config "
    "(TARGET_WORKSPACE_ID) or the account default workspace."
)


class ListOffersArguments(ToolArguments):
    limit: Optional[int] = Field(default=None, description="Maximum number of offers to return")
    offset: Optional[int] = Field(default=None, description="Number of offers to skip")


class OfferIdArguments(ToolArguments):
    id: int = Field(..., description="Offer ID")


class CreateOfferArguments(ToolArguments):
    name: str = Field(..., description="Offer name")
    content: str = Field(
        ...,
        description=(
            "Offer content (HTML/CSS/JavaScript). Wrap JavaScript in <script> tags. "
            "CSS must be injected via JavaScript, not standalone <style> tags."
        ),
    )
    workspace: Optional[str] = Field(default=None, description=_WORKSPACE_DESCRIPTION)


class CreateJsonOfferArguments(ToolArguments):
    name: str = Field(..., description='Offer name (e.g., "Product Recommendations - Summer Sale")')
    content: Dict[str, Any] = Field(
        ..., description="JSON object containing the offer data your application will consume"
    )
    workspace: Optional[str] = Field(default=None, description=_WORKSPACE_DESCRIPTION)


class UpdateOfferArguments(ToolArguments):
    id: int = Field(..., description="Offer ID to update")
    name: str = Field(..., description="Offer name (required by the API even when unchanged)")
    content: Optional[str] = Field(default=None, description="Updated offer content (HTML/CSS/JavaScript)")


def offer_payload(name: str, content: Any, workspace: Optional[str], context: ExecutionContext) -> Dict[str, Any]:
    """Offer create body; an explicit workspace wins over the configured one."""
    payload: Dict[str, Any] = {"name": name, "content": content}
    if workspace:
        payload["workspace"] = workspace
    elif context.config.workspace_id:
        payload["workspace"] = context.config.workspace_id
    return payload


async def list_offers(args: ListOffersArguments, context: ExecutionContext) -> Any:
    path = with_query("/target/offers", limit=args.limit, offset=args.offset)
    return await context.request("GET", path, api_version="v2")


async def get_offer(args: OfferIdArguments, context: ExecutionContext) -> Any:
    return await context.request("GET", f"/target/offers/content/{args.id}", api_version="v1")


async def create_offer(args: CreateOfferArguments, context: ExecutionContext) -> Any:
    payload = offer_payload(args.name, args.content, args.workspace, context)
    return await context.request("POST", "/target/offers/content", payload, api_version="v2")


async def create_json_offer(args: CreateJsonOfferArguments, context: ExecutionContext) -> Any:
    payload = offer_payload(args.name, args.content, args.workspace, context)
    return await context.request("POST", "/target/offers/json", payload, api_version="v2")


async def update_offer(args: UpdateOfferArguments, context: ExecutionContext) -> Any:
    update: Dict[str, Any] = {"name": args.name}
    if args.content:
        update["content"] = args.content
    return await context.request("PUT", f"/target/offers/content/{args.id}", update, api_version="v2")


TOOLS = [
    define_tool("listOffers", "List offers with optional pagination", list_offers, ListOffersArguments),
    define_tool("getOffer", "Get details of a specific HTML offer", get_offer, OfferIdArguments),
    define_tool(
        "createOffer",
        (
            "Create a new offer with HTML/CSS/JavaScript content. Offers created via the API can be "
            "edited in the Target UI, so creating offers and assembling the activity in the UI is the "
            "recommended workflow."
        ),
        create_offer,
        CreateOfferArguments,
    ),
    define_tool(
        "createJsonOffer",
        "Create a new JSON offer delivering structured data (SPAs, mobile apps, headless experiences)",
        create_json_offer,
        CreateJsonOfferArguments,
    ),
    define_tool(
        "updateOffer",
        "Update the name and/or content of an existing HTML offer",
        update_offer,
        UpdateOfferArguments,
    ),
]
