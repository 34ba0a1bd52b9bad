"""Composite tools built from several Admin API calls."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from pydantic import Field, field_validator

from ..models.tool import ToolArguments, define_tool
from ..services.context import ExecutionContext

logger = logging.getLogger(__name__)

BROAD_SELECTORS = ("div", "span", "button", "a", "p", "h1", "h2", "h3")


class CreateActivityFromModificationsArguments(ToolArguments):
    name: str = Field(..., description="Activity name")
    url: str = Field(..., description="URL where the activity should run")
    modifications: str = Field(..., description="JavaScript code for the modifications")
    priority: Optional[int] = Field(default=None, description="Activity priority (0-999), defaults to 5")
    audience_ids: List[int] = Field(
        default_factory=list,
        alias="audienceIds",
        description="Audience IDs to target (see listAudiences). Empty targets All Visitors.",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid URL: {v}")
        return v


def lint_modifications(modifications: str) -> List[str]:
    """Warn about selectors likely to hit more elements than intended."""
    warnings = []
    for selector in BROAD_SELECTORS:
        if f"querySelector('{selector}')" in modifications or f'querySelector("{selector}")' in modifications:
            warnings.append(
                f"WARNING: Very broad selector detected: '{selector}' - this may affect multiple elements"
            )
    if "querySelectorAll" in modifications and "forEach" not in modifications and "[0]" not in modifications:
        warnings.append("WARNING: querySelectorAll used without iteration - this may not modify elements as expected")
    return warnings


async def create_activity_from_modifications(
    args: CreateActivityFromModificationsArguments, context: ExecutionContext
) -> Dict[str, Any]:
    """Create an offer holding the modifications, then an XT activity serving it.

    Not atomic: if the activity request fails, the offer stays created.
    """
    warnings = lint_modifications(args.modifications)
    if warnings:
        logger.warning(f"Validation warnings detected: {warnings}")

    offer_name = f"{args.name} - Modifications"
    offer = await context.request(
        "POST",
        "/target/offers/content",
        {"name": offer_name, "content": f"<script>{args.modifications}</script>"},
        api_version="v2",
    )
    offer_id = offer.get("id")

    activity: Dict[str, Any] = {
        "name": args.name,
        "state": "saved",
        "priority": args.priority if args.priority is not None else context.config.defaults.priority,
        "locations": {
            "mboxes": [
                {
                    "name": "target-global-mbox",
                    "experiences": [
                        {
                            "name": "Experience A",
                            "audienceIds": args.audience_ids,
                            "visitorPercentage": 100,
                            "options": [{"offerId": offer_id}],
                        }
                    ],
                }
            ]
        },
    }
    if context.config.workspace_id:
        activity["workspace"] = context.config.workspace_id

    result = await context.request("POST", "/target/activities/xt", activity, api_version="v3")
    result["offerCreated"] = {"id": offer_id, "name": offer_name}

    if args.audience_ids:
        audience_info = (
            f"Audience targeting: {len(args.audience_ids)} audience(s) assigned "
            f"(IDs: {', '.join(str(i) for i in args.audience_ids)})"
        )
    else:
        audience_info = "Audience targeting: All Visitors (no specific audience assigned)"

    instructions = [
        f'Activity "{args.name}" created successfully in DRAFT mode',
        f"Offer ID: {offer_id}",
        f"Activity ID: {result.get('id')}",
        audience_info,
        "Next steps:",
        "1. Review the activity in Adobe Target UI",
        "2. Verify audience targeting is correct",
        f'3. When ready, use updateActivityState with ID {result.get("id")} and state "approved" to activate',
    ]

    if warnings:
        result["validationWarnings"] = warnings
        instructions = [
            "VALIDATION WARNINGS DETECTED - Review before activating:",
            *(f"  - {warning}" for warning in warnings),
            "",
            *instructions,
        ]

    result["instructions"] = instructions
    return result


TOOLS = [
    define_tool(
        "createActivityFromModifications",
        (
            "Create an Experience Targeting activity in draft state from JavaScript page modifications. "
            "Creates an offer containing the modifications first, then the activity serving it on "
            "target-global-mbox. Not atomic: if the activity step fails, the created offer remains."
        ),
        create_activity_from_modifications,
        CreateActivityFromModificationsArguments,
    ),
]
