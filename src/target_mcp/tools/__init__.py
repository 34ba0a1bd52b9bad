# Tool categories
# One module per Admin API area, each exposing a TOOLS list

from ..services.registry import ToolRegistry, load_registry

# Matches the Admin API's resource grouping. Categories without a module are
# skipped at load time.
TOOL_CATEGORIES = (
    "activities",
    "atjs",
    "audiences",
    "batch",
    "clients",
    "custom",
    "environments",
    "mboxes",
    "offers",
    "on-device-decisioning",
    "properties",
    "reports",
    "response-tokens",
    "revisions",
    "templates",
)


def load_tools(categories=TOOL_CATEGORIES) -> ToolRegistry:
    """Load every tool definition from the given categories into a new registry."""
    return load_registry(__name__, categories)


__all__ = ["TOOL_CATEGORIES", "load_tools"]
