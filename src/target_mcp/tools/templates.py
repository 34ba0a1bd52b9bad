"""Template discovery tool pointing the agent at the template resources."""

from typing import Any, Dict

from ..models.tool import EmptyArguments, define_tool
from ..services.context import ExecutionContext
from ..services.templates import template_uri


async def list_templates(args: EmptyArguments, context: ExecutionContext) -> Dict[str, Any]:
    store = context.templates
    templates = store.templates
    examples = [template_uri(kind, names[0]) for kind, names in templates.items() if names]

    return {
        "message": "Templates are available as MCP resources!",
        "instructions": "\n".join([
            "1. Templates are exposed as MCP resources with URIs like:",
            *(f"   - {uri}" for uri in examples),
            "",
            "2. To see all available templates use the MCP 'List Resources' feature (not a tool call)",
            "",
            "3. To read a template use the MCP 'Read Resource' feature with the template URI",
        ]),
        "templates": templates,
        "totalTemplates": store.total,
        "htmlTemplates": len(templates["html"]),
        "jsonTemplates": len(templates["json"]),
    }


TOOLS = [
    define_tool(
        "listTemplates",
        "Explain how to browse the HTML and JSON offer templates exposed as MCP resources",
        list_templates,
    ),
]
