"""Routes tool calls to their handlers and shapes the MCP results."""

import json
import logging
from typing import Any, Optional

from mcp import types
from pydantic import ValidationError

from ..models.tool import ToolDescriptor
from .context import ExecutionContext
from .error_handler import InvalidArgumentsError, UnknownToolError
from .registry import ToolRegistry

logger = logging.getLogger(__name__)


def success_result(value: Any) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=json.dumps(value, indent=2, ensure_ascii=False))]
    )


def error_result(message: str) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=f"Error: {message}")],
        isError=True,
    )


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


class ToolDispatcher:
    """Stateless router from tool name to handler.

    The registry and context are shared read-only across calls; each call runs
    its handler exactly once with no retries, timeouts or locking.
    """

    def __init__(self, registry: ToolRegistry, context: ExecutionContext):
        self.registry = registry
        self.context = context

    def list_tools(self) -> list[ToolDescriptor]:
        return self.registry.descriptors()

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]] = None) -> types.CallToolResult:
        """Execute a tool and convert its outcome into a CallToolResult.

        Never raises: unknown tools, invalid arguments and handler failures all
        come back as error-flagged results carrying the error message.
        """
        try:
            definition = self.registry.get(name)
            if definition is None:
                raise UnknownToolError(name)

            try:
                parsed = definition.arguments.model_validate(arguments or {})
            except ValidationError as e:
                raise InvalidArgumentsError(name, _describe_validation_error(e)) from e

            logger.debug(f"Calling tool {name}")
            result = await definition.handler(parsed, self.context)
            return success_result(result)
        except Exception as e:
            logger.warning(f"Tool {name} failed: {type(e).__name__}: {e}")
            return error_result(str(e))
