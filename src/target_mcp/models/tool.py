# Tool domain models
# Descriptors in MCP protocol format plus the definitions the registry holds

from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ToolArguments(BaseModel):
    """Base class for per-tool argument models.

    Field aliases carry the camelCase names the Admin API and the advertised
    input schemas use; unknown keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def input_schema(cls) -> dict[str, Any]:
        """JSON Schema advertised to the agent for this argument model."""
        schema = cls.model_json_schema(by_alias=True)
        schema.pop("title", None)
        for prop in schema.get("properties", {}).values():
            prop.pop("title", None)
        schema.setdefault("properties", {})
        return schema


class EmptyArguments(ToolArguments):
    """Arguments for tools that take none."""


# (arguments, context) -> JSON-serializable result
Handler = Callable[..., Awaitable[Any]]


class ToolDescriptor(BaseModel):
    """Tool definition in MCP protocol format."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Tool name in MCP format")
    description: str = Field(..., description="Tool description for LLM consumption")
    inputSchema: dict[str, Any] = Field(
        ..., description="JSON Schema for tool inputs"
    )  # noqa: N815

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure name is not blank."""
        if not v.strip():
            raise ValueError("Tool name cannot be empty")
        return v


class ToolDefinition(BaseModel):
    """A registered tool: descriptor, argument model and handler."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    descriptor: ToolDescriptor
    arguments: type[ToolArguments] = EmptyArguments
    handler: Handler
    category: str = ""

    @property
    def name(self) -> str:
        return self.descriptor.name


def define_tool(
    name: str,
    description: str,
    handler: Handler,
    arguments: type[ToolArguments] = EmptyArguments,
) -> ToolDefinition:
    """Build a ToolDefinition whose input schema comes from its argument model."""
    return ToolDefinition(
        descriptor=ToolDescriptor(
            name=name,
            description=description,
            inputSchema=arguments.input_schema(),
        ),
        arguments=arguments,
        handler=handler,
    )
