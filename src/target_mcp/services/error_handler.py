"""Error types raised across the Adobe Target MCP server.

Every error carries a human-readable message plus a short error code so the
dispatcher can turn any failure into an error-flagged tool result without
leaking exception types over the protocol boundary.
"""

from typing import Dict, Any, Optional

CREDENTIALS_MISSING_MESSAGE = (
    "Adobe Target API credentials not configured. Please set TARGET_TENANT_ID, "
    "TARGET_API_KEY, and TARGET_ACCESS_TOKEN environment variables."
)


class TargetMCPError(Exception):
    """Base exception class for Adobe Target MCP errors."""
    def __init__(self, message: str, error_code: str = "TARGET_MCP_ERROR", details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(TargetMCPError):
    """Exception for configuration-related errors."""
    def __init__(self, message: str = CREDENTIALS_MISSING_MESSAGE, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFIG_ERROR", details)


class TargetAPIError(TargetMCPError):
    """Exception for non-2xx responses from the Admin API."""
    def __init__(self, status_code: int, body: Any, details: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.body = body
        rendered = body if isinstance(body, str) else _compact_json(body)
        super().__init__(f"API Error ({status_code}): {rendered}", "API_ERROR", details)


class NetworkError(TargetMCPError):
    """Exception for transport-level failures (DNS, TLS, resets)."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "NETWORK_ERROR", details)


class ResponseParseError(TargetMCPError):
    """Exception for response bodies that are not valid JSON."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "PARSE_ERROR", details)


class UnknownToolError(TargetMCPError):
    """Exception for calls to a tool name nobody registered."""
    def __init__(self, name: str):
        self.tool_name = name
        super().__init__(f"Unknown tool: {name}", "UNKNOWN_TOOL", {"tool": name})


class InvalidArgumentsError(TargetMCPError):
    """Exception for tool arguments that fail validation."""
    def __init__(self, name: str, reason: str, details: Optional[Dict[str, Any]] = None):
        self.tool_name = name
        super().__init__(f"Invalid arguments for tool {name}: {reason}", "INVALID_ARGUMENTS", details)


class DuplicateToolError(TargetMCPError):
    """Exception for two tool definitions sharing one name."""
    def __init__(self, name: str, first_category: str, second_category: str):
        super().__init__(
            f"Tool '{name}' is defined in both '{first_category}' and '{second_category}'",
            "DUPLICATE_TOOL",
            {"tool": name, "categories": [first_category, second_category]},
        )


class TemplateError(TargetMCPError):
    """Exception for template resource errors."""
    def __init__(self, message: str, error_code: str = "TEMPLATE_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class InvalidTemplateURIError(TemplateError):
    """Exception for resource URIs outside the template:// scheme."""
    def __init__(self, uri: str):
        super().__init__(f"Invalid template URI: {uri}", "INVALID_TEMPLATE_URI", {"uri": uri})


class TemplateNotFoundError(TemplateError):
    """Exception for well-formed template URIs with no backing file."""
    def __init__(self, uri: str):
        super().__init__(f"Template not found: {uri}", "TEMPLATE_NOT_FOUND", {"uri": uri})


def _compact_json(value: Any) -> str:
    import json

    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
