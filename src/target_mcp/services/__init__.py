# Services package
# Request gateway, activity defaults, tool registry/dispatch and templates

from .context import ExecutionContext, ScratchFiles
from .dispatcher import ToolDispatcher
from .registry import ToolRegistry
from .target_client import make_target_request
from .templates import TemplateStore

__all__ = [
    "ExecutionContext",
    "ScratchFiles",
    "ToolDispatcher",
    "ToolRegistry",
    "make_target_request",
    "TemplateStore",
]
